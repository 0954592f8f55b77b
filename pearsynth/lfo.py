"""LFO waveform preview and rate resolution."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

from .params import LFOParams
from .schema import LFOType, SyncRate

FloatArray: TypeAlias = NDArray[np.float64]

DEFAULT_SAMPLE_COUNT = 100
RANDOM_HOLD_SAMPLES = 10
BEATS_PER_WHOLE_NOTE = 4
DOTTED_MULTIPLIER = 1.5


@dataclass(frozen=True, eq=False)
class LFOWaveform:
    """One cycle: ``sample_count + 1`` phases in [0, 1] and amplitudes in [-1, 1]."""

    phases: FloatArray
    amplitudes: FloatArray

    def points(self) -> Iterator[tuple[float, float]]:
        for phase, amplitude in zip(self.phases, self.amplitudes):
            yield float(phase), float(amplitude)

    def to_canvas(self, width: float, height: float) -> FloatArray:
        """(x, y) pixel pairs around the centre line, peaks at a third of the height."""
        center = height / 2
        ys = center + self.amplitudes * (height / 3)
        return np.column_stack((self.phases * width, ys))


def _stepped_random(count: int, rng: np.random.Generator) -> FloatArray:
    holds = math.ceil(count / RANDOM_HOLD_SAMPLES)
    draws = rng.uniform(-1.0, 1.0, size=holds)
    return np.repeat(draws, RANDOM_HOLD_SAMPLES)[:count]


def waveform_values(
    lfo_type: LFOType,
    phases: FloatArray,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    match lfo_type:
        case "sine":
            return np.sin(phases * 2 * np.pi)
        case "triangle":
            wrapped = np.mod(phases, 1.0)
            return np.where(wrapped < 0.5, wrapped * 4 - 1, 3 - wrapped * 4)
        case "saw":
            return np.mod(phases, 1.0) * 2 - 1
        case "random":
            # New value on every RANDOM_HOLD_SAMPLES-th index, held in between.
            return _stepped_random(phases.size, rng or np.random.default_rng())
        case _:
            raise ValueError(f"Unknown LFO type: {lfo_type!r}")


def generate_lfo_waveform(
    lfo: LFOParams,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    *,
    rng: np.random.Generator | None = None,
) -> LFOWaveform:
    """Sample one cycle of ``lfo``'s shape.

    ``random`` draws fresh values on each call unless a seeded ``rng`` is given.
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")
    phases = np.arange(sample_count + 1, dtype=np.float64) / sample_count
    return LFOWaveform(phases=phases, amplitudes=waveform_values(lfo.type, phases, rng))


def sync_rate_beats(rate: SyncRate) -> float:
    """Length of a sync token in beats: ``"1/4"`` is one beat, ``"1"`` four, ``"."`` x1.5."""
    dotted = rate.endswith(".")
    numerator, _, denominator = rate.rstrip(".").partition("/")
    fraction = int(numerator) / int(denominator or 1)
    beats = BEATS_PER_WHOLE_NOTE * fraction
    return beats * DOTTED_MULTIPLIER if dotted else beats


def lfo_period_ms(lfo: LFOParams, bpm: float) -> float:
    """Cycle length in milliseconds for the LFO's current mode."""
    match lfo.mode:
        case "sync":
            if bpm <= 0:
                raise ValueError(f"bpm must be positive, got {bpm}")
            return sync_rate_beats(lfo.sync_rate) * 60_000 / bpm
        case _:
            return lfo.time_rate_ms


def lfo_rate_hz(lfo: LFOParams, bpm: float) -> float:
    return 1000.0 / lfo_period_ms(lfo, bpm)
