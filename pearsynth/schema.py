"""Shared schema definitions for synth patches.

This module is the single source of truth for the enumerations, numeric
ranges, tempo-sync rate tokens and modulation target catalogs used by the
parameter model, the update models and the input mapper.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, Literal, get_args

from pydantic import Field

OscillatorType = Literal[
    "sine",
    "saw",
    "triangle",
    "pulse",
    "analog-sine",
    "analog-saw",
    "analog-square",
]
FilterType = Literal["lowpass", "highpass", "bandpass"]
FilterSlope = Literal["6", "12", "24"]
LFOType = Literal["sine", "triangle", "saw", "random"]
LFOMode = Literal["sync", "time"]
PlaybackMode = Literal["monophonic", "polyphonic"]
EnvelopeKind = Literal["main", "filter", "additional"]

# Straight values first, then the dotted variants.
SyncRate = Literal[
    "1/32",
    "1/16",
    "1/8",
    "1/4",
    "1/2",
    "1",
    "1/32.",
    "1/16.",
    "1/8.",
    "1/4.",
    "1/2.",
    "1.",
]
SYNC_RATES: tuple[SyncRate, ...] = get_args(SyncRate)
# Same tokens ordered from shortest to longest note value.
SYNC_RATES_BY_LENGTH: tuple[SyncRate, ...] = (
    "1/32",
    "1/32.",
    "1/16",
    "1/16.",
    "1/8",
    "1/8.",
    "1/4",
    "1/4.",
    "1/2",
    "1/2.",
    "1",
    "1.",
)

OSCILLATOR_COUNT = 4
FILTER_COUNT = 3
LFO_COUNT = 2


@dataclass(frozen=True, slots=True)
class ParamRange:
    """Valid closed interval and input granularity for one numeric parameter."""

    min: float
    max: float
    step: float = 1.0

    @property
    def span(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


BPM_RANGE = ParamRange(50, 200)
UNISON_RANGE = ParamRange(1, 12)
UNISON_DETUNE_RANGE = ParamRange(0, 100)
VELOCITY_RANGE = ParamRange(0, 100)
VOLUME_RANGE = ParamRange(0.0, 1.0, 0.01)
CUTOFF_RANGE = ParamRange(20, 20_000)
ENVELOPE_TIME_RANGE = ParamRange(0, 2000)
SUSTAIN_RANGE = ParamRange(0.0, 1.0, 0.01)
CURVE_SLOPE_RANGE = ParamRange(-1.0, 1.0, 0.01)
LFO_DEPTH_RANGE = ParamRange(0, 100)
LFO_TIME_RATE_RANGE = ParamRange(10, 10_000)

PARAM_RANGES: Mapping[str, ParamRange] = MappingProxyType(
    {
        "bpm": BPM_RANGE,
        "oscillator.unison": UNISON_RANGE,
        "oscillator.unison_detune": UNISON_DETUNE_RANGE,
        "oscillator.velocity_sensitivity": VELOCITY_RANGE,
        "oscillator.volume": VOLUME_RANGE,
        "filter.cutoff": CUTOFF_RANGE,
        "envelope.delay": ENVELOPE_TIME_RANGE,
        "envelope.attack": ENVELOPE_TIME_RANGE,
        "envelope.hold": ENVELOPE_TIME_RANGE,
        "envelope.decay": ENVELOPE_TIME_RANGE,
        "envelope.sustain": SUSTAIN_RANGE,
        "envelope.release": ENVELOPE_TIME_RANGE,
        "envelope.sustain_slope": CURVE_SLOPE_RANGE,
        "envelope.release_slope": CURVE_SLOPE_RANGE,
        "lfo.depth": LFO_DEPTH_RANGE,
        "lfo.rate": LFO_TIME_RATE_RANGE,
    }
)

# Destinations offered by the assignment selectors. The stored key stays
# free-form; these catalogs only describe what the surface lists.
ENVELOPE_TARGETS: Mapping[str, str] = MappingProxyType(
    {
        "osc1.volume": "Oscillator 1 Volume",
        "osc2.volume": "Oscillator 2 Volume",
        "osc3.volume": "Oscillator 3 Volume",
        "osc4.volume": "Oscillator 4 Volume",
        "filter1.cutoff": "Filter 1 Cutoff",
        "filter2.cutoff": "Filter 2 Cutoff",
        "filter3.cutoff": "Filter 3 Cutoff",
        "lfo1.depth": "LFO 1 Depth",
        "lfo2.depth": "LFO 2 Depth",
    }
)
LFO_TARGETS: Mapping[str, str] = MappingProxyType(
    {
        "osc1.volume": "Oscillator 1 Volume",
        "osc2.volume": "Oscillator 2 Volume",
        "osc3.volume": "Oscillator 3 Volume",
        "osc4.volume": "Oscillator 4 Volume",
        "filter1.cutoff": "Filter 1 Cutoff",
        "filter2.cutoff": "Filter 2 Cutoff",
        "filter3.cutoff": "Filter 3 Cutoff",
        "env.attack": "Envelope Attack",
        "env.decay": "Envelope Decay",
        "env.release": "Envelope Release",
    }
)


def describe_target(key: str) -> str:
    """Return a human label for a modulation destination key ("" = unassigned)."""
    if not key:
        return "Unassigned"
    label = ENVELOPE_TARGETS.get(key) or LFO_TARGETS.get(key)
    return label if label is not None else key


# Constrained scalar types shared by the state and update models.
Bpm = Annotated[float, Field(ge=BPM_RANGE.min, le=BPM_RANGE.max)]
UnisonVoices = Annotated[int, Field(ge=UNISON_RANGE.min, le=UNISON_RANGE.max)]
DetuneCents = Annotated[float, Field(ge=UNISON_DETUNE_RANGE.min, le=UNISON_DETUNE_RANGE.max)]
Percent = Annotated[float, Field(ge=0, le=100)]
Level = Annotated[float, Field(ge=0.0, le=1.0)]
CutoffHz = Annotated[float, Field(ge=CUTOFF_RANGE.min, le=CUTOFF_RANGE.max)]
EnvelopeTimeMs = Annotated[float, Field(ge=ENVELOPE_TIME_RANGE.min, le=ENVELOPE_TIME_RANGE.max)]
CurveBias = Annotated[float, Field(ge=CURVE_SLOPE_RANGE.min, le=CURVE_SLOPE_RANGE.max)]
TimeRateMs = Annotated[float, Field(ge=LFO_TIME_RATE_RANGE.min, le=LFO_TIME_RATE_RANGE.max)]
