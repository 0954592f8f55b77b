"""Filter magnitude response for display.

Frequencies are sampled on a log axis from 20 Hz to 20 kHz. With
``n = slope / 6`` (1, 2 or 4):

- lowpass:  1 / sqrt(1 + (f/fc)^(2n))
- highpass: sqrt((f/fc)^(2n) / (1 + (f/fc)^(2n)))
- bandpass: sqrt((fc*Q/f)^n / (1 + ((f/fc)^2 - 1)^n)), Q = 1

The bandpass exponent is half the lowpass/highpass one; that difference sets
how steep each kind looks and is kept as is. Magnitudes are clipped to
[0, 1] since the bandpass skirt overshoots below the cutoff at 6 dB/oct.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

from .formatting import format_frequency_label
from .params import FilterParams
from .schema import CUTOFF_RANGE, FilterType

FloatArray: TypeAlias = NDArray[np.float64]

FREQ_MIN = float(CUTOFF_RANGE.min)
FREQ_MAX = float(CUTOFF_RANGE.max)
FREQUENCY_SCALE = math.log10(FREQ_MAX / FREQ_MIN)
AXIS_LABEL_FREQUENCIES = (20, 100, 1000, 10_000, 20_000)
BANDPASS_Q = 1.0
DEFAULT_SAMPLE_COUNT = 256


@dataclass(frozen=True, slots=True)
class FrequencyLabel:
    frequency: float
    position: float
    text: str


@dataclass(frozen=True, eq=False)
class FilterResponse:
    """Sampled response; positions are normalized to [0, 1] along the axis."""

    frequencies: FloatArray
    magnitudes: FloatArray
    cutoff_position: float
    labels: tuple[FrequencyLabel, ...]

    def points(self) -> Iterator[tuple[float, float]]:
        for frequency, magnitude in zip(self.frequencies, self.magnitudes):
            yield float(frequency), float(magnitude)

    def to_canvas(self, width: float, height: float) -> FloatArray:
        """(x, y) pixel pairs, y growing downward from the top edge."""
        xs = np.arange(self.frequencies.size, dtype=np.float64) / self.frequencies.size * width
        ys = height - self.magnitudes * height
        return np.column_stack((xs, ys))


def frequency_to_position(frequency: float) -> float:
    """Normalized position of ``frequency`` on the log axis (20 Hz -> 0, 20 kHz -> 1)."""
    return math.log10(frequency / FREQ_MIN) / FREQUENCY_SCALE


def frequency_axis(sample_count: int) -> FloatArray:
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")
    fraction = np.arange(sample_count, dtype=np.float64) / sample_count
    return FREQ_MIN * np.power(10.0, fraction * FREQUENCY_SCALE)


def magnitude_response(
    filter_type: FilterType,
    cutoff: float,
    order: int,
    frequencies: FloatArray,
) -> FloatArray:
    ratio = frequencies / cutoff
    match filter_type:
        case "lowpass":
            response = 1.0 / np.sqrt(1.0 + np.power(ratio, 2 * order))
        case "highpass":
            shaped = np.power(ratio, 2 * order)
            response = np.sqrt(shaped / (1.0 + shaped))
        case "bandpass":
            numerator = np.power(cutoff * BANDPASS_Q / frequencies, order)
            denominator = 1.0 + np.power(np.square(ratio) - 1.0, order)
            response = np.sqrt(numerator / denominator)
        case _:
            raise ValueError(f"Unknown filter type: {filter_type!r}")
    return np.clip(response, 0.0, 1.0)


def axis_labels() -> tuple[FrequencyLabel, ...]:
    return tuple(
        FrequencyLabel(
            frequency=float(frequency),
            position=frequency_to_position(frequency),
            text=format_frequency_label(frequency),
        )
        for frequency in AXIS_LABEL_FREQUENCIES
    )


def generate_filter_response(
    filter_params: FilterParams, sample_count: int = DEFAULT_SAMPLE_COUNT
) -> FilterResponse:
    frequencies = frequency_axis(sample_count)
    magnitudes = magnitude_response(
        filter_params.type, filter_params.cutoff, filter_params.order, frequencies
    )
    return FilterResponse(
        frequencies=frequencies,
        magnitudes=magnitudes,
        cutoff_position=frequency_to_position(filter_params.cutoff),
        labels=axis_labels(),
    )
