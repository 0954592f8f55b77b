from __future__ import annotations

import math

import numpy as np
import pytest

from pearsynth.filter_response import (
    FREQ_MAX,
    FREQ_MIN,
    frequency_axis,
    frequency_to_position,
    generate_filter_response,
    magnitude_response,
)
from pearsynth.params import FilterParams


def test_frequency_axis_is_log_spaced() -> None:
    freqs = frequency_axis(256)
    assert freqs.shape == (256,)
    assert freqs[0] == pytest.approx(FREQ_MIN)
    assert np.all(freqs < FREQ_MAX)
    ratios = freqs[1:] / freqs[:-1]
    assert np.allclose(ratios, ratios[0])


def test_frequency_axis_rejects_empty() -> None:
    with pytest.raises(ValueError):
        frequency_axis(0)


def test_positions_span_the_axis() -> None:
    assert frequency_to_position(20) == pytest.approx(0.0)
    assert frequency_to_position(20_000) == pytest.approx(1.0)
    assert frequency_to_position(math.sqrt(20 * 20_000)) == pytest.approx(0.5)


class TestMagnitudeResponse:
    def test_lowpass_and_highpass_are_half_power_at_cutoff(self) -> None:
        at_cutoff = np.array([1000.0])
        for order in (1, 2, 4):
            low = magnitude_response("lowpass", 1000, order, at_cutoff)
            high = magnitude_response("highpass", 1000, order, at_cutoff)
            assert low[0] == pytest.approx(1 / math.sqrt(2))
            assert high[0] == pytest.approx(1 / math.sqrt(2))

    def test_bandpass_peaks_at_cutoff(self) -> None:
        for order in (1, 2, 4):
            value = magnitude_response("bandpass", 2000, order, np.array([2000.0]))
            assert value[0] == pytest.approx(1.0)

    def test_bandpass_skirt_uses_slope_order_as_exponent(self) -> None:
        octave_up = np.array([2000.0])
        assert magnitude_response("bandpass", 1000, 2, octave_up)[0] == pytest.approx(
            math.sqrt(0.25 / (1 + 3**2))
        )
        assert magnitude_response("bandpass", 1000, 1, octave_up)[0] == pytest.approx(
            math.sqrt(0.5 / (1 + 3))
        )
        assert magnitude_response("bandpass", 1000, 4, octave_up)[0] == pytest.approx(
            math.sqrt(0.5**4 / (1 + 3**4))
        )

    def test_gentle_bandpass_skirt_is_clipped_below_cutoff(self) -> None:
        octave_down = np.array([500.0])
        # Unclipped value is sqrt(2 / 0.25) > 1.
        assert magnitude_response("bandpass", 1000, 1, octave_down)[0] == 1.0

    @pytest.mark.parametrize("filter_type", ["lowpass", "highpass", "bandpass"])
    @pytest.mark.parametrize("slope", ["6", "12", "24"])
    def test_magnitudes_stay_in_unit_interval(self, filter_type: str, slope: str) -> None:
        response = generate_filter_response(
            FilterParams(type=filter_type, slope=slope, cutoff=500)
        )
        assert np.all(response.magnitudes >= 0.0)
        assert np.all(response.magnitudes <= 1.0)

    def test_lowpass_falls_above_cutoff(self) -> None:
        response = generate_filter_response(FilterParams(type="lowpass", cutoff=1000))
        above = response.magnitudes[response.frequencies > 1000]
        assert np.all(np.diff(above) < 0)

    def test_highpass_rises_below_cutoff(self) -> None:
        response = generate_filter_response(FilterParams(type="highpass", cutoff=1000))
        below = response.magnitudes[response.frequencies < 1000]
        assert np.all(np.diff(below) > 0)

    def test_steeper_slope_attenuates_more(self) -> None:
        gentle = magnitude_response("lowpass", 1000, 1, np.array([4000.0]))
        steep = magnitude_response("lowpass", 1000, 4, np.array([4000.0]))
        assert steep[0] < gentle[0]


def test_response_carries_cutoff_marker_and_labels() -> None:
    response = generate_filter_response(FilterParams(cutoff=20_000), sample_count=64)
    assert response.cutoff_position == pytest.approx(1.0)
    assert [label.text for label in response.labels] == ["20", "100", "1k", "10k", "20k"]
    assert response.labels[0].position == pytest.approx(0.0)
    assert response.labels[-1].position == pytest.approx(1.0)
    assert len(list(response.points())) == 64


def test_to_canvas_maps_unity_to_top_edge() -> None:
    response = generate_filter_response(FilterParams(type="bandpass", cutoff=20), sample_count=32)
    canvas = response.to_canvas(320, 100)
    assert canvas.shape == (32, 2)
    assert canvas[0, 0] == 0
    assert canvas[0, 1] == pytest.approx(100 - response.magnitudes[0] * 100)
    assert canvas[0, 1] == pytest.approx(0.0)
