from __future__ import annotations

import pytest

from pearsynth.errors import DragStateError
from pearsynth.mapping import (
    CONTROL_SPECS,
    ControlSpec,
    Dragging,
    DragSession,
    Idle,
    knob_angle,
    map_delta,
    map_wheel,
    round_to_step,
    wheel_direction,
)
from pearsynth.schema import PARAM_RANGES, ParamRange


class TestMapDelta:
    def test_zero_delta_is_identity_for_in_range_values(self) -> None:
        for value in (0.0, 12.0, 50.0, 100.0):
            assert map_delta(value, 0, 100, 0) == value

    def test_half_sensitivity_moves_half_the_span_per_hundred_units(self) -> None:
        assert map_delta(50, 0, 100, 20) == 60
        assert map_delta(50, 0, 100, -20) == 40
        assert map_delta(120, 50, 200, 100) == 195

    def test_result_is_clamped(self) -> None:
        assert map_delta(90, 0, 100, 1000) == 100
        assert map_delta(10, 0, 100, -1000) == 0
        assert map_delta(50, 0, 100, 1_000_000, 1, 1) == 100
        assert map_delta(50, 0, 100, -1_000_000, 1, 1) == 0

    def test_result_is_snapped_to_step(self) -> None:
        assert map_delta(0.5, 0.0, 1.0, 10, step=0.01) == pytest.approx(0.55)
        assert map_delta(50, 0, 100, 4.6) == 52

    def test_odd_pixel_drags_round_half_up(self) -> None:
        assert map_delta(50, 0, 100, 1) == 51
        assert [map_delta(50, 0, 100, d) for d in range(1, 8)] == [51, 51, 52, 52, 53, 53, 54]
        assert [map_delta(50, 0, 100, -d) for d in range(1, 5)] == [50, 49, 49, 48]

    def test_sensitivity_scales_movement(self) -> None:
        assert map_delta(0, 0, 100, 10, sensitivity=1.0) == 10
        assert map_delta(0, 0, 100, 10, sensitivity=0.1) == 1

    def test_degenerate_range_maps_to_min(self) -> None:
        assert map_delta(5, 10, 10, 50) == 10
        assert map_delta(5, 10, 0, 50) == 10


class TestMapWheel:
    def test_moves_one_step(self) -> None:
        assert map_wheel(50, 0, 100, 1) == 51
        assert map_wheel(50, 0, 100, -1) == 49
        assert map_wheel(0.5, 0.0, 1.0, 3, step=0.01) == pytest.approx(0.51)

    def test_clamps_at_ends(self) -> None:
        assert map_wheel(100, 0, 100, 1) == 100
        assert map_wheel(0, 0, 100, -1) == 0

    def test_degenerate_range(self) -> None:
        assert map_wheel(3, 7, 7, 1) == 7

    def test_scroll_down_turns_down(self) -> None:
        assert wheel_direction(120) == -1
        assert wheel_direction(-120) == 1


def test_round_to_step() -> None:
    assert round_to_step(0.5, 1) == 1
    assert round_to_step(2.5, 1) == 3
    assert round_to_step(-0.5, 1) == 0
    assert round_to_step(12.4, 1) == 12
    assert round_to_step(0.456, 0.01) == pytest.approx(0.46)
    assert round_to_step(0.456, 0) == 0.456


def test_knob_angle_sweeps_270_degrees() -> None:
    assert knob_angle(0, 0, 100) == -135
    assert knob_angle(50, 0, 100) == 0
    assert knob_angle(100, 0, 100) == 135
    assert knob_angle(5, 5, 5) == -135


def test_control_specs_cover_param_ranges() -> None:
    assert set(CONTROL_SPECS) == set(PARAM_RANGES)
    volume = CONTROL_SPECS["oscillator.volume"]
    assert volume.sensitivity == 0.5
    assert volume.drag(0.75, 100) == pytest.approx(1.0)
    assert volume.nudge(0.75, -1) == pytest.approx(0.74)
    assert volume.angle(0.0) == -135


class TestDragSession:
    def test_moves_are_relative_to_baseline(self) -> None:
        session = DragSession(CONTROL_SPECS["lfo.depth"])
        session.begin(50, pointer=200)
        assert session.active
        assert session.move(180) == 60
        assert session.move(220) == 40
        assert session.move(200) == 50

    def test_moves_clamp(self) -> None:
        session = DragSession(ControlSpec(ParamRange(0, 100)))
        session.begin(50, pointer=0)
        assert session.move(1000) == 0
        assert session.move(-1000) == 100

    def test_end_returns_to_idle(self) -> None:
        session = DragSession(CONTROL_SPECS["bpm"])
        session.begin(120, pointer=10)
        assert session.state == Dragging(baseline=120, start_pointer=10)
        session.end()
        assert session.state == Idle()
        assert not session.active

    def test_move_without_begin_raises(self) -> None:
        session = DragSession(CONTROL_SPECS["bpm"])
        with pytest.raises(DragStateError):
            session.move(5)

    def test_end_when_idle_is_noop(self) -> None:
        session = DragSession(CONTROL_SPECS["bpm"])
        session.end()
        assert isinstance(session.state, Idle)

    def test_second_begin_takes_over(self) -> None:
        session = DragSession(ControlSpec(ParamRange(0, 100)))
        session.begin(10, pointer=0)
        session.begin(80, pointer=50)
        assert session.move(50) == 80
