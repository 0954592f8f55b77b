from __future__ import annotations

import pytest

from pearsynth.envelope import generate_envelope_curve
from pearsynth.params import EnvelopeParams, MainEnvelopeParams


def test_instant_full_sustain_envelope_is_flat_on_top() -> None:
    env = EnvelopeParams(delay=0, attack=0, hold=0, decay=0, sustain=1, release=0)
    curve = generate_envelope_curve(env, 100, 100)

    assert len(curve.points) == 7
    assert curve.points[0] == (0.0, 100)
    assert curve.points[-1][1] == 100
    # With no delay the delay vertex coincides with the start point.
    assert curve.points[1] == curve.points[0]
    assert all(y == 0 for _, y in curve.points[2:-1])
    assert curve.release_start_x == pytest.approx(70)
    assert curve.end_x == pytest.approx(70)


def test_segment_widths_scale_with_phase_length() -> None:
    env = EnvelopeParams(delay=0.2, attack=0.4, hold=0.2, decay=0.2, sustain=0.5, release=0.4)
    curve = generate_envelope_curve(env, 200, 100)

    xs = [x for x, _ in curve.points]
    ys = [y for _, y in curve.points]
    assert xs == pytest.approx([0, 20, 60, 80, 100, 140, 180])
    assert ys == pytest.approx([100, 100, 0, 0, 50, 50, 100])


def test_release_always_starts_at_seventy_percent() -> None:
    env = EnvelopeParams(attack=1.5, decay=1.0)
    curve = generate_envelope_curve(env, 300, 60)
    assert curve.points[4][0] > 300 * 0.7
    assert curve.release_start_x == pytest.approx(210)


def test_labels_sit_at_segment_midpoints() -> None:
    env = EnvelopeParams(delay=0.2, attack=0.4, hold=0.2, decay=0.2, sustain=0.5, release=0.4)
    curve = generate_envelope_curve(env, 200, 100)

    assert "".join(label.letter for label in curve.labels) == "DAHDSR"
    assert [label.name for label in curve.labels][-2:] == ["sustain", "release"]
    assert [label.x for label in curve.labels] == pytest.approx([10, 40, 70, 90, 120, 160])


def test_main_envelope_slopes_do_not_change_the_shape() -> None:
    flat = generate_envelope_curve(MainEnvelopeParams(), 120, 80)
    biased = generate_envelope_curve(
        MainEnvelopeParams(sustain_slope=0.8, release_slope=-0.8), 120, 80
    )
    assert flat.points == biased.points


@pytest.mark.parametrize(("width", "height"), [(0, 100), (100, 0), (-5, 10)])
def test_rejects_non_positive_canvas(width: float, height: float) -> None:
    with pytest.raises(ValueError):
        generate_envelope_curve(EnvelopeParams(), width, height)
