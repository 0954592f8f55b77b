"""Envelope shape for display.

The polyline uses canvas coordinates: ``y = height`` is level 0 and
``y = 0`` is level 1. Every time-valued phase spans ``(phase / 2) * width``
pixels, except the sustain plateau, which always ends at ``0.7 * width``
regardless of how far the earlier segments reached. Curvature bias on the
main envelope is not drawn; all segments are straight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .params import EnvelopeParams

Point: TypeAlias = tuple[float, float]

RELEASE_ANCHOR = 0.7
SEGMENT_NAMES = ("delay", "attack", "hold", "decay", "sustain", "release")
SEGMENT_LETTERS = ("D", "A", "H", "D", "S", "R")


@dataclass(frozen=True, slots=True)
class SegmentLabel:
    name: str
    letter: str
    x: float


@dataclass(frozen=True, slots=True)
class EnvelopeCurve:
    """Start point plus one vertex per segment, and one label per segment."""

    points: tuple[Point, ...]
    labels: tuple[SegmentLabel, ...]

    @property
    def release_start_x(self) -> float:
        return self.points[5][0]

    @property
    def end_x(self) -> float:
        return self.points[-1][0]


def _segment_width(duration: float, width: float) -> float:
    return (duration / 2) * width


def generate_envelope_curve(env: EnvelopeParams, width: float, height: float) -> EnvelopeCurve:
    """Build the DAHDSR polyline and its segment label positions."""
    if width <= 0 or height <= 0:
        raise ValueError(f"width and height must be positive, got {width}x{height}")

    delay_x = _segment_width(env.delay, width)
    attack_x = delay_x + _segment_width(env.attack, width)
    hold_x = attack_x + _segment_width(env.hold, width)
    decay_x = hold_x + _segment_width(env.decay, width)
    sustain_y = height * (1 - env.sustain)
    release_start_x = width * RELEASE_ANCHOR
    release_x = release_start_x + _segment_width(env.release, width)

    points: tuple[Point, ...] = (
        (0.0, height),
        (delay_x, height),
        (attack_x, 0.0),
        (hold_x, 0.0),
        (decay_x, sustain_y),
        (release_start_x, sustain_y),
        (release_x, height),
    )
    labels = tuple(
        SegmentLabel(name=name, letter=letter, x=(start[0] + end[0]) / 2)
        for name, letter, start, end in zip(SEGMENT_NAMES, SEGMENT_LETTERS, points, points[1:])
    )
    return EnvelopeCurve(points=points, labels=labels)
