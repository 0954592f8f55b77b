"""Continuous input mapping for rotary and linear controls.

Pointer drags and wheel clicks arrive as raw deltas; these helpers turn them
into parameter values that are clamped to the parameter's range and snapped
to its step. A range whose max does not exceed its min is treated as a
single point and always maps to its min.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import DragStateError
from .schema import PARAM_RANGES, ParamRange

_LOGGER = logging.getLogger("pearsynth.mapping")

DEFAULT_SENSITIVITY = 0.5
# Delta units (pixels) that sweep the whole range at sensitivity 1.
UNITS_PER_RANGE = 100.0
KNOB_SWEEP_DEGREES = 270.0


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def round_to_step(value: float, step: float) -> float:
    """Snap to the nearest multiple of ``step``; non-positive steps disable snapping."""
    if step <= 0:
        return value
    # Halves round up: 50.5 -> 51, -0.5 -> 0.
    return math.floor(value / step + 0.5) * step


def map_delta(
    start_value: float,
    range_min: float,
    range_max: float,
    delta_units: float,
    sensitivity: float = DEFAULT_SENSITIVITY,
    step: float = 1.0,
) -> float:
    """Map a relative pointer delta onto a new value.

    ``delta_units * sensitivity`` units move the value proportionally to the
    range span (100 units = whole span), the result is clamped, then snapped.
    """
    if range_max <= range_min:
        return range_min
    scaled = delta_units * sensitivity
    value = start_value + scaled * (range_max - range_min) / UNITS_PER_RANGE
    return round_to_step(_clamp(value, range_min, range_max), step)


def map_wheel(
    current_value: float,
    range_min: float,
    range_max: float,
    direction: int,
    step: float = 1.0,
) -> float:
    """Move exactly one ``step`` in the sign of ``direction``, clamped to range."""
    if range_max <= range_min:
        return range_min
    sign = (direction > 0) - (direction < 0)
    return _clamp(current_value + sign * step, range_min, range_max)


def wheel_direction(wheel_delta_y: float) -> int:
    """Scrolling down (positive delta) turns the control down."""
    return -1 if wheel_delta_y > 0 else 1


def knob_angle(value: float, range_min: float, range_max: float) -> float:
    """Indicator rotation in degrees: -135 at ``range_min``, +135 at ``range_max``."""
    half = KNOB_SWEEP_DEGREES / 2
    if range_max <= range_min:
        return -half
    return ((value - range_min) / (range_max - range_min)) * KNOB_SWEEP_DEGREES - half


@dataclass(frozen=True, slots=True)
class ControlSpec:
    """Range, granularity and drag sensitivity of one control."""

    range: ParamRange
    sensitivity: float = DEFAULT_SENSITIVITY

    def drag(self, start_value: float, delta_units: float) -> float:
        return map_delta(
            start_value,
            self.range.min,
            self.range.max,
            delta_units,
            self.sensitivity,
            self.range.step,
        )

    def nudge(self, value: float, direction: int) -> float:
        return map_wheel(value, self.range.min, self.range.max, direction, self.range.step)

    def angle(self, value: float) -> float:
        return knob_angle(value, self.range.min, self.range.max)


CONTROL_SPECS: Mapping[str, ControlSpec] = MappingProxyType(
    {name: ControlSpec(param_range) for name, param_range in PARAM_RANGES.items()}
)


# -----------------------------------------------------------------------------
# Drag sessions
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Dragging:
    baseline: float
    start_pointer: float


DragState = Idle | Dragging


class DragSession:
    """Begin/move/end pointer handling for one control.

    ``begin`` captures the baseline value and pointer position; every ``move``
    recomputes from that baseline; ``end`` releases it. A second ``begin``
    while dragging takes over the baseline. Pointer coordinates grow
    downward, so moving up increases the value.
    """

    def __init__(self, spec: ControlSpec) -> None:
        self._spec = spec
        self._state: DragState = Idle()

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active(self) -> bool:
        return isinstance(self._state, Dragging)

    def begin(self, value: float, pointer: float) -> None:
        if isinstance(self._state, Dragging):
            _LOGGER.debug("Drag restarted before end; new baseline %s", value)
        self._state = Dragging(baseline=value, start_pointer=pointer)

    def move(self, pointer: float) -> float:
        match self._state:
            case Dragging(baseline=baseline, start_pointer=start):
                return self._spec.drag(baseline, start - pointer)
            case _:
                raise DragStateError("move() called without an active drag")

    def end(self) -> None:
        """Release the baseline. Ending an idle session is a no-op."""
        self._state = Idle()
