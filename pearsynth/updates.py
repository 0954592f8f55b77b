"""Named partial updates for :class:`~pearsynth.params.PatchState`.

Every mutation the surface can request is one variant of the closed
``NamedUpdate`` union, tagged by ``kind``. Each variant carries exactly the
fields it may change and knows how to merge itself into a snapshot:

    update = UpdateOscillator(index=1, params=OscillatorUpdate(volume=0.4))
    new_state = apply(state, update)

Merging never touches ``current``: untouched fields and sibling elements of
indexed collections are carried over by reference.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import InvalidUpdateError, UnknownUpdateKind
from .params import MODEL_CONFIG, LFOParams, PatchState
from .schema import (
    FILTER_COUNT,
    LFO_COUNT,
    OSCILLATOR_COUNT,
    SYNC_RATES_BY_LENGTH,
    Bpm,
    CurveBias,
    CutoffHz,
    DetuneCents,
    EnvelopeTimeMs,
    FilterSlope,
    FilterType,
    Level,
    LFOMode,
    LFOType,
    OscillatorType,
    Percent,
    PlaybackMode,
    SyncRate,
    TimeRateMs,
    UnisonVoices,
)

_LOGGER = logging.getLogger("pearsynth.updates")

ModelT = TypeVar("ModelT", bound=BaseModel)
ItemT = TypeVar("ItemT")


# -----------------------------------------------------------------------------
# Step: relative adjustment
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Step:
    """Relative adjustment for ordered or integer fields.

    Accepted by transpose/octave (added to the current value) and by an LFO's
    sync rate (moves through the note values from shortest to longest,
    saturating at both ends).

    Example:
        apply(state, SetTranspose(value=Step(+1)))  # one semitone up
    """

    delta: int

    def __repr__(self) -> str:
        sign = "+" if self.delta >= 0 else ""
        return f"Step({sign}{self.delta})"


# -----------------------------------------------------------------------------
# Partial params (None = keep prior value)
# -----------------------------------------------------------------------------


class OscillatorUpdate(BaseModel):
    type: Optional[OscillatorType] = None
    unison: Optional[UnisonVoices] = None
    unison_detune: Optional[DetuneCents] = None
    velocity_sensitivity: Optional[Percent] = None
    volume: Optional[Level] = None
    mute: Optional[bool] = None
    solo: Optional[bool] = None

    model_config = MODEL_CONFIG


class FilterUpdate(BaseModel):
    type: Optional[FilterType] = None
    slope: Optional[FilterSlope] = None
    cutoff: Optional[CutoffHz] = None

    model_config = MODEL_CONFIG


class EnvelopeUpdate(BaseModel):
    delay: Optional[EnvelopeTimeMs] = None
    attack: Optional[EnvelopeTimeMs] = None
    hold: Optional[EnvelopeTimeMs] = None
    decay: Optional[EnvelopeTimeMs] = None
    sustain: Optional[Level] = None
    release: Optional[EnvelopeTimeMs] = None

    model_config = MODEL_CONFIG


class MainEnvelopeUpdate(EnvelopeUpdate):
    sustain_slope: Optional[CurveBias] = None
    release_slope: Optional[CurveBias] = None


class AdditionalEnvelopeUpdate(EnvelopeUpdate):
    assigned_param: Optional[str] = None


class LFOUpdate(BaseModel):
    type: Optional[LFOType] = None
    depth: Optional[Percent] = None
    mode: Optional[LFOMode] = None
    rate: Optional[SyncRate | TimeRateMs | Step] = None
    assigned_param: Optional[str] = None

    model_config = MODEL_CONFIG


def _changes(params: BaseModel) -> dict[str, Any]:
    return {name: value for name, value in params if value is not None}


def _merge(base: ModelT, params: BaseModel) -> ModelT:
    return base.model_copy(update=_changes(params))


def _replace_at(items: tuple[ItemT, ...], index: int, item: ItemT) -> tuple[ItemT, ...]:
    return tuple(item if i == index else existing for i, existing in enumerate(items))


def _resolve_rate_step(base: LFOParams, params: LFOUpdate, step: Step) -> SyncRate | float:
    """Move the sync token by ``step``; in time mode the stored rate is kept."""
    mode = params.mode or base.mode
    if mode != "sync":
        _LOGGER.warning("Ignoring %r on LFO rate in time mode; rate stays %r", step, base.rate)
        return base.rate
    current = base.sync_rate
    idx = SYNC_RATES_BY_LENGTH.index(current)
    return SYNC_RATES_BY_LENGTH[max(0, min(idx + step.delta, len(SYNC_RATES_BY_LENGTH) - 1))]


# -----------------------------------------------------------------------------
# Update kinds
# -----------------------------------------------------------------------------


class _PatchUpdate(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def apply_to(self, base: PatchState) -> PatchState:
        raise NotImplementedError


class SetBpm(_PatchUpdate):
    kind: Literal["set_bpm"] = "set_bpm"
    value: Bpm

    def apply_to(self, base: PatchState) -> PatchState:
        return base.model_copy(update={"bpm": self.value})


class UpdateOscillator(_PatchUpdate):
    kind: Literal["update_oscillator"] = "update_oscillator"
    index: int = Field(ge=0, lt=OSCILLATOR_COUNT)
    params: OscillatorUpdate

    def apply_to(self, base: PatchState) -> PatchState:
        merged = _merge(base.oscillators[self.index], self.params)
        return base.model_copy(
            update={"oscillators": _replace_at(base.oscillators, self.index, merged)}
        )


class UpdateFilter(_PatchUpdate):
    kind: Literal["update_filter"] = "update_filter"
    index: int = Field(ge=0, lt=FILTER_COUNT)
    params: FilterUpdate

    def apply_to(self, base: PatchState) -> PatchState:
        merged = _merge(base.filters[self.index], self.params)
        return base.model_copy(update={"filters": _replace_at(base.filters, self.index, merged)})


class UpdateMainEnvelope(_PatchUpdate):
    kind: Literal["update_main_envelope"] = "update_main_envelope"
    params: MainEnvelopeUpdate

    def apply_to(self, base: PatchState) -> PatchState:
        return base.model_copy(update={"main_envelope": _merge(base.main_envelope, self.params)})


class UpdateFilterEnvelope(_PatchUpdate):
    kind: Literal["update_filter_envelope"] = "update_filter_envelope"
    params: EnvelopeUpdate

    def apply_to(self, base: PatchState) -> PatchState:
        return base.model_copy(
            update={"filter_envelope": _merge(base.filter_envelope, self.params)}
        )


class UpdateAdditionalEnvelope(_PatchUpdate):
    kind: Literal["update_additional_envelope"] = "update_additional_envelope"
    params: AdditionalEnvelopeUpdate

    def apply_to(self, base: PatchState) -> PatchState:
        return base.model_copy(
            update={"additional_envelope": _merge(base.additional_envelope, self.params)}
        )


class UpdateLFO(_PatchUpdate):
    kind: Literal["update_lfo"] = "update_lfo"
    index: int = Field(ge=0, lt=LFO_COUNT)
    params: LFOUpdate

    def apply_to(self, base: PatchState) -> PatchState:
        current = base.lfos[self.index]
        changes = _changes(self.params)
        match self.params.rate:
            case Step() as step:
                changes["rate"] = _resolve_rate_step(current, self.params, step)
            case _:
                pass
        merged = current.model_copy(update=changes)
        return base.model_copy(update={"lfos": _replace_at(base.lfos, self.index, merged)})


class SetPlaybackMode(_PatchUpdate):
    kind: Literal["set_playback_mode"] = "set_playback_mode"
    mode: PlaybackMode

    def apply_to(self, base: PatchState) -> PatchState:
        return base.model_copy(update={"playback_mode": self.mode})


class ToggleHold(_PatchUpdate):
    kind: Literal["toggle_hold"] = "toggle_hold"

    def apply_to(self, base: PatchState) -> PatchState:
        return base.model_copy(update={"hold_mode": not base.hold_mode})


class SetTranspose(_PatchUpdate):
    """Absolute semitone transpose, or a Step relative to the current one."""

    kind: Literal["set_transpose"] = "set_transpose"
    value: int | Step

    def apply_to(self, base: PatchState) -> PatchState:
        match self.value:
            case Step(delta=d):
                return base.model_copy(update={"transpose": base.transpose + d})
            case _:
                return base.model_copy(update={"transpose": self.value})


class SetOctave(_PatchUpdate):
    """Absolute octave shift, or a Step relative to the current one."""

    kind: Literal["set_octave"] = "set_octave"
    value: int | Step

    def apply_to(self, base: PatchState) -> PatchState:
        match self.value:
            case Step(delta=d):
                return base.model_copy(update={"octave": base.octave + d})
            case _:
                return base.model_copy(update={"octave": self.value})


NamedUpdate = Annotated[
    Union[
        SetBpm,
        UpdateOscillator,
        UpdateFilter,
        UpdateMainEnvelope,
        UpdateFilterEnvelope,
        UpdateAdditionalEnvelope,
        UpdateLFO,
        SetPlaybackMode,
        ToggleHold,
        SetTranspose,
        SetOctave,
    ],
    Field(discriminator="kind"),
]

_UPDATE_TYPES: tuple[type[_PatchUpdate], ...] = (
    SetBpm,
    UpdateOscillator,
    UpdateFilter,
    UpdateMainEnvelope,
    UpdateFilterEnvelope,
    UpdateAdditionalEnvelope,
    UpdateLFO,
    SetPlaybackMode,
    ToggleHold,
    SetTranspose,
    SetOctave,
)
UPDATE_KINDS: frozenset[str] = frozenset(
    cls.model_fields["kind"].default for cls in _UPDATE_TYPES
)
_UPDATE_ADAPTER: TypeAdapter[NamedUpdate] = TypeAdapter(NamedUpdate)


def is_known_update(update: object) -> bool:
    return isinstance(update, _UPDATE_TYPES)


def apply(current: PatchState, update: object) -> PatchState:
    """Apply one named update and return the next snapshot.

    Pure: ``current`` is never modified. Objects that are not a known update
    kind leave the snapshot unchanged (``current`` itself is returned).
    """

    match update:
        case (
            SetBpm()
            | UpdateOscillator()
            | UpdateFilter()
            | UpdateMainEnvelope()
            | UpdateFilterEnvelope()
            | UpdateAdditionalEnvelope()
            | UpdateLFO()
            | SetPlaybackMode()
            | ToggleHold()
            | SetTranspose()
            | SetOctave()
        ):
            return update.apply_to(current)
        case _:
            _LOGGER.warning("Ignoring unknown update kind: %r", update)
            return current


def parse_update(payload: Mapping[str, Any]) -> NamedUpdate:
    """Parse a loosely structured update payload.

    Raises UnknownUpdateKind when ``kind`` is missing or not recognized, and
    InvalidUpdateError when the payload is otherwise malformed or out of range.
    """

    kind = payload.get("kind")
    if not isinstance(kind, str) or kind not in UPDATE_KINDS:
        raise UnknownUpdateKind(kind)
    try:
        return _UPDATE_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        _LOGGER.warning("Failed to parse update payload: %s", exc, exc_info=True)
        raise InvalidUpdateError(str(exc)) from exc
