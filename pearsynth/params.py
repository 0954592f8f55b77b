from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import InvalidPatchError
from .schema import (
    FILTER_COUNT,
    LFO_COUNT,
    LFO_TIME_RATE_RANGE,
    OSCILLATOR_COUNT,
    Bpm,
    CurveBias,
    CutoffHz,
    DetuneCents,
    EnvelopeKind,
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

_LOGGER = logging.getLogger("pearsynth.params")

DEFAULT_SYNC_RATE: SyncRate = "1/4"
# Shown by the time-mode rate control while the stored rate is still a sync token.
DEFAULT_TIME_RATE_MS = 1000.0

MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    populate_by_name=True,
    alias_generator=to_camel,
)


class OscillatorParams(BaseModel):
    """One oscillator slot."""

    type: OscillatorType = "sine"
    unison: UnisonVoices = 1
    unison_detune: DetuneCents = 0
    velocity_sensitivity: Percent = 0
    volume: Level = 0.75
    mute: bool = False
    solo: bool = False

    model_config = MODEL_CONFIG


class FilterParams(BaseModel):
    """One filter slot; slope is expressed in dB/octave."""

    type: FilterType = "lowpass"
    slope: FilterSlope = "12"
    cutoff: CutoffHz = 1000

    model_config = MODEL_CONFIG

    @property
    def order(self) -> int:
        """Response exponent multiplier, one per 6 dB/octave."""
        return int(self.slope) // 6


class EnvelopeParams(BaseModel):
    """Delay/attack/hold/decay/sustain/release envelope.

    Times are in milliseconds, sustain is a level fraction.
    """

    delay: EnvelopeTimeMs = 0
    attack: EnvelopeTimeMs = 0.01
    hold: EnvelopeTimeMs = 0
    decay: EnvelopeTimeMs = 0.1
    sustain: Level = 0.5
    release: EnvelopeTimeMs = 0.1

    model_config = MODEL_CONFIG


class MainEnvelopeParams(EnvelopeParams):
    """Amp envelope; the only variant carrying curvature bias."""

    sustain_slope: CurveBias = 0.0
    release_slope: CurveBias = 0.0


class AssignableEnvelopeParams(EnvelopeParams):
    """Additional envelope routed to a free-form destination key ("" = unassigned)."""

    assigned_param: str = ""


class LFOParams(BaseModel):
    """Low-frequency oscillator.

    ``rate`` is a sync token in ``sync`` mode and a period in milliseconds in
    ``time`` mode. Switching ``mode`` alone leaves the stored rate untouched;
    read it through :attr:`sync_rate` / :attr:`time_rate_ms` for the mode at hand.
    """

    type: LFOType = "sine"
    depth: Percent = 50
    mode: LFOMode = "sync"
    rate: SyncRate | TimeRateMs = DEFAULT_SYNC_RATE
    assigned_param: str = ""

    model_config = MODEL_CONFIG

    @property
    def sync_rate(self) -> SyncRate:
        match self.rate:
            case str():
                return self.rate
            case _:
                return DEFAULT_SYNC_RATE

    @property
    def time_rate_ms(self) -> float:
        match self.rate:
            case str():
                return DEFAULT_TIME_RATE_MS
            case _:
                return float(
                    min(max(self.rate, LFO_TIME_RATE_RANGE.min), LFO_TIME_RATE_RANGE.max)
                )


class PatchState(BaseModel):
    """Aggregate root: the complete parameter set of one sound.

    Collections are fixed-size tuples. Default elements share one instance,
    which is safe because every model is frozen.
    """

    bpm: Bpm = 120
    oscillators: tuple[OscillatorParams, ...] = Field(
        default_factory=lambda: (OscillatorParams(),) * OSCILLATOR_COUNT,
        min_length=OSCILLATOR_COUNT,
        max_length=OSCILLATOR_COUNT,
    )
    filters: tuple[FilterParams, ...] = Field(
        default_factory=lambda: (FilterParams(),) * FILTER_COUNT,
        min_length=FILTER_COUNT,
        max_length=FILTER_COUNT,
    )
    main_envelope: MainEnvelopeParams = Field(default_factory=MainEnvelopeParams)
    filter_envelope: EnvelopeParams = Field(default_factory=EnvelopeParams)
    additional_envelope: AssignableEnvelopeParams = Field(
        default_factory=AssignableEnvelopeParams
    )
    lfos: tuple[LFOParams, ...] = Field(
        default_factory=lambda: (LFOParams(),) * LFO_COUNT,
        min_length=LFO_COUNT,
        max_length=LFO_COUNT,
    )
    playback_mode: PlaybackMode = "polyphonic"
    hold_mode: bool = False
    transpose: int = 0
    octave: int = 0

    model_config = MODEL_CONFIG

    def envelope(self, kind: EnvelopeKind) -> EnvelopeParams:
        match kind:
            case "main":
                return self.main_envelope
            case "filter":
                return self.filter_envelope
            case "additional":
                return self.additional_envelope
            case _:
                raise ValueError(f"Unknown envelope kind: {kind!r}")


def default_patch() -> PatchState:
    """Session-start patch."""

    return PatchState()


def parse_patch(payload: Mapping[str, Any]) -> PatchState:
    """Parse a patch payload (snake_case or camelCase keys), raising InvalidPatchError."""

    try:
        return PatchState.model_validate(payload)
    except ValidationError as exc:
        _LOGGER.warning("Failed to parse patch payload: %s", exc, exc_info=True)
        raise InvalidPatchError(str(exc)) from exc


def dump_patch(state: PatchState, *, by_alias: bool = True) -> dict[str, Any]:
    """Return a JSON-compatible mapping; camelCase keys unless ``by_alias`` is False."""

    return state.model_dump(mode="json", by_alias=by_alias)
