from __future__ import annotations

from .envelope import EnvelopeCurve, SegmentLabel, generate_envelope_curve
from .errors import (
    DragStateError,
    InvalidPatchError,
    InvalidUpdateError,
    PearSynthError,
    UnknownUpdateKind,
)
from .filter_response import FilterResponse, FrequencyLabel, generate_filter_response
from .lfo import LFOWaveform, generate_lfo_waveform, lfo_period_ms, lfo_rate_hz
from .logging_utils import configure_logging as _configure_logging
from .mapping import CONTROL_SPECS, ControlSpec, DragSession, knob_angle, map_delta, map_wheel
from .notes import LoggingNoteSink, NoteSink, NoteTracker, note_id
from .params import (
    AssignableEnvelopeParams,
    EnvelopeParams,
    FilterParams,
    LFOParams,
    MainEnvelopeParams,
    OscillatorParams,
    PatchState,
    default_patch,
    dump_patch,
    parse_patch,
)
from .schema import PARAM_RANGES, SYNC_RATES, ParamRange
from .store import PatchStore, StoreHooks
from .updates import (
    AdditionalEnvelopeUpdate,
    EnvelopeUpdate,
    FilterUpdate,
    LFOUpdate,
    MainEnvelopeUpdate,
    NamedUpdate,
    OscillatorUpdate,
    SetBpm,
    SetOctave,
    SetPlaybackMode,
    SetTranspose,
    Step,
    ToggleHold,
    UpdateAdditionalEnvelope,
    UpdateFilter,
    UpdateFilterEnvelope,
    UpdateLFO,
    UpdateMainEnvelope,
    UpdateOscillator,
    apply,
    parse_update,
)

__all__ = [
    "CONTROL_SPECS",
    "PARAM_RANGES",
    "SYNC_RATES",
    "AdditionalEnvelopeUpdate",
    "AssignableEnvelopeParams",
    "ControlSpec",
    "DragSession",
    "DragStateError",
    "EnvelopeCurve",
    "EnvelopeParams",
    "EnvelopeUpdate",
    "FilterParams",
    "FilterResponse",
    "FilterUpdate",
    "FrequencyLabel",
    "InvalidPatchError",
    "InvalidUpdateError",
    "LFOParams",
    "LFOUpdate",
    "LFOWaveform",
    "LoggingNoteSink",
    "MainEnvelopeParams",
    "MainEnvelopeUpdate",
    "NamedUpdate",
    "NoteSink",
    "NoteTracker",
    "OscillatorParams",
    "OscillatorUpdate",
    "ParamRange",
    "PatchState",
    "PatchStore",
    "PearSynthError",
    "SegmentLabel",
    "SetBpm",
    "SetOctave",
    "SetPlaybackMode",
    "SetTranspose",
    "Step",
    "StoreHooks",
    "ToggleHold",
    "UnknownUpdateKind",
    "UpdateAdditionalEnvelope",
    "UpdateFilter",
    "UpdateFilterEnvelope",
    "UpdateLFO",
    "UpdateMainEnvelope",
    "UpdateOscillator",
    "apply",
    "default_patch",
    "dump_patch",
    "generate_envelope_curve",
    "generate_filter_response",
    "generate_lfo_waveform",
    "knob_angle",
    "lfo_period_ms",
    "lfo_rate_hz",
    "map_delta",
    "map_wheel",
    "note_id",
    "parse_patch",
    "parse_update",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
