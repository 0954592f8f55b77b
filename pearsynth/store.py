from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from .errors import UnknownUpdateKind
from .logging_utils import log_exception
from .params import PatchState, default_patch
from .updates import apply, is_known_update, parse_update

_LOGGER = logging.getLogger("pearsynth.store")


class StoreHooks(BaseModel):
    on_change: Callable[[PatchState, PatchState, object], None] | None = None
    on_unknown_update: Callable[[UnknownUpdateKind], None] | None = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )


class PatchStore:
    """Single owner of the current patch snapshot.

    Collaborators read :attr:`snapshot` and send updates through
    :meth:`dispatch`; writes are serialized so concurrent control inputs in
    one UI tick cannot lose each other's changes.
    """

    def __init__(
        self,
        initial: PatchState | None = None,
        *,
        hooks: StoreHooks | None = None,
    ) -> None:
        self._state = initial if initial is not None else default_patch()
        self._hooks = hooks or StoreHooks()
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> PatchState:
        return self._state

    def dispatch(self, update: object) -> PatchState:
        """Apply one update and return the new snapshot.

        Unknown update kinds are a no-op reported through ``on_unknown_update``.
        """

        if not is_known_update(update):
            self._signal_unknown(UnknownUpdateKind(getattr(update, "kind", type(update).__name__)))
            return self._state
        with self._lock:
            previous = self._state
            current = apply(previous, update)
            self._state = current
        if current is not previous:
            _LOGGER.debug("Applied %s", getattr(update, "kind", update))
            self._notify_change(previous, current, update)
        return current

    def dispatch_payload(self, payload: Mapping[str, Any]) -> PatchState:
        """Parse a loose update payload and dispatch it.

        Raises InvalidUpdateError for malformed payloads of a known kind.
        """

        try:
            update = parse_update(payload)
        except UnknownUpdateKind as exc:
            self._signal_unknown(exc)
            return self._state
        return self.dispatch(update)

    def reset(self, state: PatchState | None = None) -> PatchState:
        with self._lock:
            previous = self._state
            current = state if state is not None else default_patch()
            self._state = current
        if current is not previous:
            self._notify_change(previous, current, None)
        return current

    def _signal_unknown(self, condition: UnknownUpdateKind) -> None:
        _LOGGER.warning("%s; snapshot left unchanged", condition)
        callback = self._hooks.on_unknown_update
        if callback is None:
            return
        try:
            callback(condition)
        except Exception as exc:
            _report_hook_failure("on_unknown_update", exc)

    def _notify_change(self, previous: PatchState, current: PatchState, update: object) -> None:
        callback = self._hooks.on_change
        if callback is None:
            return
        try:
            callback(previous, current, update)
        except Exception as exc:
            _report_hook_failure("on_change", exc)


def _report_hook_failure(hook: str, exc: Exception) -> None:
    """Hook failures are logged; the snapshot they were told about stays committed."""
    _LOGGER.warning("Store hook %s failed: %s", hook, exc, exc_info=True)
    log_exception(f"store hook {hook}", exc)
