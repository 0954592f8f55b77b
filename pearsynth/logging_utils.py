"""Logging setup for the ``pearsynth`` logger tree.

Console output goes to stderr at WARNING (DEBUG when ``PEARSYNTH_DEBUG`` is
set). A log file is only written when ``PEARSYNTH_LOG_DIR`` names a
directory; without it the package touches no files.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

_LOGGER = logging.getLogger("pearsynth.logging")

LOG_DIR_ENV = "PEARSYNTH_LOG_DIR"
DEBUG_ENV = "PEARSYNTH_DEBUG"
LOG_FILE_NAME = "pearsynth.log"

_CONSOLE_FORMAT = "%(prefix)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_PREFIXES: Mapping[int, str] = MappingProxyType(
    {
        logging.DEBUG: "🎛️",
        logging.INFO: "🎹",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "💥",
    }
)

_configured = False


class LogSettings(BaseModel):
    log_dir: Path | None = None
    debug: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_env(cls) -> LogSettings:
        raw_dir = os.environ.get(LOG_DIR_ENV)
        return cls(
            log_dir=Path(raw_dir).expanduser() if raw_dir else None,
            debug=bool(os.environ.get(DEBUG_ENV)),
        )

    @property
    def log_path(self) -> Path | None:
        return None if self.log_dir is None else self.log_dir / LOG_FILE_NAME


class _PrefixFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.prefix = _PREFIXES.get(record.levelno, "")
        return super().format(record)


def get_log_dir() -> Path | None:
    return LogSettings.from_env().log_dir


def get_log_path() -> Path | None:
    return LogSettings.from_env().log_path


def _console_handler(debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.__stderr__)
    handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    handler.setFormatter(_PrefixFormatter(_CONSOLE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATE_FORMAT))
    return handler


def configure_logging(settings: LogSettings | None = None, *, force: bool = False) -> None:
    """Attach handlers to the ``pearsynth`` logger once per process.

    ``force`` drops previously attached handlers and applies ``settings``
    (read from the environment when omitted) again.
    """
    global _configured
    if _configured and not force:
        return
    settings = settings or LogSettings.from_env()

    logger = logging.getLogger("pearsynth")
    logger.setLevel(logging.DEBUG)
    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    # An application that already configured the root logger gets our records
    # through propagation instead of a second console stream.
    if force or not logging.getLogger().handlers:
        logger.addHandler(_console_handler(settings.debug))

    if settings.log_path is not None:
        try:
            logger.addHandler(_file_handler(settings.log_path))
        except OSError as exc:
            _LOGGER.warning("File logging disabled: %s", exc, exc_info=True)

    logger.propagate = True
    _configured = True


def log_exception(context: str, exc: BaseException) -> Path | None:
    """Append ``exc`` with its traceback to the log file.

    Returns the file written, or None when no log directory is configured or
    the write failed.
    """
    path = get_log_path()
    if path is None:
        return None
    stamp = datetime.now().isoformat(timespec="seconds")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"[{stamp}] {context} failed: {type(exc).__name__}: {exc}\n")
            handle.writelines(traceback.format_exception(type(exc), exc, exc.__traceback__))
            handle.write("\n")
    except OSError as write_exc:
        _LOGGER.warning("Could not write %s: %s", path, write_exc, exc_info=True)
        return None
    return path
