"""Logging setup and level-bound emitters for Tipline.

Loggers come from femtologging. Messages are interpolated here, once, so
femtologging only ever receives finished strings. Each ``log_*`` name is a
:class:`LevelEmitter` bound to one level:

>>> from tipline.logging import get_logger, log_info
>>> log_info(get_logger(__name__), "Listening on %s:%d", "0.0.0.0", 8080)

"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Canonical level names passed to femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Accepted in TIPLINE_LOG_LEVEL alongside the canonical names.
_ALIASES: dict[str, LogLevel] = {
    "WARN": LogLevel.WARNING,
    "FATAL": LogLevel.CRITICAL,
}

_FALLBACK = LogLevel.INFO


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Resolve *level* to a canonical name.

    Matching ignores case and surrounding whitespace, and ``WARN``/``FATAL``
    are accepted as aliases. Anything else, including an empty value, falls
    back to ``INFO`` with the second element set so the caller can warn.

    """
    candidate = (level or "").strip().upper()
    resolved = _ALIASES.get(candidate) or LogLevel.__members__.get(candidate)
    if resolved is None:
        return (_FALLBACK.value, True)
    return (resolved.value, False)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Install the root femtologging handler at the resolved *level*.

    Returns the level applied and whether *level* had to be replaced.
    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate *args* into a percent-style *template*."""
    return template % args if args else template


class _LogSink(typ.Protocol):
    """The part of a femtologging logger the emitters rely on."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


@dc.dataclass(frozen=True, slots=True)
class LevelEmitter:
    """Log percent-style messages at a fixed level.

    Attributes
    ----------
    level
        Level attached to every record this emitter writes.

    """

    level: LogLevel

    def __call__(
        self,
        logger: _LogSink,
        template: str,
        *args: object,
        exc_info: object | None = None,
    ) -> None:
        """Format *template* with *args* and hand it to *logger*."""
        logger.log(
            self.level.value,
            format_log_message(template, *args),
            exc_info=exc_info,
            stack_info=False,
        )


log_debug = LevelEmitter(LogLevel.DEBUG)
log_info = LevelEmitter(LogLevel.INFO)
log_warning = LevelEmitter(LogLevel.WARNING)
log_error = LevelEmitter(LogLevel.ERROR)


__all__ = [
    "LevelEmitter",
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
