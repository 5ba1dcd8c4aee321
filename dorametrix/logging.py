"""femtologging integration for Dorametrix.

Diagnostics come in two shapes. Free-form messages go through
:func:`log_debug` and :func:`log_warning`, which format percent-style
templates before handing them to femtologging. Data-quality and ingestion
events go through :func:`log_event`, which renders a ``[event.type]`` prefix
followed by ``key=value`` pairs in keyword order:

>>> format_event("metrics.incident.skipped", {"repo_name": "octo/reef"})
'[metrics.incident.skipped] repo_name=octo/reef'

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class LogLevel(enum.StrEnum):
    """Level names femtologging accepts."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Return ``(level, invalid)``; unknown or blank input maps to ``INFO``."""
    candidate = (level or "").strip().upper()
    if candidate in LogLevel.__members__:
        return (candidate, False)
    return (LogLevel.INFO.value, True)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Install the root femtologging configuration at ``level``.

    Returns the level actually applied and whether ``level`` was rejected.
    ``force`` replaces handlers installed by an earlier call.
    """
    applied, invalid = normalize_log_level(level)
    basicConfig(level=applied, force=force)
    return (applied, invalid)


class _SupportsLog(typ.Protocol):
    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def format_event(event_type: str, fields: cabc.Mapping[str, object]) -> str:
    """Render a structured event as ``[event_type] key=value ...``."""
    pairs = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"[{event_type}] {pairs}" if pairs else f"[{event_type}]"


def log_event(
    logger: _SupportsLog,
    level: LogLevel,
    event_type: str,
    /,
    *,
    exc_info: object | None = None,
    **fields: object,
) -> None:
    """Emit one structured event.

    Parameters
    ----------
    logger : _SupportsLog
        Logger receiving the record.
    level : LogLevel
        Severity of the event.
    event_type : str
        Dotted event identifier, usually a ``StrEnum`` member.
    exc_info : object | None, optional
        Exception attached to the record.
    **fields : object
        Context rendered as ``key=value`` pairs in the order given.

    """
    logger.log(
        level.value,
        format_event(event_type, fields),
        exc_info=exc_info,
        stack_info=False,
    )


def log_debug(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log a DEBUG message built from a percent-style template."""
    logger.log(LogLevel.DEBUG.value, template % args, stack_info=False)


def log_warning(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log a WARNING message built from a percent-style template."""
    logger.log(LogLevel.WARNING.value, template % args, stack_info=False)


__all__ = [
    "LogLevel",
    "configure_logging",
    "format_event",
    "get_logger",
    "log_debug",
    "log_event",
    "log_warning",
    "normalize_log_level",
]
