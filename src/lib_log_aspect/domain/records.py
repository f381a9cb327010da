"""Domain record describing one log call.

Purpose
-------
Provide an immutable representation of a log event handed from the logger
core to the renderer. Records are built at the call site, consumed
synchronously, and never retained.

Contents
--------
* :class:`LogRecord` dataclass with message-splitting helpers.
* Utility function ``_ensure_aware`` for timestamp validation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel

_LINE_BREAK = re.compile(r"\r?\n")


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable log event passed from the logger core to the renderer.

    Attributes
    ----------
    level:
        :class:`LogLevel` severity associated with the record.
    message:
        Caller-supplied text; may be empty and may span several lines.
    error:
        Optional exception attached to the call.
    source:
        Logical owner of the logger (typically a qualified type name).
    timestamp:
        Creation time in timezone-aware UTC.
    """

    level: LogLevel
    message: str
    error: BaseException | None = None
    source: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not isinstance(self.level, LogLevel):
            raise TypeError(f"level must be a LogLevel, got {type(self.level).__name__}")
        if not isinstance(self.message, str):
            raise TypeError("message must be a string")
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))

    def lines(self) -> list[str]:
        """Split the message on line breaks, keeping at least one line.

        Examples
        --------
        >>> LogRecord(LogLevel.INFO, "a\\r\\nb\\n").lines()
        ['a', 'b']
        >>> LogRecord(LogLevel.INFO, "").lines()
        ['']
        """

        parts = _LINE_BREAK.split(self.message)
        while len(parts) > 1 and parts[-1] == "":
            parts.pop()
        return parts

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogRecord"]
