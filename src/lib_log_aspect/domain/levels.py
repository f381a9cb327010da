"""Severity scale carrying rank, glyph, description, and style metadata.

Purpose
-------
Offer a closed, totally ordered set of severities that augments the stdlib
levels with presentation metadata (glyphs and semantic style names) and the
lenient conversions used by configuration-driven callers.

Contents
--------
* :class:`LogLevel` enum whose value is the numeric rank.
* ``_LEVEL_TABLE`` constant mapping levels to immutable :class:`LevelMetadata`.
* :func:`compare` / :func:`is_at_least` free functions over ranks.

System Role
-----------
Used by the logger core to gate records, by the renderer to pick markers and
styles, and by the exception reporter to restyle headers per severity.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LevelMetadata:
    """Presentation metadata attached to a level at definition time."""

    glyph: str
    description: str
    style: str
    python_level: int


class LogLevel(Enum):
    """Enumerated severities ordered by rank (the enum value)."""

    STUB = 50
    TRACE = 100
    DEBUG = 200
    INFO = 300
    SUCCESS = 350
    NOTICE = 500
    IMPORTANT = 600
    WARN = 700
    ERROR = 800
    SEVERE = 900
    FATAL = 1000
    OFF = sys.maxsize

    @property
    def rank(self) -> int:
        """Return the numeric rank; higher means more severe."""

        return self.value

    @property
    def glyph(self) -> str:
        """Return the unicode glyph shown by the enhanced console mode."""

        return _LEVEL_TABLE[self].glyph

    @property
    def description(self) -> str:
        return _LEVEL_TABLE[self].description

    @property
    def style(self) -> str:
        """Return the semantic style name resolved by the style palette."""

        return _LEVEL_TABLE[self].style

    @property
    def severity(self) -> str:
        """Return the lowercase level name."""

        return self.name.lower()

    @property
    def label(self) -> str:
        """Return the bracketed marker used by the plain console mode.

        Examples
        --------
        >>> LogLevel.WARN.label
        '[WARN]'
        """

        return f"[{self.name}]"

    @property
    def detailed_description(self) -> str:
        """Return ``NAME (value: N): description`` for help screens."""

        return f"{self.name} (value: {self.value}): {self.description}"

    def is_at_least(self, threshold: "LogLevel") -> bool:
        """Return ``True`` when this level ranks at or above ``threshold``."""

        return self.value >= threshold.value

    def to_python_level(self) -> int:
        """Return the nearest :mod:`logging` numeric for host bridging."""

        return _LEVEL_TABLE[self].python_level

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value >= other.value

    @classmethod
    def from_name(cls, name: str | None) -> "LogLevel":
        """Resolve ``name`` case-insensitively, falling back to ``INFO``.

        Blank input yields ``INFO`` silently; unknown names yield ``INFO`` and
        emit a warning on this module's logger instead of raising.

        Examples
        --------
        >>> LogLevel.from_name("debug") is LogLevel.DEBUG
        True
        >>> LogLevel.from_name("warning") is LogLevel.WARN
        True
        """

        if name is None or not name.strip():
            return cls.INFO
        normalized = name.strip().upper()
        normalized = _NAME_ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError:
            logger.warning("Unknown log level: %s, using INFO", name)
            return cls.INFO

    @classmethod
    def from_rank(cls, rank: int) -> "LogLevel":
        """Return the highest level whose rank is ``<= rank``.

        Unmapped values round down to the nearest defined level. When no level
        qualifies (``rank`` below ``STUB``) the result is ``OFF``.

        Examples
        --------
        >>> LogLevel.from_rank(750) is LogLevel.WARN
        True
        >>> LogLevel.from_rank(10) is LogLevel.OFF
        True
        """

        if isinstance(rank, bool) or not isinstance(rank, int):
            raise TypeError(f"rank must be an int, got {type(rank).__name__}")
        candidates = [level for level in cls if level.value <= rank]
        if not candidates:
            return cls.OFF
        return max(candidates, key=lambda level: level.value)


_LEVEL_TABLE: dict[LogLevel, LevelMetadata] = {
    LogLevel.TRACE: LevelMetadata("🔍", "Detailed tracing information", "trace", 5),
    LogLevel.DEBUG: LevelMetadata("🐞", "Debugging information", "debug", logging.DEBUG),
    LogLevel.INFO: LevelMetadata("ℹ️", "General information", "info", logging.INFO),
    LogLevel.SUCCESS: LevelMetadata("✅", "Operation completed successfully", "success", logging.INFO),
    LogLevel.NOTICE: LevelMetadata("📢", "Notable event that might need attention", "highlight", logging.INFO),
    LogLevel.IMPORTANT: LevelMetadata("❗", "Significant event requiring attention", "important", logging.WARNING),
    LogLevel.WARN: LevelMetadata("⚠️", "Warning that might cause issues", "warning", logging.WARNING),
    LogLevel.ERROR: LevelMetadata("❌", "Error that affects operation", "error", logging.ERROR),
    LogLevel.SEVERE: LevelMetadata("🚨", "Serious error that may cause system instability", "critical_error", logging.CRITICAL),
    LogLevel.FATAL: LevelMetadata("💀", "Critical error that will cause system failure", "security_alert", logging.CRITICAL),
    LogLevel.STUB: LevelMetadata("🚧", "Code under development", "dev_todo", 5),
    LogLevel.OFF: LevelMetadata("🚫", "Logging disabled", "plain", sys.maxsize),
}
# Frozen metadata per level; never mutated after import.

_NAME_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}


def compare(a: LogLevel, b: LogLevel) -> int:
    """Return ``-1``, ``0`` or ``1`` ordering ``a`` against ``b`` by rank."""

    return (a.value > b.value) - (a.value < b.value)


def is_at_least(level: LogLevel, threshold: LogLevel) -> bool:
    """Return ``True`` when ``level`` passes ``threshold``."""

    return level.value >= threshold.value


__all__ = ["LevelMetadata", "LogLevel", "compare", "is_at_least"]
