"""Runtime settings resolved from arguments and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from lib_log_aspect.domain.levels import LogLevel

THRESHOLD_ENV_VAR = "LOG_ASPECT_THRESHOLD"
ENHANCED_ENV_VAR = "LOG_ASPECT_ENHANCED"
THEME_ENV_VAR = "LOG_ASPECT_THEME"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True, frozen=True)
class RuntimeSettings:
    """Immutable configuration consumed by :func:`build_runtime`.

    Attributes
    ----------
    default_threshold:
        Threshold given to loggers created by the registry.
    enhanced:
        ``True`` renders ``[LEVEL] glyph`` markers, ``False`` plain ``[LEVEL]``.
    force_color / no_color:
        Colour overrides handed to the Rich consoles.
    theme / styles:
        Optional palette name and semantic-style overrides.
    """

    default_threshold: LogLevel = LogLevel.INFO
    enhanced: bool = True
    force_color: bool = False
    no_color: bool = False
    theme: str | None = None
    styles: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> "RuntimeSettings":
        """Build settings from environment variables, then apply ``overrides``.

        Examples
        --------
        >>> import os
        >>> _ = os.environ.pop(THRESHOLD_ENV_VAR, None)
        >>> RuntimeSettings.from_env().default_threshold is LogLevel.INFO
        True
        """

        settings = cls(
            default_threshold=LogLevel.from_name(os.getenv(THRESHOLD_ENV_VAR)),
            enhanced=env_bool(ENHANCED_ENV_VAR, default=True),
            force_color=env_bool("FORCE_COLOR", default=False),
            no_color=os.getenv("NO_COLOR") not in (None, ""),
            theme=os.getenv(THEME_ENV_VAR) or None,
        )
        return settings.with_overrides(**overrides)

    def with_overrides(self, **overrides: Any) -> "RuntimeSettings":
        """Return a copy with non-``None`` ``overrides`` applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if "default_threshold" in changes:
            changes["default_threshold"] = coerce_level(changes["default_threshold"])
        return replace(self, **changes)


def env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['LOG_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def coerce_level(level: str | int | LogLevel) -> LogLevel:
    """Normalise level inputs (enum, name, or rank) into :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("warn") is LogLevel.WARN
    True
    >>> coerce_level(LogLevel.ERROR) is LogLevel.ERROR
    True
    >>> coerce_level(850) is LogLevel.ERROR
    True
    """
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, str):
        return LogLevel.from_name(level)
    if isinstance(level, int) and not isinstance(level, bool):
        return LogLevel.from_rank(level)
    raise TypeError(f"Unsupported level value: {level!r}")


__all__ = ["ENHANCED_ENV_VAR", "THEME_ENV_VAR", "THRESHOLD_ENV_VAR", "RuntimeSettings", "coerce_level", "env_bool"]
