"""Process-wide logger registry with bulk threshold and render-mode updates.

Purpose
-------
Cache exactly one :class:`Logger` per source identity and apply global or
namespace-scoped settings to every cached instance.

Contents
--------
* :class:`LoggerRegistry` - get-or-create cache guarded by an ``RLock``.
* :func:`identity_of` - derive a source identity from strings, types, modules,
  or instances.
"""

from __future__ import annotations

from threading import RLock
from types import ModuleType
from typing import Callable, Iterator

from lib_log_aspect.domain.levels import LogLevel

from ._logger import Logger

LoggerFactory = Callable[[str, LogLevel, bool], Logger]


def identity_of(source: object) -> str:
    """Return the registry key for ``source``.

    Strings are used verbatim; modules use ``__name__``; classes and instances
    use the qualified class name.

    Examples
    --------
    >>> identity_of("app.Service")
    'app.Service'
    >>> identity_of(LoggerRegistry)
    'lib_log_aspect.runtime._registry.LoggerRegistry'
    """

    if isinstance(source, str):
        return source
    if isinstance(source, ModuleType):
        return source.__name__
    kind = source if isinstance(source, type) else type(source)
    return f"{kind.__module__}.{kind.__qualname__}"


class LoggerRegistry:
    """Cache of loggers keyed by source identity.

    Creation and every bulk update hold the same lock, so a logger created
    concurrently with an update either sees the new default or is reached by
    the update loop.
    """

    def __init__(
        self,
        factory: LoggerFactory,
        *,
        default_threshold: LogLevel = LogLevel.INFO,
        enhanced: bool = True,
    ) -> None:
        self._factory = factory
        self._default_threshold = default_threshold
        self._enhanced = enhanced
        self._loggers: dict[str, Logger] = {}
        self._lock = RLock()

    @property
    def default_threshold(self) -> LogLevel:
        return self._default_threshold

    @property
    def enhanced(self) -> bool:
        return self._enhanced

    def get(self, source: object) -> Logger:
        """Return the cached logger for ``source``, creating it on first use."""

        identity = identity_of(source)
        logger = self._loggers.get(identity)
        if logger is not None:
            return logger
        with self._lock:
            logger = self._loggers.get(identity)
            if logger is None:
                logger = self._factory(identity, self._default_threshold, self._enhanced)
                self._loggers[identity] = logger
            return logger

    def set_default_threshold(self, level: LogLevel) -> None:
        """Change the threshold for loggers created from now on only."""

        with self._lock:
            self._default_threshold = level

    def set_global_threshold(self, level: LogLevel) -> None:
        """Set the default and retroactively apply it to every cached logger."""

        with self._lock:
            self._default_threshold = level
            for logger in self._loggers.values():
                logger.threshold = level

    def set_namespace_threshold(self, prefix: str, level: LogLevel) -> int:
        """Apply ``level`` to cached loggers whose identity starts with ``prefix``.

        Returns the number of loggers updated.
        """

        updated = 0
        with self._lock:
            for identity, logger in self._loggers.items():
                if identity.startswith(prefix):
                    logger.threshold = level
                    updated += 1
        return updated

    def enable_debug(self, prefix: str) -> int:
        return self.set_namespace_threshold(prefix, LogLevel.DEBUG)

    def disable_debug(self, prefix: str) -> int:
        return self.set_namespace_threshold(prefix, LogLevel.INFO)

    def set_debug_logging(self, enable: bool) -> None:
        self.set_global_threshold(LogLevel.DEBUG if enable else LogLevel.INFO)

    def set_enhanced_formatting(self, enhanced: bool) -> None:
        """Set the default render mode and apply it to every cached logger."""

        with self._lock:
            self._enhanced = bool(enhanced)
            for logger in self._loggers.values():
                logger.enhanced = self._enhanced

    def reset(self) -> None:
        """Drop every cached logger; later lookups recreate them with current defaults."""

        with self._lock:
            self._loggers.clear()

    def identities(self) -> list[str]:
        with self._lock:
            return sorted(self._loggers)

    def __contains__(self, source: object) -> bool:
        return identity_of(source) in self._loggers

    def __len__(self) -> int:
        return len(self._loggers)

    def __iter__(self) -> Iterator[Logger]:
        with self._lock:
            return iter(list(self._loggers.values()))


__all__ = ["LoggerRegistry", "identity_of"]
