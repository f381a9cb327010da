"""Process-wide holder for the composed logging runtime.

The registry, consoles, and per-level reporters live in one
:class:`LoggingRuntime` so that :func:`configure` and :func:`shutdown` swap or drop
them together.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import TYPE_CHECKING, Callable, Mapping

from lib_log_aspect.application.ports import ConsolePort
from lib_log_aspect.application.use_cases._types import DispatchCallable, ReportCallable
from lib_log_aspect.domain.levels import LogLevel

if TYPE_CHECKING:
    from lib_log_aspect.adapters import ExceptionReporter, RecordRenderer, StylePalette

    from ._registry import LoggerRegistry
    from ._settings import RuntimeSettings


@dataclass(slots=True)
class LoggingRuntime:
    """Consoles, renderers, reporters, and the logger registry in use."""

    settings: "RuntimeSettings"
    console: ConsolePort
    palette: "StylePalette"
    renderer: "RecordRenderer"
    reporters: Mapping[LogLevel, "ExceptionReporter"]
    dispatch: DispatchCallable
    report: ReportCallable
    registry: "LoggerRegistry"


_ACTIVE: LoggingRuntime | None = None
_RUNTIME_LOCK = RLock()


def set_runtime(runtime: LoggingRuntime) -> None:
    """Replace the active runtime; loggers cached by the old one are orphaned."""

    global _ACTIVE
    with _RUNTIME_LOCK:
        _ACTIVE = runtime


def clear_runtime() -> None:
    """Forget the active runtime; the next lookup recomposes it."""

    global _ACTIVE
    with _RUNTIME_LOCK:
        _ACTIVE = None


def current_runtime(factory: Callable[[], LoggingRuntime]) -> LoggingRuntime:
    """Return the active runtime, composing it with ``factory`` on first use."""

    global _ACTIVE
    with _RUNTIME_LOCK:
        if _ACTIVE is None:
            _ACTIVE = factory()
        return _ACTIVE


def is_initialised() -> bool:
    """Return ``True`` when a runtime has been composed."""

    with _RUNTIME_LOCK:
        return _ACTIVE is not None


__all__ = [
    "LoggingRuntime",
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "set_runtime",
]
