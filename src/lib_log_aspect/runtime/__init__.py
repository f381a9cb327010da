"""Runtime façade exposing the process-wide logger registry.

Purpose
-------
Offer the programmatic configuration surface host code uses instead of the
inner layers: get a logger by identity, change thresholds globally or per
namespace, toggle the render mode, reset the registry, and print exception
reports outside a logging call.

Contents
--------
* :func:`configure` - (re)compose the runtime from settings and overrides.
* :func:`get_logger` - cached :class:`Logger` per source identity.
* Bulk updates: :func:`set_global_threshold`, :func:`set_default_threshold`,
  :func:`set_namespace_threshold`, :func:`enable_debug`,
  :func:`disable_debug`, :func:`set_debug_logging`,
  :func:`set_enhanced_formatting`, :func:`reset`.
* Reports: :func:`format_exception`, :func:`print_exception_report`,
  :func:`print_stack_trace`.
* Introspection: :func:`inspect_runtime`, :func:`summary_info`.

System Role
-----------
Outer shell of the clean-architecture layout. The runtime is composed lazily
from :meth:`RuntimeSettings.from_env` on first use and lives until
:func:`shutdown` or the next :func:`configure`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from lib_log_aspect.adapters import CONSOLE_STYLE_THEMES, RichConsoleAdapter
from lib_log_aspect.application.ports import ClockPort, ConsolePort, EnvironmentPort
from lib_log_aspect.application.use_cases import routes_to_error_stream
from lib_log_aspect.domain.levels import LogLevel

from ._composition import ConsoleFactory, build_runtime
from ._logger import Logger
from ._registry import LoggerRegistry, identity_of
from ._settings import RuntimeSettings, coerce_level
from ._state import LoggingRuntime, clear_runtime, current_runtime, is_initialised, set_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    default_threshold: LogLevel
    enhanced: bool
    theme: str | None
    force_color: bool
    no_color: bool
    loggers: Mapping[str, LogLevel]


def _compose_from_env() -> LoggingRuntime:
    return build_runtime(RuntimeSettings.from_env())


def _runtime() -> LoggingRuntime:
    return current_runtime(_compose_from_env)


def configure(
    *,
    console: ConsolePort | None = None,
    console_factory: ConsoleFactory | None = None,
    environment: EnvironmentPort | None = None,
    clock: ClockPort | None = None,
    **overrides: Any,
) -> LoggingRuntime:
    """Compose a fresh runtime and install it as the active singleton.

    Parameters
    ----------
    console:
        Prebuilt console adapter; wins over ``console_factory``.
    console_factory:
        Callable building the console adapter from the resolved settings.
    environment, clock:
        Optional report collaborators (tests pin them for deterministic output).
    **overrides:
        Field overrides for :class:`RuntimeSettings` applied on top of the
        environment (``default_threshold``, ``enhanced``, ``force_color``,
        ``no_color``, ``theme``, ``styles``). ``None`` values are ignored.

    Returns
    -------
    LoggingRuntime
        The installed runtime. Previously cached loggers are discarded.
    """

    settings = RuntimeSettings.from_env(**overrides)
    if console is not None:

        def console_factory(_settings: RuntimeSettings) -> ConsolePort:
            return console

    runtime = build_runtime(settings, console_factory=console_factory, environment=environment, clock=clock)
    set_runtime(runtime)
    return runtime


def registry() -> LoggerRegistry:
    """Return the active registry, composing the runtime on first use."""

    return _runtime().registry


def get_logger(source: object) -> Logger:
    """Return the cached logger for ``source`` (string, module, class, or instance)."""

    return registry().get(source)


def set_global_threshold(level: str | int | LogLevel) -> None:
    registry().set_global_threshold(coerce_level(level))


def set_default_threshold(level: str | int | LogLevel) -> None:
    registry().set_default_threshold(coerce_level(level))


def set_namespace_threshold(prefix: str, level: str | int | LogLevel) -> int:
    return registry().set_namespace_threshold(prefix, coerce_level(level))


def enable_debug(prefix: str) -> int:
    """Lower every cached logger under ``prefix`` to ``DEBUG``."""

    return registry().enable_debug(prefix)


def disable_debug(prefix: str) -> int:
    """Raise every cached logger under ``prefix`` back to ``INFO``."""

    return registry().disable_debug(prefix)


def set_debug_logging(enable: bool) -> None:
    registry().set_debug_logging(enable)


def set_enhanced_formatting(enhanced: bool) -> None:
    registry().set_enhanced_formatting(enhanced)


def reset() -> None:
    """Drop every cached logger; later lookups use the current defaults."""

    registry().reset()


def shutdown() -> None:
    """Forget the active runtime; the next call recomposes it from the environment."""

    clear_runtime()


def format_exception(error: BaseException | None, *, level: str | int | LogLevel = LogLevel.ERROR) -> str:
    """Return the formatted trace of ``error`` as plain text.

    Examples
    --------
    >>> text = format_exception(ValueError("bad input"))
    >>> "ValueError" in text and "bad input" in text
    True
    """

    resolved = coerce_level(level)
    reporter = _runtime().reporters[resolved]
    return "\n".join(line.plain for line in reporter.format_trace(error, level=resolved))


def print_exception_report(
    error: BaseException | None,
    context: Mapping[str, Any] | None = None,
    *,
    level: str | int | LogLevel = LogLevel.ERROR,
) -> None:
    """Write the full report for ``error`` to the stream chosen by ``level``.

    Unlike :meth:`Logger.exception_report` no threshold applies and no header
    line is printed. ``None`` errors are ignored.
    """

    if error is None:
        return
    resolved = coerce_level(level)
    runtime = _runtime()
    to_error = routes_to_error_stream(resolved)
    styled = runtime.console.supports_style(error=to_error)
    lines = runtime.reporters[resolved].report(error, context, styled=styled, level=resolved)
    runtime.console.emit(lines, error=to_error)


def print_stack_trace(error: BaseException | None, *, level: str | int | LogLevel = LogLevel.ERROR) -> None:
    """Write the formatted trace (without environment or suggestions)."""

    if error is None:
        return
    resolved = coerce_level(level)
    runtime = _runtime()
    to_error = routes_to_error_stream(resolved)
    styled = runtime.console.supports_style(error=to_error)
    runtime.console.emit(runtime.reporters[resolved].format(error, styled=styled, level=resolved), error=to_error)


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    runtime = _runtime()
    active = runtime.registry
    return RuntimeSnapshot(
        default_threshold=active.default_threshold,
        enhanced=active.enhanced,
        theme=runtime.settings.theme,
        force_color=runtime.settings.force_color,
        no_color=runtime.settings.no_color,
        loggers={logger.source or "": logger.threshold for logger in active},
    )


def summary_info() -> str:
    """Return the metadata banner used by the CLI ``info`` command."""

    from .. import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "CONSOLE_STYLE_THEMES",
    "Logger",
    "LoggerRegistry",
    "LoggingRuntime",
    "RichConsoleAdapter",
    "RuntimeSettings",
    "RuntimeSnapshot",
    "configure",
    "disable_debug",
    "enable_debug",
    "format_exception",
    "get_logger",
    "identity_of",
    "inspect_runtime",
    "is_initialised",
    "print_exception_report",
    "print_stack_trace",
    "registry",
    "reset",
    "set_debug_logging",
    "set_default_threshold",
    "set_enhanced_formatting",
    "set_global_threshold",
    "set_namespace_threshold",
    "shutdown",
    "summary_info",
]
