"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`RuntimeSettings` into a live :class:`LoggingRuntime`: the
Rich console adapter, the style palette, one exception reporter per level,
the dispatch/report use cases, and the logger registry that hands out
:class:`Logger` instances bound to them.
"""

from __future__ import annotations

from typing import Callable, Mapping

from lib_log_aspect.adapters import ExceptionReporter, RecordRenderer, RichConsoleAdapter, StylePalette
from lib_log_aspect.application.ports import ClockPort, ConsolePort, EnvironmentPort
from lib_log_aspect.application.use_cases import create_dispatch_record, create_report_exception
from lib_log_aspect.domain.levels import LogLevel

from ._logger import Logger
from ._registry import LoggerRegistry
from ._settings import RuntimeSettings
from ._state import LoggingRuntime

ConsoleFactory = Callable[[RuntimeSettings], ConsolePort]


def create_console(settings: RuntimeSettings) -> ConsolePort:
    """Return the default Rich console adapter for ``settings``."""

    return RichConsoleAdapter(force_color=settings.force_color, no_color=settings.no_color)


def create_reporters(
    palette: StylePalette,
    *,
    environment: EnvironmentPort | None = None,
    clock: ClockPort | None = None,
) -> Mapping[LogLevel, ExceptionReporter]:
    """Build one exception reporter per level, styled by that level."""

    return {
        level: ExceptionReporter(palette, environment=environment, clock=clock).with_level(level)
        for level in LogLevel
    }


def build_runtime(
    settings: RuntimeSettings,
    *,
    console_factory: ConsoleFactory | None = None,
    environment: EnvironmentPort | None = None,
    clock: ClockPort | None = None,
) -> LoggingRuntime:
    """Assemble the logging runtime from resolved settings."""

    console = console_factory(settings) if console_factory is not None else create_console(settings)
    palette = StylePalette(settings.styles, theme=settings.theme)
    renderer = RecordRenderer(palette)
    reporters = create_reporters(palette, environment=environment, clock=clock)
    reporter_for = reporters.__getitem__

    dispatch = create_dispatch_record(console=console, renderer=renderer, reporter_for=reporter_for)
    report = create_report_exception(console=console, renderer=renderer, reporter_for=reporter_for)

    def make_logger(identity: str, threshold: LogLevel, enhanced: bool) -> Logger:
        return Logger(identity, dispatch, report, threshold=threshold, enhanced=enhanced)

    registry = LoggerRegistry(
        make_logger,
        default_threshold=settings.default_threshold,
        enhanced=settings.enhanced,
    )
    return LoggingRuntime(
        settings=settings,
        console=console,
        palette=palette,
        renderer=renderer,
        reporters=reporters,
        dispatch=dispatch,
        report=report,
        registry=registry,
    )


__all__ = ["ConsoleFactory", "build_runtime", "create_console", "create_reporters"]
