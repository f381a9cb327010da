"""Use case printing a full exception report through the console port."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord

from ..ports.console import ConsolePort
from ..ports.rendering import RecordRendererPort
from ._types import ReportCallable, ReporterLookup
from .log_record import routes_to_error_stream

HEADER_MESSAGE = "Exception encountered:"


def create_report_exception(
    *,
    console: ConsolePort,
    renderer: RecordRendererPort,
    reporter_for: ReporterLookup,
) -> ReportCallable:
    """Return ``report(level, error, context, enhanced=..., tips=...)``.

    The callable writes a level-marked header line, the full report produced by
    the level's exception reporter, and optional numbered troubleshooting
    tips. A missing ``error`` makes the call a no-op. Threshold checks belong
    to the caller.
    """

    def report(
        level: LogLevel,
        error: BaseException | None,
        context: Mapping[str, Any] | None = None,
        *,
        enhanced: bool,
        tips: Sequence[str] = (),
    ) -> None:
        if error is None:
            return
        to_error = routes_to_error_stream(level)
        styled = console.supports_style(error=to_error)
        reporter = reporter_for(level)
        lines = renderer.render(LogRecord(level, HEADER_MESSAGE), enhanced=enhanced)
        lines.extend(reporter.report(error, context, styled=styled, level=level))
        if tips:
            lines.extend(reporter.troubleshooting_tips(tips))
        console.emit(lines, error=to_error)

    return report


__all__ = ["HEADER_MESSAGE", "create_report_exception"]
