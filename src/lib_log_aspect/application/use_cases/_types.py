"""Callable signatures shared by the use-case factories."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord

from ..ports.rendering import ExceptionReporterPort

ReporterLookup = Callable[[LogLevel], ExceptionReporterPort]


class DispatchCallable(Protocol):
    def __call__(self, record: LogRecord, *, enhanced: bool) -> None: ...


class ReportCallable(Protocol):
    def __call__(
        self,
        level: LogLevel,
        error: BaseException | None,
        context: Mapping[str, Any] | None = None,
        *,
        enhanced: bool,
        tips: Sequence[str] = (),
    ) -> None: ...


__all__ = ["DispatchCallable", "ReportCallable", "ReporterLookup"]
