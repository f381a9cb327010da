"""Logger core: threshold gate plus level-specific convenience methods."""

from __future__ import annotations

from typing import Any, Mapping

from lib_log_aspect.application.use_cases._types import DispatchCallable, ReportCallable
from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord
from lib_log_aspect.domain.templates import format_template


class Logger:
    """Per-identity logger holding a mutable threshold and render mode.

    ``log`` is the single filtering gate: records below the threshold return
    before any record is built or rendered. Enabled records go to the
    dispatcher, which renders them and routes ``ERROR`` and above to the error
    stream.
    """

    def __init__(
        self,
        source: str | None,
        dispatch: DispatchCallable,
        report: ReportCallable,
        *,
        threshold: LogLevel = LogLevel.INFO,
        enhanced: bool = True,
    ) -> None:
        """Bind a source identity to the runtime's dispatch and report callables.

        Parameters
        ----------
        source:
            Logical owner of the logger (e.g. ``"app.billing.Invoice"``).
        dispatch:
            Callable produced by :func:`create_dispatch_record`.
        report:
            Callable produced by :func:`create_report_exception`.
        """
        self._source = source
        self._dispatch = dispatch
        self._report = report
        self._threshold = threshold
        self._enhanced = enhanced

    def __repr__(self) -> str:
        return f"Logger(source={self._source!r}, threshold={self._threshold.name}, enhanced={self._enhanced})"

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @threshold.setter
    def threshold(self, level: LogLevel) -> None:
        if not isinstance(level, LogLevel):
            raise TypeError(f"threshold must be a LogLevel, got {type(level).__name__}")
        self._threshold = level

    def set_threshold(self, level: LogLevel) -> None:
        self.threshold = level

    @property
    def enhanced(self) -> bool:
        return self._enhanced

    @enhanced.setter
    def enhanced(self, value: bool) -> None:
        self._enhanced = bool(value)

    def with_enhanced_formatting(self, enhanced: bool) -> "Logger":
        self.enhanced = enhanced
        return self

    def is_enabled(self, level: LogLevel) -> bool:
        return level.is_at_least(self._threshold)

    def log(self, level: LogLevel, message: str, error: BaseException | None = None) -> None:
        """Emit ``message`` at ``level`` when enabled, optionally with ``error``."""

        if not self.is_enabled(level):
            return
        text = message if isinstance(message, str) else format_template("{}", message)
        self._dispatch(LogRecord(level, text, error=error, source=self._source), enhanced=self._enhanced)

    def log_record(self, record: LogRecord) -> None:
        """Emit a prebuilt record through the same threshold gate."""

        if self.is_enabled(record.level):
            self._dispatch(record, enhanced=self._enhanced)

    def exception_report(
        self,
        level: LogLevel,
        error: BaseException | None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Print a header line and the full exception report when enabled."""

        if self.is_enabled(level):
            self._report(level, error, context, enhanced=self._enhanced)

    def exception_report_with_tips(
        self,
        level: LogLevel,
        error: BaseException | None,
        context: Mapping[str, Any] | None = None,
        *tips: str,
    ) -> None:
        """Like :meth:`exception_report`, followed by numbered troubleshooting tips."""

        if self.is_enabled(level):
            self._report(level, error, context, enhanced=self._enhanced, tips=tips)

    @staticmethod
    def format(template: str | None, *args: Any) -> str:
        return format_template(template, *args)

    def trace(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.TRACE, message, error)

    def debug(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.DEBUG, message, error)

    def info(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.INFO, message, error)

    def success(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.SUCCESS, message, error)

    def notice(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.NOTICE, message, error)

    def important(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.IMPORTANT, message, error)

    def warn(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.WARN, message, error)

    warning = warn

    def error(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.ERROR, message, error)

    def severe(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.SEVERE, message, error)

    def fatal(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.FATAL, message, error)

    def stub(self, message: str, error: BaseException | None = None) -> None:
        self.log(LogLevel.STUB, message, error)


__all__ = ["Logger"]
