"""Ports for record rendering and exception reporting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, Sequence, runtime_checkable

from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord

if TYPE_CHECKING:
    from rich.text import Text


@runtime_checkable
class RecordRendererPort(Protocol):
    """Turn records and bare errors into styled lines."""

    def render(self, record: LogRecord, *, enhanced: bool) -> list["Text"]: ...

    def prefix(self, level: LogLevel, *, enhanced: bool) -> "Text": ...

    def render_error(self, error: BaseException, *, styled: bool) -> list["Text"]: ...

    def blank(self) -> "Text": ...


@runtime_checkable
class ExceptionReporterPort(Protocol):
    """Render formatted traces and full exception reports."""

    def format(self, error: BaseException, *, styled: bool = True, level: LogLevel | None = None) -> list["Text"]: ...

    def report(
        self,
        error: BaseException,
        context: Mapping[str, Any] | None = None,
        *,
        styled: bool = True,
        level: LogLevel | None = None,
    ) -> list["Text"]: ...

    def troubleshooting_tips(self, tips: Sequence[str]) -> list["Text"]: ...


__all__ = ["ExceptionReporterPort", "RecordRendererPort"]
