"""Use case rendering one enabled record and routing it to a stream.

Purpose
-------
Turn a :class:`LogRecord` that already passed the threshold gate into styled
lines and write them to the error stream (``ERROR`` and above) or the normal
stream (everything else).

Contents
--------
* :func:`create_dispatch_record` factory returning the runtime callable.

System Role
-----------
Application-layer orchestrator invoked by every :class:`~lib_log_aspect.runtime.Logger`
once its threshold check succeeds.
"""

from __future__ import annotations

import logging

from lib_log_aspect.domain.exceptions import ContextAwareError
from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord

from ..ports.console import ConsolePort
from ..ports.rendering import RecordRendererPort
from ._types import DispatchCallable, ReporterLookup

logger = logging.getLogger(__name__)


def routes_to_error_stream(level: LogLevel) -> bool:
    """Return ``True`` when ``level`` belongs on the error stream."""

    return level.is_at_least(LogLevel.ERROR)


def create_dispatch_record(
    *,
    console: ConsolePort,
    renderer: RecordRendererPort,
    reporter_for: ReporterLookup,
) -> DispatchCallable:
    """Build the dispatcher capturing the console and rendering collaborators.

    Parameters
    ----------
    console:
        Adapter implementing :class:`ConsolePort`.
    renderer:
        Adapter producing message lines and compact error renderings.
    reporter_for:
        Lookup returning the exception reporter configured for a level; used
        for context-aware errors in enhanced mode.

    Returns
    -------
    DispatchCallable
        ``dispatch(record, enhanced=...)``. Rendering failures for records
        routed to the normal stream are logged and swallowed; failures on the
        error stream propagate.
    """

    def _render(record: LogRecord, *, enhanced: bool, styled: bool) -> list:
        lines = renderer.render(record, enhanced=enhanced)
        error = record.error
        if error is None:
            return lines
        lines.append(renderer.blank())
        if enhanced and isinstance(error, ContextAwareError):
            lines.extend(reporter_for(record.level).format(error, styled=styled, level=record.level))
        else:
            lines.extend(renderer.render_error(error, styled=styled))
        return lines

    def dispatch(record: LogRecord, *, enhanced: bool) -> None:
        to_error = routes_to_error_stream(record.level)
        try:
            lines = _render(record, enhanced=enhanced, styled=console.supports_style(error=to_error))
        except Exception:
            if to_error:
                raise
            logger.exception("Failed to render %s record from %s", record.level.name, record.source)
            return
        console.emit(lines, error=to_error)

    return dispatch


__all__ = ["create_dispatch_record", "routes_to_error_stream"]
