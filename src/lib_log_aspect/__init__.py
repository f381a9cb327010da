"""Method-level logging facade with Rich-rendered exception reports.

Typical use::

    from lib_log_aspect import LogLevel, get_logger, log_methods

    log = get_logger(__name__)
    log.info("ready")

    @log_methods
    class Billing:
        def charge(self, amount): ...

Loggers are cached per source identity in a process-wide registry; records
below a logger's threshold are dropped before rendering, ``ERROR`` and above
go to stderr, everything else to stdout.
"""

from __future__ import annotations

from .aspect import classify_severity, log_calls, log_methods, summarize_value
from .domain import exceptions as errors
from .domain.exceptions import (
    ConfigurationError,
    ContextAwareError,
    ContextAwareErrorBuilder,
    DatabaseError,
    ValidationError,
)
from .domain.levels import LogLevel
from .domain.records import LogRecord
from .domain.templates import format_template
from .runtime import (
    Logger,
    LoggerRegistry,
    RuntimeSettings,
    RuntimeSnapshot,
    configure,
    disable_debug,
    enable_debug,
    format_exception,
    get_logger,
    inspect_runtime,
    print_exception_report,
    print_stack_trace,
    reset,
    set_debug_logging,
    set_default_threshold,
    set_enhanced_formatting,
    set_global_threshold,
    set_namespace_threshold,
    shutdown,
    summary_info,
)

__all__ = [
    "ConfigurationError",
    "ContextAwareError",
    "ContextAwareErrorBuilder",
    "DatabaseError",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LoggerRegistry",
    "RuntimeSettings",
    "RuntimeSnapshot",
    "ValidationError",
    "classify_severity",
    "configure",
    "disable_debug",
    "enable_debug",
    "errors",
    "format_exception",
    "format_template",
    "get_logger",
    "inspect_runtime",
    "log_calls",
    "log_methods",
    "print_exception_report",
    "print_stack_trace",
    "reset",
    "set_debug_logging",
    "set_default_threshold",
    "set_enhanced_formatting",
    "set_global_threshold",
    "set_namespace_threshold",
    "shutdown",
    "summarize_value",
    "summary_info",
]
