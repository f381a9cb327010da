"""Domain entities and value objects used by the logging core."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    ContextAwareError,
    ContextAwareErrorBuilder,
    DatabaseError,
    ValidationError,
)
from .frames import StackFrame, cause_of, frames_of, iter_causes, message_of, type_name_of
from .levels import LogLevel, compare, is_at_least
from .records import LogRecord
from .templates import format_template

__all__ = [
    "ConfigurationError",
    "ContextAwareError",
    "ContextAwareErrorBuilder",
    "DatabaseError",
    "LogLevel",
    "LogRecord",
    "StackFrame",
    "ValidationError",
    "cause_of",
    "compare",
    "format_template",
    "frames_of",
    "is_at_least",
    "iter_causes",
    "message_of",
    "type_name_of",
]
