"""Context-aware exception type and its factory helpers.

Purpose
-------
Give applications an exception that carries its own severity, key/value
context, suggested solution, and package highlight overrides, so the
exception reporter can render richer reports without inspecting foreign
exception internals.

Contents
--------
* :class:`ContextAwareError` with fluent ``with_*`` mutators.
* :class:`ContextAwareErrorBuilder` for staged construction.
* :class:`ValidationError`, :class:`ConfigurationError`,
  :class:`DatabaseError` category variants.
* Factory functions (:func:`create`, :func:`wrap`, ...) seeding system context.

System Role
-----------
Domain value consumed by the logger core (rich error dispatch), the exception
reporter (context merge and styling), and the call interception layer
(enrichment of failures before re-raising).
"""

from __future__ import annotations

import threading
import time
from typing import Any, Mapping

from .frames import type_name_of
from .levels import LogLevel

_MISSING = object()

SOLUTION_KEY = "Suggested Solution"


class ContextAwareError(Exception):
    """Exception carrying context, severity, solution, and style overrides.

    The ``with_*`` mutators return ``self`` so calls can be chained before
    raising. Once an instance has been reported it should be treated as
    immutable.

    Examples
    --------
    >>> err = ContextAwareError("boom").with_context("user_id", 7).with_solution("retry")
    >>> err.context, err.solution, err.severity
    ({'user_id': 7}, 'retry', <LogLevel.ERROR: 800>)
    """

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        if message is None and cause is not None:
            message = f"{type_name_of(cause)}: {cause}"
        super().__init__(*(() if message is None else (message,)))
        self.message = message
        self.context: dict[str, Any] = {}
        self.solution: str | None = None
        self.package_highlights: dict[str, str] = {}
        self._severity: LogLevel | None = None
        if cause is not None:
            self.__cause__ = cause

    @property
    def severity(self) -> LogLevel:
        """Return the presentation severity, ``ERROR`` unless overridden."""

        return self._severity if self._severity is not None else LogLevel.ERROR

    def with_context(self, key: str | Mapping[str, Any], value: Any = _MISSING) -> "ContextAwareError":
        """Merge one key/value pair or a whole mapping; last write wins."""

        if isinstance(key, Mapping):
            if value is not _MISSING:
                raise TypeError("value must not be given together with a mapping")
            self.context.update(key)
            return self
        if value is _MISSING:
            raise TypeError("with_context() requires a value for a single key")
        self.context[key] = value
        return self

    def with_solution(self, solution: str | None) -> "ContextAwareError":
        self.solution = solution
        return self

    def with_severity(self, level: LogLevel | None) -> "ContextAwareError":
        """Change how type, message, and cause sections are styled."""

        if level is not None and not isinstance(level, LogLevel):
            raise TypeError(f"level must be a LogLevel, got {type(level).__name__}")
        self._severity = level
        return self

    def highlight_package(self, prefix: str, style: str) -> "ContextAwareError":
        """Style frames whose declaring type starts with ``prefix``."""

        self.package_highlights[prefix] = style
        return self

    def report_context(self, additional: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return own context merged with ``additional`` (which wins) and the solution."""

        merged = dict(self.context)
        if additional:
            merged.update(additional)
        if self.solution is not None:
            merged[SOLUTION_KEY] = self.solution
        return merged

    @classmethod
    def from_exception(cls, error: BaseException | None) -> "ContextAwareError | None":
        """Return ``error`` itself when already context-aware, else wrap it."""

        if error is None:
            return None
        if isinstance(error, ContextAwareError):
            return error
        return cls(str(error), error)

    @classmethod
    def builder(cls, message: str) -> "ContextAwareErrorBuilder":
        return ContextAwareErrorBuilder(message, error_type=cls)


class ContextAwareErrorBuilder:
    """Staged construction of a :class:`ContextAwareError`."""

    def __init__(self, message: str, *, error_type: type[ContextAwareError] = ContextAwareError) -> None:
        self._message = message
        self._error_type = error_type
        self._cause: BaseException | None = None
        self._context: dict[str, Any] = {}
        self._severity: LogLevel | None = None
        self._solution: str | None = None
        self._highlights: dict[str, str] = {}

    def cause(self, cause: BaseException | None) -> "ContextAwareErrorBuilder":
        self._cause = cause
        return self

    def context(self, key: str | Mapping[str, Any], value: Any = _MISSING) -> "ContextAwareErrorBuilder":
        if isinstance(key, Mapping):
            self._context.update(key)
        else:
            if value is _MISSING:
                raise TypeError("context() requires a value for a single key")
            self._context[key] = value
        return self

    def severity(self, level: LogLevel) -> "ContextAwareErrorBuilder":
        self._severity = level
        return self

    def solution(self, solution: str) -> "ContextAwareErrorBuilder":
        self._solution = solution
        return self

    def highlight_package(self, prefix: str, style: str) -> "ContextAwareErrorBuilder":
        self._highlights[prefix] = style
        return self

    def build(self) -> ContextAwareError:
        error = self._error_type(self._message, self._cause)
        if self._context:
            error.with_context(self._context)
        if self._severity is not None:
            error.with_severity(self._severity)
        if self._solution is not None:
            error.with_solution(self._solution)
        for prefix, style in self._highlights.items():
            error.highlight_package(prefix, style)
        return error


class _CategoryError(ContextAwareError):
    """Base for category variants fixed at ``ERROR`` with a highlight style."""

    highlight_prefix = ""
    highlight_style = "error"

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)
        self.with_severity(LogLevel.ERROR)
        self.highlight_package(self.highlight_prefix, self.highlight_style)


class ValidationError(_CategoryError):
    """Input failed a validation rule."""

    highlight_prefix = "validation"
    highlight_style = "validation_error"

    def with_field(self, field_name: str) -> "ValidationError":
        self.with_context("field", field_name)
        return self

    def with_value(self, invalid_value: Any) -> "ValidationError":
        self.with_context("value", invalid_value)
        return self

    def with_constraint(self, name: str, constraint_value: Any) -> "ValidationError":
        self.with_context(f"constraint.{name}", constraint_value)
        return self


class ConfigurationError(_CategoryError):
    """A configuration property is missing or malformed."""

    highlight_prefix = "config"
    highlight_style = "config_error"

    def with_property(self, name: str) -> "ConfigurationError":
        self.with_context("property", name)
        return self

    def with_source(self, source: str) -> "ConfigurationError":
        self.with_context("source", source)
        return self


class DatabaseError(_CategoryError):
    """A data-access operation failed."""

    highlight_prefix = "db"
    highlight_style = "db_error"

    def with_query(self, query: str) -> "DatabaseError":
        self.with_context("query", query)
        return self

    def with_parameters(self, *params: Any) -> "DatabaseError":
        self.with_context("parameters", params)
        return self

    def with_database(self, database: str) -> "DatabaseError":
        self.with_context("database", database)
        return self


DEFAULT_PACKAGE_HIGHLIGHTS: Mapping[str, str] = {
    "lib_log_aspect": "info",
}
#: Highlight rules seeded into every error built by the factory helpers.


def system_context() -> dict[str, Any]:
    """Return thread identity and an epoch-millisecond timestamp."""

    current = threading.current_thread()
    return {
        "thread_name": current.name,
        "thread_id": threading.get_ident(),
        "timestamp": int(time.time() * 1000),
    }


def _seed(error: ContextAwareError) -> ContextAwareError:
    error.with_context(system_context())
    for prefix, style in DEFAULT_PACKAGE_HIGHLIGHTS.items():
        error.highlight_package(prefix, style)
    return error


def create(message: str, level: LogLevel, cause: BaseException | None = None) -> ContextAwareError:
    """Build a context-aware error with system context and default highlights."""

    return _seed(ContextAwareError(message, cause).with_severity(level))


def builder(message: str) -> ContextAwareErrorBuilder:
    staged = ContextAwareError.builder(message).context(system_context())
    for prefix, style in DEFAULT_PACKAGE_HIGHLIGHTS.items():
        staged.highlight_package(prefix, style)
    return staged


def error(message: str, cause: BaseException | None = None) -> ContextAwareError:
    return create(message, LogLevel.ERROR, cause)


def warning(message: str, cause: BaseException | None = None) -> ContextAwareError:
    return create(message, LogLevel.WARN, cause)


def severe(message: str, cause: BaseException | None = None) -> ContextAwareError:
    return create(message, LogLevel.SEVERE, cause)


def validation_error(message: str, cause: BaseException | None = None) -> ValidationError:
    exc = ValidationError(message, cause)
    exc.with_context(system_context())
    return exc


def config_error(message: str, cause: BaseException | None = None) -> ConfigurationError:
    exc = ConfigurationError(message, cause)
    exc.with_context(system_context())
    return exc


def db_error(message: str, cause: BaseException | None = None) -> DatabaseError:
    exc = DatabaseError(message, cause)
    exc.with_context(system_context())
    return exc


def wrap(
    exc: BaseException,
    level: LogLevel,
    context: Mapping[str, Any] | None = None,
) -> ContextAwareError:
    """Return a context-aware view of ``exc`` with ``context`` merged.

    An existing :class:`ContextAwareError` is returned unchanged apart from the
    merged context; any other exception becomes the ``__cause__`` of a new
    wrapper carrying ``level``.
    """

    wrapped = exc if isinstance(exc, ContextAwareError) else create(str(exc), level, exc)
    if context:
        wrapped.with_context(context)
    return wrapped


__all__ = [
    "DEFAULT_PACKAGE_HIGHLIGHTS",
    "SOLUTION_KEY",
    "ConfigurationError",
    "ContextAwareError",
    "ContextAwareErrorBuilder",
    "DatabaseError",
    "ValidationError",
    "builder",
    "config_error",
    "create",
    "db_error",
    "error",
    "severe",
    "system_context",
    "validation_error",
    "warning",
    "wrap",
]
