"""Call interception decorators that log entry, exit, and failures.

Purpose
-------
Observe ordinary function and method calls without the caller touching a
logger: :func:`log_calls` wraps one callable, :func:`log_methods` wraps every
public method of a class. Each call logs ``Owner.method(args)`` on entry and
``Owner.method completed in Nms`` on exit at the configured level. Failures are
classified, enriched with call context, written as a full exception report,
and re-raised; logging never suppresses the failure.

Contents
--------
* :func:`log_calls` / :func:`log_methods` - the decorators.
* :func:`classify_severity` - fixed name-based severity classification.
* :func:`summarize_value` - redaction and truncation of arguments/results.
* :func:`enrich_error` - merge call context into a context-aware error.

System Role
-----------
Boundary between host code and the logging core. All hard logic (severity
classification, enrichment, rendering) lives in plain functions so it is
testable without decorating anything.
"""

from __future__ import annotations

import array
import functools
import inspect
import re
import threading
import time
from collections.abc import Sized
from typing import Any, Callable, Mapping, TypeVar, overload

from .domain import exceptions as factory
from .domain.exceptions import ContextAwareError
from .domain.levels import LogLevel
from .runtime import Logger, get_logger

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T", bound=type)

MARKER_ATTRIBUTE = "__log_calls__"

MAX_VALUE_LENGTH = 50
MAX_COLLECTION_SIZE = 5
SENSITIVE_TYPE_MARKERS = ("user", "password", "credential", "payment", "credit", "account")

FATAL_MARKERS = (
    "outofmemory",
    "memoryerror",
    "stackoverflow",
    "recursionerror",
    "linkageerror",
    "importerror",
    "security",
)
SEVERE_MARKERS = ("sql", "file", "network", "timeout", "connection", "oserror")
SEVERE_TOKENS = frozenset({"io"})
ERROR_MARKERS = ("illegal", "invalid", "validation", "argument", "state")

EXCLUDED_METHODS = frozenset(
    {
        "__repr__",
        "__str__",
        "__hash__",
        "__eq__",
        "__format__",
        "__init_subclass__",
        "__class_getitem__",
        "log",
        "log_record",
        "format",
        "is_enabled",
        "exception_report",
        "exception_report_with_tips",
        "print_report",
        "print_trace",
    }
)

_TOKEN_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")
_IGNORED_BASES = (object, BaseException, Exception)


def _name_tokens(name: str) -> set[str]:
    """Split a CamelCase name into lowercase words.

    >>> sorted(_name_tokens("BlockingIOError"))
    ['blocking', 'error', 'io']
    """
    return {token.lower() for token in _TOKEN_RE.findall(name)}


def classify_severity(error: BaseException) -> LogLevel:
    """Return the severity used when an intercepted call raises ``error``.

    Context-aware errors keep their own severity. Otherwise the
    names of the exception type and its bases are matched against fixed marker
    tables, most severe first: memory, recursion, import, and security
    failures are ``FATAL``; SQL, I/O, file, network, timeout, and connection
    failures are ``SEVERE``; everything else is ``ERROR``. The ``io`` marker
    matches a whole word only, so ``Exception`` does not count as I/O.

    Examples
    --------
    >>> classify_severity(MemoryError()).name
    'FATAL'
    >>> classify_severity(FileNotFoundError("x")).name
    'SEVERE'
    >>> classify_severity(ValueError("x")).name
    'ERROR'
    """

    if isinstance(error, ContextAwareError):
        return error.severity
    names = [kind.__qualname__ for kind in type(error).__mro__ if kind not in _IGNORED_BASES]
    lowered = [name.lower() for name in names]
    if any(marker in name for name in lowered for marker in FATAL_MARKERS):
        return LogLevel.FATAL
    if any(marker in name for name in lowered for marker in SEVERE_MARKERS):
        return LogLevel.SEVERE
    if any(SEVERE_TOKENS & _name_tokens(name) for name in names):
        return LogLevel.SEVERE
    if any(marker in name for name in lowered for marker in ERROR_MARKERS):
        return LogLevel.ERROR
    return LogLevel.ERROR


def is_large_or_sensitive(value: Any) -> bool:
    """Return ``True`` when ``value`` should be summarised instead of rendered."""

    if isinstance(value, (bytes, bytearray, memoryview, array.array)):
        return True
    if isinstance(value, Sized) and not isinstance(value, str):
        try:
            if len(value) > MAX_COLLECTION_SIZE:
                return True
        except Exception:  # noqa: BLE001 - a broken __len__ must not break the call
            pass
    kind = type(value)
    qualified = f"{kind.__module__}.{kind.__qualname__}".lower()
    return any(marker in qualified for marker in SENSITIVE_TYPE_MARKERS)


def _truncate(text: str) -> str:
    if len(text) > MAX_VALUE_LENGTH:
        return text[: MAX_VALUE_LENGTH - 3] + "..."
    return text


def _handle(value: Any) -> str:
    return f"{type(value).__name__}@{id(value):x}"


def _text_of(value: Any) -> str:
    """Return truncated ``str(value)``, or the type handle when ``__str__`` raises.

    >>> class Broken:
    ...     def __str__(self):
    ...         raise RuntimeError("not ready")
    >>> _text_of(Broken()).startswith("Broken@")
    True
    """
    try:
        text = str(value)
    except Exception:  # noqa: BLE001 - argument rendering never changes the call outcome
        return _handle(value)
    return _truncate(text)


def summarize_value(value: Any) -> str:
    """Render an argument for the entry line.

    Examples
    --------
    >>> summarize_value(None)
    'None'
    >>> summarize_value([1, 2, 3])
    '[1, 2, 3]'
    >>> summarize_value("x" * 60)[-3:]
    '...'
    >>> summarize_value(list(range(10))).startswith("list@")
    True
    """

    if value is None:
        return "None"
    if is_large_or_sensitive(value):
        return _handle(value)
    return _text_of(value)


def summarize_result(value: Any) -> str | None:
    """Render a return value for the exit line; ``None`` results are omitted."""

    if value is None:
        return None
    if is_large_or_sensitive(value):
        return f"{type(value).__name__} instance"
    return _text_of(value)


def enrich_error(error: BaseException, level: LogLevel, context: Mapping[str, Any]) -> ContextAwareError:
    """Merge ``context`` into ``error``, wrapping foreign exceptions first."""

    return factory.wrap(error, level, context)


def _defined_in_class(func: Callable[..., Any]) -> bool:
    """Return ``True`` when ``func`` was written directly inside a class body."""

    parts = getattr(func, "__qualname__", "").split(".")
    return len(parts) >= 2 and parts[-2] != "<locals>"


def _call_site(func: Callable[..., Any]) -> tuple[str, str, str]:
    """Return ``(owner, method, registry identity)`` for ``func``.

    Module-level functions are owned by their module's last name segment and
    log through the module's logger.
    """
    qualname = getattr(func, "__qualname__", func.__name__).replace(".<locals>", "")
    module = getattr(func, "__module__", None) or "__main__"
    owner, _, method = qualname.rpartition(".")
    if not owner:
        return module.rpartition(".")[2], method, module
    return owner, method, f"{module}.{owner}"


class _CallObserver:
    """Per-decorated-callable logging state shared by sync and async wrappers."""

    def __init__(
        self,
        func: Callable[..., Any],
        *,
        logger: Logger | str | None,
        level: LogLevel,
        wrap_errors: bool,
        receiver: bool,
    ) -> None:
        self.func = func
        self.receiver = receiver
        self.level = level
        self.wrap_errors = wrap_errors
        self.owner, self.method, self._identity = _call_site(func)
        self.failure_point = f"{self.owner}.{self.method}"
        self._logger = logger
        try:
            self._signature: inspect.Signature | None = inspect.signature(func)
        except (TypeError, ValueError):
            self._signature = None

    def logger(self) -> Logger:
        if isinstance(self._logger, Logger):
            return self._logger
        return get_logger(self._logger if self._logger is not None else self._identity)

    def parameters(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> list[tuple[str, Any]]:
        """Return raw ``(name, value)`` pairs; the bound receiver is left out."""

        fallback = [(f"arg{index}", value) for index, value in enumerate(args[1:] if self.receiver else args)]
        if self._signature is None:
            return fallback + list(kwargs.items())
        try:
            bound = self._signature.bind_partial(*args, **kwargs)
        except TypeError:
            return fallback + list(kwargs.items())
        pairs = list(bound.arguments.items())
        if self.receiver and args:
            pairs = pairs[1:]
        return pairs

    def context(self) -> dict[str, Any]:
        current = threading.current_thread()
        context: dict[str, Any] = {
            "class": self.owner,
            "method": self.method,
            "timestamp": int(time.time() * 1000),
            "thread_id": threading.get_ident(),
            "thread_name": current.name,
        }
        return context

    def enter(self, logger: Logger, parameters: list[tuple[str, Any]]) -> None:
        if logger.is_enabled(self.level):
            rendered = ", ".join(summarize_value(value) for _, value in parameters)
            logger.log(self.level, f"{self.failure_point}({rendered})")

    def exit(self, logger: Logger, elapsed_ms: int, result: Any) -> None:
        if logger.is_enabled(self.level):
            message = f"{self.failure_point} completed in {elapsed_ms}ms"
            summary = summarize_result(result)
            if summary is not None:
                message += f" with result: {summary}"
            logger.log(self.level, message)

    def fail(
        self,
        logger: Logger,
        error: Exception,
        context: dict[str, Any],
        parameters: list[tuple[str, Any]],
        elapsed_ms: int,
    ) -> BaseException:
        """Log ``error`` and return the exception the wrapper must raise.

        Argument values are rendered into ``param.<name>`` entries only here,
        after the call has already failed.
        """

        for name, value in parameters:
            if value is not None and not is_large_or_sensitive(value):
                context[f"param.{name}"] = _text_of(value)
        context["execution_time"] = elapsed_ms
        context["failure_point"] = self.failure_point
        level = classify_severity(error)
        if not self.wrap_errors:
            logger.exception_report(level, error, context)
            return error
        enriched = enrich_error(error, level, context)
        logger.exception_report(level, enriched, context)
        return enriched


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _decorate(func: F, observer: _CallObserver) -> F:
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = observer.logger()
            parameters = observer.parameters(args, kwargs)
            context = observer.context()
            observer.enter(logger, parameters)
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                raised = observer.fail(logger, exc, context, parameters, _elapsed_ms(start))
                if raised is exc:
                    raise
                raise raised from exc
            observer.exit(logger, _elapsed_ms(start), result)
            return result

        wrapper: Any = async_wrapper
    else:

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = observer.logger()
            parameters = observer.parameters(args, kwargs)
            context = observer.context()
            observer.enter(logger, parameters)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                raised = observer.fail(logger, exc, context, parameters, _elapsed_ms(start))
                if raised is exc:
                    raise
                raise raised from exc
            observer.exit(logger, _elapsed_ms(start), result)
            return result

        wrapper = sync_wrapper

    setattr(wrapper, MARKER_ATTRIBUTE, True)
    return wrapper


@overload
def log_calls(func: F) -> F: ...


@overload
def log_calls(
    func: None = None,
    *,
    logger: Logger | str | None = None,
    level: LogLevel = LogLevel.DEBUG,
    wrap_errors: bool = True,
    receiver: bool | None = None,
) -> Callable[[F], F]: ...


def log_calls(
    func: F | None = None,
    *,
    logger: Logger | str | None = None,
    level: LogLevel = LogLevel.DEBUG,
    wrap_errors: bool = True,
    receiver: bool | None = None,
) -> F | Callable[[F], F]:
    """Log entry, exit, and failures of ``func``.

    Parameters
    ----------
    func:
        Function or coroutine function; usable bare (``@log_calls``) or with
        options (``@log_calls(level=LogLevel.INFO)``).
    logger:
        Logger instance or registry identity. Defaults to the registry logger
        named ``<module>.<Owner>`` resolved at call time, so namespace
        thresholds apply.
    level:
        Severity of the entry and exit lines.
    wrap_errors:
        When ``True`` foreign exceptions are re-raised as a
        :class:`ContextAwareError` carrying the call context, chained to the
        original. When ``False`` the original exception is re-raised as is.
    receiver:
        Whether the first positional argument is the bound ``self``/``cls``
        and is left out of the logged arguments. ``None`` decides by where
        ``func`` is defined: functions written in a class body take a
        receiver. Pass ``False`` when decorating under ``@staticmethod``.
    """

    def decorator(target: F) -> F:
        if getattr(target, MARKER_ATTRIBUTE, False):
            return target
        takes_receiver = _defined_in_class(target) if receiver is None else receiver
        observer = _CallObserver(
            target, logger=logger, level=level, wrap_errors=wrap_errors, receiver=takes_receiver
        )
        return _decorate(target, observer)

    if func is not None:
        return decorator(func)
    return decorator


def _should_wrap(name: str) -> bool:
    return not name.startswith("_") and name not in EXCLUDED_METHODS


@overload
def log_methods(cls: T) -> T: ...


@overload
def log_methods(
    cls: None = None,
    *,
    logger: Logger | str | None = None,
    level: LogLevel = LogLevel.DEBUG,
    wrap_errors: bool = True,
) -> Callable[[T], T]: ...


def log_methods(
    cls: T | None = None,
    *,
    logger: Logger | str | None = None,
    level: LogLevel = LogLevel.DEBUG,
    wrap_errors: bool = True,
) -> T | Callable[[T], T]:
    """Apply :func:`log_calls` to every public method defined on a class.

    Dunder and underscore-prefixed names, :data:`EXCLUDED_METHODS`, properties,
    and inherited methods are left untouched. Static and class methods are
    wrapped inside their descriptors.
    """

    options = {"logger": logger, "level": level, "wrap_errors": wrap_errors}

    def decorator(target: T) -> T:
        for name, attribute in list(vars(target).items()):
            if not _should_wrap(name):
                continue
            if isinstance(attribute, staticmethod):
                setattr(target, name, staticmethod(log_calls(attribute.__func__, receiver=False, **options)))
            elif isinstance(attribute, classmethod):
                setattr(target, name, classmethod(log_calls(attribute.__func__, receiver=True, **options)))
            elif inspect.isfunction(attribute):
                setattr(target, name, log_calls(attribute, receiver=True, **options))
        return target

    if cls is not None:
        return decorator(cls)
    return decorator


__all__ = [
    "EXCLUDED_METHODS",
    "classify_severity",
    "enrich_error",
    "is_large_or_sensitive",
    "log_calls",
    "log_methods",
    "summarize_result",
    "summarize_value",
]
