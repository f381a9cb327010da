"""Stack frames and cause chains extracted from Python exceptions.

Purpose
-------
Normalise tracebacks into small immutable frame values so the exception
reporter can group, style, and truncate them without touching live frame
objects.

Contents
--------
* :class:`StackFrame` - one traceback entry (declaring type, method, location).
* :func:`frames_of` - innermost-first frames of an exception.
* :func:`cause_of` / :func:`iter_causes` - bounded walk over the cause chain.
* :func:`type_name_of` / :func:`message_of` - display helpers.
"""

from __future__ import annotations

import os
import traceback
from dataclasses import dataclass
from typing import Iterator


@dataclass(slots=True, frozen=True)
class StackFrame:
    """One frame of a stack trace.

    ``module`` is the package used for grouping; ``owner`` is the class part of
    the function's qualified name (``None`` for module-level functions).
    """

    module: str
    method: str
    owner: str | None = None
    file_name: str | None = None
    line_number: int = -1
    native: bool = False

    @property
    def declaring_type(self) -> str:
        if self.owner:
            return f"{self.module}.{self.owner}"
        return self.module

    @property
    def package(self) -> str:
        return self.module

    @property
    def short_type(self) -> str:
        """Return the unqualified type name (class, or last module segment)."""

        if self.owner:
            return self.owner.rpartition(".")[2]
        return self.module.rpartition(".")[2]

    @property
    def location(self) -> str:
        """Return the source location shown in parentheses.

        Examples
        --------
        >>> StackFrame("pkg.mod", "run", file_name="mod.py", line_number=12).location
        'mod.py:12'
        >>> StackFrame("pkg.mod", "run", file_name="mod.py").location
        'mod.py'
        >>> StackFrame("pkg.mod", "run").location
        'Unknown Source'
        """

        if self.native:
            return "Native Method"
        if self.file_name is None:
            return "Unknown Source"
        if self.line_number >= 0:
            return f"{self.file_name}:{self.line_number}"
        return self.file_name

    def __str__(self) -> str:
        return f"{self.declaring_type}.{self.method}({self.location})"


def _frame_from_code(frame, lineno: int | None) -> StackFrame:
    code = frame.f_code
    module = frame.f_globals.get("__name__") or "__main__"
    qualname = getattr(code, "co_qualname", code.co_name)
    owner = qualname.rpartition(".")[0].replace(".<locals>", "") or None
    filename = code.co_filename
    file_name = None if not filename or filename.startswith("<") else os.path.basename(filename)
    return StackFrame(
        module=module,
        method=code.co_name,
        owner=owner,
        file_name=file_name,
        line_number=lineno if lineno is not None else -1,
    )


def frames_of(error: BaseException) -> tuple[StackFrame, ...]:
    """Return the frames of ``error`` ordered innermost (raise point) first."""

    frames = [_frame_from_code(frame, lineno) for frame, lineno in traceback.walk_tb(error.__traceback__)]
    frames.reverse()
    return tuple(frames)


def type_name_of(error: BaseException) -> str:
    """Return the qualified type name; builtins stay unqualified.

    Examples
    --------
    >>> type_name_of(ValueError("x"))
    'ValueError'
    """

    kind = type(error)
    if kind.__module__ in {"builtins", "__builtin__"}:
        return kind.__qualname__
    return f"{kind.__module__}.{kind.__qualname__}"


def message_of(error: BaseException) -> str:
    """Return the error's message, or ``"None"`` when it carries none."""

    text = str(error)
    return text if text else "None"


def cause_of(error: BaseException) -> BaseException | None:
    """Return the explicit cause, or the implicit context unless suppressed."""

    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def iter_causes(error: BaseException, limit: int) -> Iterator[BaseException]:
    """Yield at most ``limit`` causes of ``error``; the limit also ends cyclic chains."""

    cause = cause_of(error)
    depth = 0
    while cause is not None and depth < limit:
        yield cause
        cause = cause_of(cause)
        depth += 1


__all__ = ["StackFrame", "cause_of", "frames_of", "iter_causes", "message_of", "type_name_of"]
