"""Console port describing two-stream terminal emission.

Purpose
-------
Define the abstraction for adapters that write rendered lines to the normal
or the error stream, letting the application layer depend on a narrow
protocol instead of Rich.

Contents
--------
* :class:`ConsolePort` - runtime-checkable protocol with ``emit`` and a
  styling capability probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from rich.text import Text


@runtime_checkable
class ConsolePort(Protocol):
    """Write rendered lines to one of two logical streams."""

    def emit(self, lines: Sequence["Text"], *, error: bool) -> None:
        """Write ``lines`` to the error stream when ``error`` else the normal one."""

    def supports_style(self, *, error: bool) -> bool:
        """Return ``True`` when the selected stream renders styled text."""


__all__ = ["ConsolePort"]
