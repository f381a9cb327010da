"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Bridge the application layer with Rich: one console for the normal stream
(stdout) and one for the error stream (stderr), each guarded by its own lock
so concurrent callers never interleave partial lines.

Contents
--------
* :class:`RichConsoleAdapter` - adapter constructed by the runtime composition.

System Role
-----------
Sole human-facing sink. Colour capability is detected from the Rich console
(``color_system``) rather than assumed, which drives the plain-text fallback
of the exception renderers.
"""

from __future__ import annotations

import threading
from typing import Sequence

from rich.console import Console
from rich.text import Text

from lib_log_aspect.application.ports.console import ConsolePort


class RichConsoleAdapter(ConsolePort):
    """Write rendered lines through Rich with per-stream locking."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        error_console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
    ) -> None:
        """Configure the normal and error consoles with colour overrides."""
        force_terminal = True if force_color else None
        self._console = console if console is not None else Console(force_terminal=force_terminal, no_color=no_color)
        self._error_console = (
            error_console
            if error_console is not None
            else Console(stderr=True, force_terminal=force_terminal, no_color=no_color)
        )
        self._no_color = no_color
        self._locks = {False: threading.Lock(), True: threading.Lock()}

    @property
    def console(self) -> Console:
        return self._console

    @property
    def error_console(self) -> Console:
        return self._error_console

    def supports_style(self, *, error: bool) -> bool:
        """Return ``True`` when the selected console renders colour.

        Examples
        --------
        >>> from io import StringIO
        >>> adapter = RichConsoleAdapter(console=Console(file=StringIO(), color_system=None))
        >>> adapter.supports_style(error=False)
        False
        """
        target = self._error_console if error else self._console
        return target.color_system is not None and not (self._no_color or target.no_color)

    def emit(self, lines: Sequence[Text | str], *, error: bool) -> None:
        """Print ``lines`` to the error console when ``error`` else the normal one."""
        target = self._error_console if error else self._console
        with self._locks[error]:
            for line in lines:
                target.print(line, highlight=False, markup=False, emoji=False, soft_wrap=True)


__all__ = ["RichConsoleAdapter"]
