"""Concrete adapters: Rich console, renderers, and environment probes."""

from __future__ import annotations

from .console import RichConsoleAdapter
from .environment import PlatformEnvironment, SystemClock
from .exception_report import ExceptionReporter, suggest_actions
from .rendering import RecordRenderer, render_plain_error
from .styles import CONSOLE_STYLE_THEMES, DEFAULT_STYLES, StylePalette

__all__ = [
    "CONSOLE_STYLE_THEMES",
    "DEFAULT_STYLES",
    "ExceptionReporter",
    "PlatformEnvironment",
    "RecordRenderer",
    "RichConsoleAdapter",
    "StylePalette",
    "SystemClock",
    "render_plain_error",
    "suggest_actions",
]
