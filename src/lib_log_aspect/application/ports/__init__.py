"""Protocols the application layer depends on."""

from __future__ import annotations

from .console import ConsolePort
from .rendering import ExceptionReporterPort, RecordRendererPort
from .time import ClockPort, EnvironmentPort

__all__ = [
    "ClockPort",
    "ConsolePort",
    "EnvironmentPort",
    "ExceptionReporterPort",
    "RecordRendererPort",
]
