"""Ports for time and execution-environment facts."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current timestamp."""

    def now(self) -> datetime: ...


@runtime_checkable
class EnvironmentPort(Protocol):
    """Describe the runtime, operating system, and working directory."""

    def snapshot(self) -> Mapping[str, str]: ...


__all__ = ["ClockPort", "EnvironmentPort"]
