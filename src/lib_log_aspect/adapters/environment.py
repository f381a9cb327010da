"""Adapters for wall-clock time and execution-environment facts."""

from __future__ import annotations

import os
import platform
from datetime import datetime, timezone

from lib_log_aspect.application.ports.time import ClockPort, EnvironmentPort


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware local timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).astimezone()


class PlatformEnvironment(EnvironmentPort):
    """Read interpreter and operating-system facts from :mod:`platform`."""

    def snapshot(self) -> dict[str, str]:
        return {
            "Python Version": platform.python_version(),
            "Python Implementation": platform.python_implementation(),
            "OS Name": platform.system() or "unknown",
            "OS Version": platform.release() or "unknown",
            "OS Architecture": platform.machine() or "unknown",
            "Working Directory": os.getcwd(),
        }


__all__ = ["PlatformEnvironment", "SystemClock"]
