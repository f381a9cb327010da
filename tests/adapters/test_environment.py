from __future__ import annotations

import os

from lib_log_aspect.adapters.environment import PlatformEnvironment, SystemClock


def test_platform_environment_reports_runtime_facts() -> None:
    snapshot = PlatformEnvironment().snapshot()

    assert set(snapshot) == {
        "Python Version",
        "Python Implementation",
        "OS Name",
        "OS Version",
        "OS Architecture",
        "Working Directory",
    }
    assert snapshot["Working Directory"] == os.getcwd()


def test_system_clock_is_timezone_aware() -> None:
    assert SystemClock().now().tzinfo is not None
