from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

import lib_log_aspect.runtime as runtime
from lib_log_aspect.adapters import RichConsoleAdapter
from lib_log_aspect.runtime._settings import ENHANCED_ENV_VAR, THEME_ENV_VAR, THRESHOLD_ENV_VAR

FIXED_NOW = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


def _styled_console() -> Console:
    return Console(file=StringIO(), force_terminal=True, color_system="truecolor", record=True, width=200)


def _plain_console() -> Console:
    return Console(file=StringIO(), color_system=None, record=True, width=200)


class FixedClock:
    def now(self) -> datetime:
        return FIXED_NOW


class FixedEnvironment:
    def snapshot(self) -> dict[str, str]:
        return {"Python Version": "3.12.0", "OS Name": "TestOS", "Working Directory": "/work"}


@pytest.fixture
def record_console() -> Console:
    """Colour-capable recording console."""

    return _styled_console()


@pytest.fixture
def plain_console() -> Console:
    """Recording console without colour support."""

    return _plain_console()


@pytest.fixture
def console_pair() -> tuple[Console, Console]:
    """Styled (stdout, stderr) recording consoles."""

    return _styled_console(), _styled_console()


@pytest.fixture
def plain_console_pair() -> tuple[Console, Console]:
    return _plain_console(), _plain_console()


@pytest.fixture
def console_adapter(console_pair: tuple[Console, Console]) -> RichConsoleAdapter:
    out, err = console_pair
    return RichConsoleAdapter(console=out, error_console=err)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def fixed_environment() -> FixedEnvironment:
    return FixedEnvironment()


@pytest.fixture
def configured_runtime(
    console_adapter: RichConsoleAdapter,
    fixed_clock: FixedClock,
    fixed_environment: FixedEnvironment,
) -> runtime.LoggingRuntime:
    """Runtime writing to recording consoles with deterministic report facts."""

    return runtime.configure(console=console_adapter, clock=fixed_clock, environment=fixed_environment)


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without a composed runtime or LOG_ASPECT_* variables."""

    for name in (THRESHOLD_ENV_VAR, ENHANCED_ENV_VAR, THEME_ENV_VAR, "FORCE_COLOR", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    runtime.shutdown()
    yield
    runtime.shutdown()
