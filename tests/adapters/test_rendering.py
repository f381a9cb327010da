from __future__ import annotations

import pytest

from lib_log_aspect.adapters.rendering import RecordRenderer, render_plain_error
from lib_log_aspect.adapters.styles import StylePalette
from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord


def _raise_with_cause() -> BaseException:
    try:
        try:
            raise OSError("disk unplugged")
        except OSError as inner:
            raise RuntimeError("save failed") from inner
    except RuntimeError as exc:
        return exc


@pytest.fixture
def renderer() -> RecordRenderer:
    return RecordRenderer(StylePalette())


@pytest.mark.parametrize("level", list(LogLevel))
def test_plain_prefix_is_bracketed_name(renderer: RecordRenderer, level: LogLevel) -> None:
    assert renderer.prefix(level, enhanced=False).plain == f"[{level.name}]"


@pytest.mark.parametrize("level", list(LogLevel))
def test_enhanced_prefix_adds_glyph(renderer: RecordRenderer, level: LogLevel) -> None:
    assert renderer.prefix(level, enhanced=True).plain == f"[{level.name}] {level.glyph}"


def test_prefix_uses_level_style(renderer: RecordRenderer) -> None:
    palette = StylePalette()
    assert str(renderer.prefix(LogLevel.WARN, enhanced=True).style) == palette.style("warning")


def test_every_message_line_gets_the_marker(renderer: RecordRenderer) -> None:
    record = LogRecord(LogLevel.NOTICE, "first\nsecond\r\nthird")
    lines = [line.plain for line in renderer.render(record, enhanced=True)]

    assert lines == ["[NOTICE] 📢 first", "[NOTICE] 📢 second", "[NOTICE] 📢 third"]


def test_empty_message_renders_marker_only(renderer: RecordRenderer) -> None:
    assert [line.plain for line in renderer.render(LogRecord(LogLevel.INFO, ""), enhanced=False)] == ["[INFO] "]


def test_plain_error_includes_one_cause_with_its_trace() -> None:
    lines = render_plain_error(_raise_with_cause())

    assert lines[:4] == ["EXCEPTION: RuntimeError", "MESSAGE: save failed", "", "STACK TRACE:"]
    assert "CAUSED BY: OSError" in lines
    assert "MESSAGE: disk unplugged" in lines
    assert sum(line == "STACK TRACE:" for line in lines) == 2
    assert all(line.startswith("  at ") for line in lines if "_raise_with_cause" in line)


def test_render_error_unstyled_matches_plain_rendering(renderer: RecordRenderer) -> None:
    error = _raise_with_cause()
    assert [line.plain for line in renderer.render_error(error, styled=False)] == render_plain_error(error)


def test_render_error_styled_is_compact(renderer: RecordRenderer) -> None:
    plain = [line.plain for line in renderer.render_error(_raise_with_cause(), styled=True)]

    assert plain[0] == "RuntimeError: save failed"
    assert "Caused by: OSError: disk unplugged" in plain
    assert any(line.startswith("    at ") for line in plain)
