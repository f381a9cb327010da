from __future__ import annotations

import re

import pytest
from rich.text import Text

from lib_log_aspect.adapters.exception_report import (
    GENERIC_ACTIONS,
    MAX_CAUSE_DEPTH,
    MAX_FRAMES,
    SUGGESTED_ACTIONS,
    ExceptionReporter,
    suggest_actions,
)
from lib_log_aspect.adapters.styles import StylePalette
from lib_log_aspect.domain.exceptions import ContextAwareError
from lib_log_aspect.domain.frames import StackFrame, frames_of
from lib_log_aspect.domain.levels import LogLevel

FRAME_LINE = re.compile(r"^│  \d{2}: ")


class NullPointerException(Exception):
    pass


@pytest.fixture
def reporter(fixed_environment, fixed_clock) -> ExceptionReporter:
    return ExceptionReporter(StylePalette(), environment=fixed_environment, clock=fixed_clock)


def _plain(lines: list[Text]) -> list[str]:
    return [line.plain for line in lines]


def _frame_lines(lines: list[Text]) -> list[str]:
    return [text for text in _plain(lines) if FRAME_LINE.match(text)]


def _style_of(line: Text, fragment: str) -> str | None:
    for span in line.spans:
        if line.plain[span.start : span.end] == fragment:
            return str(span.style)
    return None


def _chain(length: int) -> BaseException:
    """Return an error with ``length`` nested causes, each raised for real."""

    errors = [RuntimeError(f"level {index}") for index in range(length + 1)]
    for outer, inner in zip(errors, errors[1:]):
        outer.__cause__ = inner
    return errors[0]


def _raised(error: BaseException) -> BaseException:
    try:
        raise error
    except BaseException as exc:  # noqa: BLE001 - capture for inspection
        return exc


def test_fifty_frames_render_twenty_lines_and_one_summary(reporter: ExceptionReporter) -> None:
    frames = [StackFrame("app.jobs", f"step{i}", owner="Job", file_name="jobs.py", line_number=i) for i in range(50)]

    lines = reporter.render_frames(frames, "app.jobs.Failure")
    plain = _plain(lines)

    assert len(_frame_lines(lines)) == MAX_FRAMES
    summaries = [text for text in plain if "more frames" in text]
    assert summaries == ["│  ... 30 more frames (showing first 20)"]


def test_deep_recursion_is_capped(reporter: ExceptionReporter) -> None:
    def dive(depth: int) -> None:
        if depth == 0:
            raise RecursionError("bottom reached")
        dive(depth - 1)

    try:
        dive(48)
    except RecursionError as exc:
        error = exc

    total = len(frames_of(error))
    assert total >= 50
    lines = reporter.format_trace(error)

    assert len(_frame_lines(lines)) == MAX_FRAMES
    assert f"│  ... {total - MAX_FRAMES} more frames (showing first 20)" in _plain(lines)


def test_frame_line_layout(reporter: ExceptionReporter) -> None:
    frames = [
        StackFrame("app.jobs", "run", owner="Job", file_name="jobs.py", line_number=12),
        StackFrame("app.jobs", "native", owner="Job", native=True),
        StackFrame("app.jobs", "lost", owner="Job"),
        StackFrame("app.jobs", "nolines", owner="Job", file_name="jobs.py"),
    ]

    assert _frame_lines(reporter.render_frames(frames, "x.Y")) == [
        "│  00: Job.run (jobs.py:12)",
        "│  01: Job.native (Native Method)",
        "│  02: Job.lost (Unknown Source)",
        "│  03: Job.nolines (jobs.py)",
    ]


def test_package_label_emitted_on_each_change(reporter: ExceptionReporter) -> None:
    frames = [
        StackFrame("app.a", "one", owner="A"),
        StackFrame("app.a", "two", owner="A"),
        StackFrame("app.b", "three", owner="B"),
        StackFrame("app.a", "four", owner="A"),
    ]

    labels = [text for text in _plain(reporter.render_frames(frames, "x.Y")) if "package" in text]
    assert labels == ["│  package app.a", "│  package app.b", "│  package app.a"]


def test_no_frames_prints_placeholder(reporter: ExceptionReporter) -> None:
    assert _plain(reporter.render_frames([], "x.Y")) == ["│  No stack trace available"]


def test_eight_causes_render_five_blocks_and_omission_note(reporter: ExceptionReporter) -> None:
    plain = _plain(reporter.format_trace(_chain(8)))

    assert sum("CAUSED BY" in text for text in plain) == MAX_CAUSE_DEPTH
    assert any("Additional nested causes omitted" in text for text in plain)


def test_three_causes_render_three_blocks_without_note(reporter: ExceptionReporter) -> None:
    plain = _plain(reporter.format_trace(_chain(3)))

    assert sum("CAUSED BY" in text for text in plain) == 3
    assert not any("omitted" in text for text in plain)


def test_cyclic_cause_chain_terminates(reporter: ExceptionReporter) -> None:
    first = RuntimeError("a")
    second = RuntimeError("b")
    first.__cause__ = second
    second.__cause__ = first

    plain = _plain(reporter.format_trace(first))
    assert sum("CAUSED BY" in text for text in plain) == MAX_CAUSE_DEPTH
    assert any("Additional nested causes omitted" in text for text in plain)


def test_trace_header_contains_type_and_message(reporter: ExceptionReporter) -> None:
    plain = _plain(reporter.format_trace(_raised(KeyError("user-42"))))

    assert "╭─ Type: KeyError" in plain
    assert "╰─ Message: 'user-42'" in plain
    assert any("STACK TRACE" in text for text in plain)


def test_format_unstyled_uses_plain_rendering(reporter: ExceptionReporter) -> None:
    error = _raised(ValueError("bad"))
    plain = _plain(reporter.format(error, styled=False))

    assert plain[:2] == ["EXCEPTION: ValueError", "MESSAGE: bad"]
    assert "STACK TRACE:" in plain


def test_error_type_frames_use_error_style(reporter: ExceptionReporter) -> None:
    palette = StylePalette()
    frames = [
        StackFrame("app.errors", "fail", owner="Boom"),
        StackFrame("rich.console", "print", owner="Console"),
        StackFrame("elsewhere.mod", "call", owner="Other"),
    ]

    lines = [line for line in reporter.render_frames(frames, "app.errors.Boom") if FRAME_LINE.match(line.plain)]

    assert _style_of(lines[0], "Boom") == palette.style("error")
    assert _style_of(lines[1], "Console") == palette.style("trace")
    assert _style_of(lines[2], "Other") == palette.style("emphasis")


def test_highlight_package_first_match_wins(reporter: ExceptionReporter) -> None:
    palette = StylePalette()
    reporter.highlight_package("app", "warning").highlight_package("app.core", "success")
    frame = StackFrame("app.core.jobs", "run", owner="Job")

    line = _frame_lines_text(reporter.render_frames([frame], "x.Y"))[0]
    assert _style_of(line, "Job") == palette.style("warning")


def _frame_lines_text(lines: list[Text]) -> list[Text]:
    return [line for line in lines if FRAME_LINE.match(line.plain)]


def test_context_aware_error_highlights_take_precedence(reporter: ExceptionReporter) -> None:
    palette = StylePalette()
    error = ContextAwareError("x").highlight_package("rich", "db_error")
    styles, highlights = reporter._resolve(error, None)

    assert next(iter(highlights)) == "rich"
    line = _frame_lines_text(
        reporter.render_frames([StackFrame("rich.console", "print", owner="Console")], "x.Y", styles=styles, highlights=highlights)
    )[0]
    assert _style_of(line, "Console") == palette.style("db_error")


def test_with_severity_restyles_header(reporter: ExceptionReporter) -> None:
    palette = StylePalette()
    error = _raised(ContextAwareError("warned").with_severity(LogLevel.WARN))

    header = reporter.format_trace(error)[0]
    assert str(header.style) == palette.style("warning")


def test_report_sections_in_fixed_order(reporter: ExceptionReporter) -> None:
    error = _raised(ValueError("bad value"))
    plain = _plain(reporter.report(error, {"request": "r-1"}))

    titles = [
        "EXCEPTION REPORT 2025-09-23 12:00:00",
        "Exception Type: ValueError",
        "Message: bad value",
        "┌─ Environment Information",
        "┌─ Additional Context",
        "┌─ Stack Trace",
        "┌─ Suggested Actions",
    ]
    positions = [next(index for index, text in enumerate(plain) if title in text) for title in titles]
    assert positions == sorted(positions)
    assert "│  OS Name: TestOS" in plain
    assert "│  request: r-1" in plain


def test_report_omits_empty_context_section(reporter: ExceptionReporter) -> None:
    plain = _plain(reporter.report(_raised(ValueError("bad"))))
    assert not any("Additional Context" in text for text in plain)


def test_report_time_context_wins_over_error_context(reporter: ExceptionReporter) -> None:
    error = _raised(ContextAwareError("x").with_context("a", 1))
    plain = _plain(reporter.report(error, {"a": 2, "b": 3}))

    assert "│  a: 2" in plain
    assert "│  b: 3" in plain
    assert "│  a: 1" not in plain


def test_report_includes_solution_entry(reporter: ExceptionReporter) -> None:
    error = ContextAwareError("x").with_solution("Rotate the credentials")
    assert "│  Suggested Solution: Rotate the credentials" in _plain(reporter.report(error))


def test_report_of_none_is_empty(reporter: ExceptionReporter) -> None:
    assert reporter.report(None) == []


def test_null_pointer_name_yields_null_reference_bullets(reporter: ExceptionReporter) -> None:
    error = _raised(NullPointerException("value was null"))
    expected = SUGGESTED_ACTIONS[0].actions

    assert suggest_actions(error) == expected
    plain = _plain(reporter.report(error))
    assert [f"│  • {action}" for action in expected] == [text for text in plain if text.startswith("│  • ")]


def test_unmatched_error_yields_generic_fallback() -> None:
    assert suggest_actions(RuntimeError("odd")) == GENERIC_ACTIONS
    assert len(GENERIC_ACTIONS) == 4


@pytest.mark.parametrize(
    "error, category",
    [
        (AttributeError("'NoneType' object has no attribute 'x'"), "null-reference"),
        (TypeError("wrong"), "type-cast"),
        (IndexError("range"), "index"),
        (FileNotFoundError("gone"), "file-not-found"),
        (OSError("disk"), "io"),
        (ValueError("bad"), "illegal-argument"),
        (RuntimeError("Connection refused"), "connectivity"),
        (RuntimeError("read timeout"), "connectivity"),
    ],
)
def test_suggestion_priority(error: BaseException, category: str) -> None:
    rule = next(rule for rule in SUGGESTED_ACTIONS if rule.category == category)
    assert suggest_actions(error) == rule.actions


def test_troubleshooting_tips_are_numbered(reporter: ExceptionReporter) -> None:
    plain = _plain(reporter.troubleshooting_tips(["first", "second"]))
    assert plain[1] == "💡 Troubleshooting Tips:"
    assert plain[2:] == ["  1. first", "  2. second"]


def test_print_report_ignores_missing_inputs(reporter: ExceptionReporter, record_console) -> None:
    reporter.print_report(None, record_console)
    reporter.print_report(ValueError("x"), None)
    assert record_console.export_text() == ""


def test_print_report_writes_plain_text_to_colourless_console(reporter: ExceptionReporter, plain_console) -> None:
    reporter.print_report(_raised(ValueError("bad")), plain_console, {"k": "v"})
    output = plain_console.export_text()

    assert "EXCEPTION: ValueError" in output
    assert "k: v" in output
    assert "\x1b[" not in plain_console.file.getvalue()
