"""Exception reporter rendering bounded, package-grouped stack traces.

Purpose
-------
Turn an exception and its cause chain into a terminal-scannable report:
a header, a frame listing grouped by package, cause blocks, and (for the full
report) environment facts, caller context, and suggested remediation steps.

Contents
--------
* :data:`MAX_FRAMES` / :data:`MAX_CAUSE_DEPTH` - output bounds.
* :data:`SUGGESTED_ACTIONS` / :func:`suggest_actions` - first-match remediation
  lookup keyed by type name and message.
* :class:`ExceptionReporter` - trace and report renderer.

System Role
-----------
Adapter behind :class:`~lib_log_aspect.application.ports.ExceptionReporterPort`.
The composition root caches one instance per level so header styles follow
the severity of the log call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from rich.text import Text

from lib_log_aspect.application.ports.rendering import ExceptionReporterPort
from lib_log_aspect.application.ports.time import ClockPort, EnvironmentPort
from lib_log_aspect.domain.exceptions import ContextAwareError
from lib_log_aspect.domain.frames import StackFrame, cause_of, frames_of, iter_causes, message_of, type_name_of
from lib_log_aspect.domain.levels import LogLevel

from .environment import PlatformEnvironment, SystemClock
from .rendering import render_plain_error
from .styles import StylePalette

MAX_FRAMES = 20
MAX_CAUSE_DEPTH = 5

BOX_H = "─"
BOX_V = "│"
BOX_TL = "┌"
BOX_BL = "└"
BOX_L_BRANCH = "├"

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_PART_STYLES: Mapping[str, str] = {
    "header": "error",
    "message": "error",
    "type": "error",
    "stack_trace": "secondary",
    "class_name": "emphasis",
    "method_name": "ui_value",
    "file_name": "trace",
    "line_number": "trace",
    "caused_by": "warning",
    "native_method": "dev_note",
    "more_frames": "tertiary",
    "package_name": "ui_subheader",
    "label": "ui_label",
    "value": "ui_value",
    "tip_header": "highlight",
}

DEFAULT_PACKAGE_HIGHLIGHTS: tuple[tuple[str, str], ...] = (
    ("builtins", "secondary"),
    ("importlib", "secondary"),
    ("asyncio", "secondary"),
    ("concurrent", "secondary"),
    ("threading", "secondary"),
    ("rich", "trace"),
    ("click", "trace"),
    ("pytest", "trace"),
    ("_pytest", "trace"),
    ("pluggy", "trace"),
    ("lib_log_aspect", "success"),
)
#: Ordered prefix table; the first prefix matching a frame's declaring type wins.


@dataclass(frozen=True)
class SuggestionRule:
    """Remediation bullets chosen when a name or message marker matches."""

    category: str
    name_markers: tuple[str, ...]
    message_markers: tuple[str, ...]
    actions: tuple[str, ...]

    def matches(self, type_name: str, message: str) -> bool:
        return any(marker in type_name for marker in self.name_markers) or any(
            marker in message for marker in self.message_markers
        )


SUGGESTED_ACTIONS: tuple[SuggestionRule, ...] = (
    SuggestionRule(
        "null-reference",
        ("NullPointerException", "NullReferenceException"),
        ("'nonetype' object",),
        (
            "Check if objects are properly initialized before use",
            "Add None checks for method parameters",
            "Verify if external service responses are properly validated",
        ),
    ),
    SuggestionRule(
        "type-cast",
        ("ClassCastException", "TypeError"),
        (),
        (
            "Verify object types before casting",
            "Use isinstance() to check types",
            "Review type hints and generic type parameters",
        ),
    ),
    SuggestionRule(
        "index",
        ("IndexOutOfBoundsException", "IndexError"),
        (),
        (
            "Validate array or list indices before access",
            "Check collection size before iteration",
            "Ensure loop conditions are correct",
        ),
    ),
    SuggestionRule(
        "file-not-found",
        ("FileNotFoundException", "FileNotFoundError"),
        (),
        (
            "Verify file path is correct",
            "Check file permissions",
            "Ensure the file exists",
        ),
    ),
    SuggestionRule(
        "io",
        ("IOException", "IOError", "OSError"),
        (),
        (
            "Check network connectivity",
            "Verify file system permissions",
            "Ensure resources are properly closed",
        ),
    ),
    SuggestionRule(
        "data-access",
        ("SQLException", "DatabaseError", "OperationalError"),
        (),
        (
            "Verify database connection settings",
            "Check SQL syntax",
            "Ensure database schema is compatible",
            "Validate transaction handling",
        ),
    ),
    SuggestionRule(
        "illegal-argument",
        ("IllegalArgumentException", "ValueError"),
        (),
        (
            "Validate method parameters",
            "Check parameter constraints",
            "Review API documentation for correct usage",
        ),
    ),
    SuggestionRule(
        "connectivity",
        (),
        ("connection", "timeout"),
        (
            "Check network connectivity",
            "Verify service endpoint is available",
            "Increase timeout settings if appropriate",
            "Implement retry logic with exponential backoff",
        ),
    ),
)

GENERIC_ACTIONS: tuple[str, ...] = (
    "Check the application logs for more details",
    "Review code around the exception source",
    "Verify environment configuration",
    "Add diagnostic logging around the problematic area",
)


def suggest_actions(error: BaseException) -> tuple[str, ...]:
    """Return the remediation bullets of the first matching rule.

    Examples
    --------
    >>> suggest_actions(IndexError("list index out of range"))[0]
    'Validate array or list indices before access'
    >>> suggest_actions(RuntimeError("odd")) == GENERIC_ACTIONS
    True
    """

    type_name = type_name_of(error)
    message = str(error).lower()
    for rule in SUGGESTED_ACTIONS:
        if rule.matches(type_name, message):
            return rule.actions
    return GENERIC_ACTIONS


class ExceptionReporter(ExceptionReporterPort):
    """Render formatted traces and full reports for exceptions.

    Part styles and package highlights are configurable through fluent
    setters. Context-aware errors contribute their own severity, highlights,
    context, and solution when rendered.
    """

    def __init__(
        self,
        palette: StylePalette,
        *,
        environment: EnvironmentPort | None = None,
        clock: ClockPort | None = None,
        max_frames: int = MAX_FRAMES,
        max_cause_depth: int = MAX_CAUSE_DEPTH,
    ) -> None:
        self._palette = palette
        self._environment = environment if environment is not None else PlatformEnvironment()
        self._clock = clock if clock is not None else SystemClock()
        self._styles = dict(DEFAULT_PART_STYLES)
        self._highlights: dict[str, str] = dict(DEFAULT_PACKAGE_HIGHLIGHTS)
        self.max_frames = max_frames
        self.max_cause_depth = max_cause_depth

    def set_style(self, part: str, style: str) -> "ExceptionReporter":
        self._styles[part] = style
        return self

    def highlight_package(self, prefix: str, style: str) -> "ExceptionReporter":
        """Add or replace a highlight rule; later prefixes are checked last."""

        self._highlights[prefix] = style
        return self

    def with_level(self, level: LogLevel) -> "ExceptionReporter":
        """Restyle header, message, and type (and causes from ``ERROR`` up)."""

        self._styles.update(_level_styles(level))
        return self

    # ------------------------------------------------------------------
    # Formatted trace
    # ------------------------------------------------------------------

    def format(self, error: BaseException, *, styled: bool = True, level: LogLevel | None = None) -> list[Text]:
        """Return the formatted trace, or the plain rendering for unstyled targets."""

        if not styled:
            return [Text(line) for line in render_plain_error(error)]
        return self.format_trace(error, level=level)

    def format_trace(self, error: BaseException | None, *, level: LogLevel | None = None) -> list[Text]:
        """Return header, grouped frames, and up to ``max_cause_depth`` cause blocks."""

        styles, highlights = self._resolve(error, level)
        if error is None:
            return [self._styled(styles, "header", "No exception provided")]

        error_type = type_name_of(error)
        lines = [
            self._styled(styles, "header", " EXCEPTION "),
            Text.assemble(self._styled(styles, "type", "╭─ Type: "), self._styled(styles, "type", error_type)),
            Text.assemble(self._styled(styles, "message", "╰─ Message: "), self._styled(styles, "message", message_of(error))),
            Text(""),
            self._styled(styles, "stack_trace", f"{BOX_TL}─ STACK TRACE {BOX_H * 45}"),
        ]
        lines.extend(self.render_frames(frames_of(error), error_type, styles=styles, highlights=highlights))

        causes = list(iter_causes(error, self.max_cause_depth))
        for cause in causes:
            cause_type = type_name_of(cause)
            lines.append(Text(""))
            lines.append(Text.assemble(self._styled(styles, "caused_by", f"{BOX_L_BRANCH}─ CAUSED BY: "), self._styled(styles, "type", cause_type)))
            lines.append(Text.assemble(self._styled(styles, "caused_by", f"{BOX_V}  "), self._styled(styles, "message", message_of(cause))))
            lines.append(self._styled(styles, "caused_by", BOX_V))
            lines.extend(self.render_frames(frames_of(cause), cause_type, styles=styles, highlights=highlights))

        if cause_of(causes[-1] if causes else error) is not None:
            lines.append(Text(""))
            lines.append(self._styled(styles, "caused_by", f"{BOX_L_BRANCH}─ Additional nested causes omitted..."))

        lines.append(self._styled(styles, "stack_trace", BOX_BL + BOX_H * 67))
        return lines

    def render_frames(
        self,
        frames: Sequence[StackFrame],
        error_type: str,
        *,
        styles: Mapping[str, str] | None = None,
        highlights: Mapping[str, str] | None = None,
    ) -> list[Text]:
        """Return at most ``max_frames`` frame lines grouped by package."""

        styles = styles if styles is not None else self._styles
        highlights = highlights if highlights is not None else self._highlights
        if not frames:
            return [self._styled(styles, "stack_trace", f"{BOX_V}  No stack trace available")]

        lines: list[Text] = []
        current_package: str | None = None
        shown = frames[: self.max_frames]
        for index, frame in enumerate(shown):
            if frame.package != current_package:
                if current_package is not None:
                    lines.append(self._styled(styles, "package_name", BOX_V))
                lines.append(self._styled(styles, "package_name", f"{BOX_V}  package {frame.package}"))
                lines.append(self._styled(styles, "package_name", BOX_V))
                current_package = frame.package
            lines.append(self._frame_line(index, frame, error_type, styles, highlights))

        omitted = len(frames) - len(shown)
        if omitted > 0:
            lines.append(self._styled(styles, "stack_trace", BOX_V))
            lines.append(
                self._styled(
                    styles,
                    "more_frames",
                    f"{BOX_V}  ... {omitted} more frames (showing first {len(shown)})",
                )
            )
        return lines

    # ------------------------------------------------------------------
    # Full report
    # ------------------------------------------------------------------

    def report(
        self,
        error: BaseException | None,
        context: Mapping[str, Any] | None = None,
        *,
        styled: bool = True,
        level: LogLevel | None = None,
    ) -> list[Text]:
        """Return the full report; ``None`` errors produce no lines."""

        if error is None:
            return []
        styles, _ = self._resolve(error, level)
        if isinstance(error, ContextAwareError):
            merged = error.report_context(context)
        else:
            merged = dict(context or {})

        timestamp = self._clock.now().strftime(TIME_FORMAT)
        lines = [
            self._styled(styles, "header", f" EXCEPTION REPORT {timestamp} "),
            Text(""),
            Text.assemble(self._styled(styles, "type", "Exception Type: "), type_name_of(error)),
            Text.assemble(self._styled(styles, "message", "Message: "), message_of(error)),
            Text(""),
        ]

        lines.append(self._subsection(styles, "Environment Information"))
        lines.extend(self._key_value(styles, key, value) for key, value in self._environment.snapshot().items())
        lines.append(Text(""))

        if merged:
            lines.append(self._subsection(styles, "Additional Context"))
            lines.extend(self._key_value(styles, key, value) for key, value in merged.items())
            lines.append(Text(""))

        lines.append(self._subsection(styles, "Stack Trace"))
        lines.extend(self.format(error, styled=styled, level=level))

        lines.append(self._subsection(styles, "Suggested Actions"))
        lines.extend(self._bullets(styles, suggest_actions(error)))
        return lines

    def print_report(self, error: BaseException | None, out: Any, context: Mapping[str, Any] | None = None) -> None:
        """Print :meth:`report` to a Rich console ``out``; missing inputs are a no-op."""

        if error is None or out is None:
            return
        styled = out.color_system is not None
        for line in self.report(error, context, styled=styled):
            out.print(line, highlight=False, soft_wrap=True)

    def print_trace(self, error: BaseException | None, out: Any) -> None:
        if error is None or out is None:
            return
        for line in self.format(error, styled=out.color_system is not None):
            out.print(line, highlight=False, soft_wrap=True)

    def troubleshooting_tips(self, tips: Sequence[str]) -> list[Text]:
        lines = [Text(""), self._styled(self._styles, "tip_header", "💡 Troubleshooting Tips:")]
        lines.extend(Text(f"  {number}. {tip}") for number, tip in enumerate(tips, start=1))
        return lines

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, error: BaseException | None, level: LogLevel | None) -> tuple[dict[str, str], dict[str, str]]:
        """Return part styles and highlights effective for ``error``."""

        styles = dict(self._styles)
        highlights = dict(self._highlights)
        if isinstance(error, ContextAwareError):
            styles.update(_level_styles(level if level is not None else error.severity))
            # Error-specific prefixes are checked before the reporter defaults.
            highlights = {**error.package_highlights, **{k: v for k, v in highlights.items() if k not in error.package_highlights}}
        elif level is not None:
            styles.update(_level_styles(level))
        return styles, highlights

    def _frame_line(
        self,
        index: int,
        frame: StackFrame,
        error_type: str,
        styles: Mapping[str, str],
        highlights: Mapping[str, str],
    ) -> Text:
        if frame.declaring_type == error_type:
            class_style = styles["type"]
        else:
            class_style = _match_highlight(frame.declaring_type, highlights.items()) or styles["class_name"]

        parts: list[Text | str] = [
            self._styled(styles, "stack_trace", f"{BOX_V}  {index:02d}"),
            ": ",
            self._palette.apply(class_style, frame.short_type),
            self._styled(styles, "stack_trace", "."),
            self._styled(styles, "method_name", frame.method),
            self._styled(styles, "stack_trace", " ("),
        ]
        if frame.native:
            parts.append(self._styled(styles, "native_method", "Native Method"))
        elif frame.file_name is None:
            parts.append(self._styled(styles, "file_name", "Unknown Source"))
        else:
            parts.append(self._styled(styles, "file_name", frame.file_name))
            if frame.line_number >= 0:
                parts.append(self._styled(styles, "stack_trace", ":"))
                parts.append(self._styled(styles, "line_number", str(frame.line_number)))
        parts.append(self._styled(styles, "stack_trace", ")"))
        return Text.assemble(*parts)

    def _subsection(self, styles: Mapping[str, str], title: str) -> Text:
        return Text.assemble(
            self._styled(styles, "header", f"{BOX_TL}─ {title} "),
            self._styled(styles, "stack_trace", BOX_H * max(0, 50 - len(title))),
        )

    def _key_value(self, styles: Mapping[str, str], key: str, value: Any) -> Text:
        return Text.assemble(
            self._styled(styles, "stack_trace", f"{BOX_V}  "),
            self._styled(styles, "label", f"{key}: "),
            self._styled(styles, "value", str(value)),
        )

    def _bullets(self, styles: Mapping[str, str], items: Iterable[str]) -> list[Text]:
        return [
            Text.assemble(self._styled(styles, "stack_trace", f"{BOX_V}  • "), self._styled(styles, "value", item))
            for item in items
        ]

    def _styled(self, styles: Mapping[str, str], part: str, text: str) -> Text:
        return self._palette.apply(styles.get(part, "plain"), text)


def _level_styles(level: LogLevel) -> dict[str, str]:
    styles = {"header": level.style, "message": level.style, "type": level.style}
    if level.is_at_least(LogLevel.ERROR):
        styles["caused_by"] = level.style
    return styles


def _match_highlight(declaring_type: str, highlights: Iterable[tuple[str, str]]) -> str | None:
    for prefix, style in highlights:
        if prefix and declaring_type.startswith(prefix):
            return style
    return None


__all__ = [
    "DEFAULT_PACKAGE_HIGHLIGHTS",
    "DEFAULT_PART_STYLES",
    "ExceptionReporter",
    "GENERIC_ACTIONS",
    "MAX_CAUSE_DEPTH",
    "MAX_FRAMES",
    "SUGGESTED_ACTIONS",
    "SuggestionRule",
    "suggest_actions",
]
