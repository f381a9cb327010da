"""Record renderer producing level-marked console lines.

Why
---
Plain and enhanced console modes share one rule: every line of a multi-line
message carries the same level marker. Keeping that rule here lets the
dispatcher and the report header stay in sync.

Contents
--------
* :class:`RecordRenderer` - message lines and compact error renderings.
* :func:`render_plain_error` - colour-free trace used when the target stream
  cannot show styles.
"""

from __future__ import annotations

from rich.text import Text

from lib_log_aspect.application.ports.rendering import RecordRendererPort
from lib_log_aspect.domain.frames import cause_of, frames_of, message_of, type_name_of
from lib_log_aspect.domain.levels import LogLevel
from lib_log_aspect.domain.records import LogRecord

from .styles import StylePalette


def render_plain_error(error: BaseException) -> list[str]:
    """Return type, message, full trace, and one level of cause without styling.

    Examples
    --------
    >>> render_plain_error(ValueError("bad"))[:2]
    ['EXCEPTION: ValueError', 'MESSAGE: bad']
    """

    lines = [f"EXCEPTION: {type_name_of(error)}", f"MESSAGE: {message_of(error)}", "", "STACK TRACE:"]
    lines.extend(f"  at {frame}" for frame in frames_of(error))
    cause = cause_of(error)
    if cause is not None:
        lines.extend(["", f"CAUSED BY: {type_name_of(cause)}", f"MESSAGE: {message_of(cause)}", "", "STACK TRACE:"])
        lines.extend(f"  at {frame}" for frame in frames_of(cause))
    return lines


class RecordRenderer(RecordRendererPort):
    """Render records as ``[LEVEL]`` (plain) or ``[LEVEL] glyph`` (enhanced) lines."""

    def __init__(self, palette: StylePalette) -> None:
        self._palette = palette

    def prefix(self, level: LogLevel, *, enhanced: bool) -> Text:
        marker = f"{level.label} {level.glyph}" if enhanced else level.label
        return self._palette.apply(level.style, marker)

    def render(self, record: LogRecord, *, enhanced: bool) -> list[Text]:
        """Return one line per message line, each prefixed with the marker.

        Examples
        --------
        >>> renderer = RecordRenderer(StylePalette())
        >>> [line.plain for line in renderer.render(LogRecord(LogLevel.INFO, "a\\nb"), enhanced=False)]
        ['[INFO] a', '[INFO] b']
        """

        prefix = self.prefix(record.level, enhanced=enhanced)
        return [Text.assemble(prefix, " ", line) for line in record.lines()]

    def render_error(self, error: BaseException, *, styled: bool) -> list[Text]:
        """Render a bare error; unstyled targets receive :func:`render_plain_error`."""

        if not styled:
            return [Text(line) for line in render_plain_error(error)]
        palette = self._palette
        lines = [Text.assemble(palette.apply("error", type_name_of(error)), ": ", palette.apply("ui_value", message_of(error)))]
        lines.extend(palette.apply("secondary", f"    at {frame}") for frame in frames_of(error))
        cause = cause_of(error)
        if cause is not None:
            lines.append(
                Text.assemble(
                    palette.apply("warning", "Caused by: "),
                    palette.apply("error", type_name_of(cause)),
                    ": ",
                    palette.apply("ui_value", message_of(cause)),
                )
            )
            lines.extend(palette.apply("secondary", f"    at {frame}") for frame in frames_of(cause))
        return lines

    def blank(self) -> Text:
        return Text("")


__all__ = ["RecordRenderer", "render_plain_error"]
