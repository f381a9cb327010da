"""Semantic style palette resolving style names to Rich styles.

Purpose
-------
Keep the domain free of terminal concerns: levels and report parts refer to
semantic style names (``"error"``, ``"secondary"``...) and this palette maps
them onto Rich style strings.

Contents
--------
* :data:`DEFAULT_STYLES` - built-in semantic-name to Rich-style table.
* :data:`CONSOLE_STYLE_THEMES` - alternative palettes keyed by theme name.
* :class:`StylePalette` - lookup plus ``apply`` returning :class:`rich.text.Text`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text

DEFAULT_STYLES: Mapping[str, str] = MappingProxyType(
    {
        "plain": "",
        "trace": "dim cyan",
        "debug": "blue",
        "info": "cyan",
        "success": "bold green",
        "highlight": "bold magenta",
        "important": "bold yellow",
        "warning": "yellow",
        "error": "bold red",
        "critical_error": "bold white on red",
        "security_alert": "bold reverse red",
        "dev_todo": "italic bright_black",
        "dev_note": "italic dim",
        "secondary": "grey50",
        "tertiary": "grey42",
        "emphasis": "bold",
        "ui_label": "bold cyan",
        "ui_value": "bright_white",
        "ui_subheader": "bold blue",
        "validation_error": "bold orange3",
        "config_error": "bold dark_orange",
        "db_error": "bold medium_purple",
    }
)

CONSOLE_STYLE_THEMES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "classic": {},
        "dark": {
            "debug": "grey42",
            "info": "bright_white",
            "warning": "bold gold3",
            "error": "bold red3",
            "critical_error": "bold white on red3",
        },
        "neon": {
            "debug": "#00ffd5",
            "info": "#39ff14",
            "warning": "#fff700",
            "error": "#ff073a",
            "critical_error": "bold #ff00ff on black",
        },
    }
)
"""Built-in palettes layered over :data:`DEFAULT_STYLES`."""


class StylePalette:
    """Resolve semantic style names; unknown names render unstyled."""

    def __init__(self, overrides: Mapping[str, str] | None = None, *, theme: str | None = None) -> None:
        merged = dict(DEFAULT_STYLES)
        if theme is not None:
            try:
                merged.update(CONSOLE_STYLE_THEMES[theme])
            except KeyError as exc:
                raise ValueError(f"Unknown console theme: {theme!r}") from exc
        for name, style in (overrides or {}).items():
            try:
                Style.parse(style)
            except StyleSyntaxError as exc:
                raise ValueError(f"Invalid style for {name!r}: {style!r}") from exc
            merged[name.strip().lower()] = style
        self._styles = merged

    def style(self, name: str) -> str:
        return self._styles.get(name, "")

    def apply(self, name: str, text: str) -> Text:
        """Return ``text`` wrapped in the Rich style mapped to ``name``."""

        return Text(text, style=self.style(name))

    def as_dict(self) -> dict[str, str]:
        return dict(self._styles)


__all__ = ["CONSOLE_STYLE_THEMES", "DEFAULT_STYLES", "StylePalette"]
