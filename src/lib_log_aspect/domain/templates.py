"""Positional ``{}`` placeholder substitution for log messages."""

from __future__ import annotations

from typing import Any

PLACEHOLDER = "{}"


def _stringify(value: Any) -> str:
    return "null" if value is None else str(value)


def format_template(template: str | None, *args: Any) -> str:
    """Replace ``{}`` placeholders left to right with ``args``.

    Unmatched placeholders stay verbatim, surplus arguments are ignored, and
    ``None`` renders as ``"null"``.

    Examples
    --------
    >>> format_template("User {} has {} items", "Ann", 3)
    'User Ann has 3 items'
    >>> format_template("{} {}", "x")
    'x {}'
    >>> format_template("{}", "a", "b")
    'a'
    >>> format_template("{}", None)
    'null'
    """

    if template is None:
        return "null"
    if not args:
        return template

    parts: list[str] = []
    arg_index = 0
    position = 0
    while True:
        found = template.find(PLACEHOLDER, position)
        if found == -1:
            parts.append(template[position:])
            break
        parts.append(template[position:found])
        if arg_index < len(args):
            parts.append(_stringify(args[arg_index]))
            arg_index += 1
        else:
            parts.append(PLACEHOLDER)
        position = found + len(PLACEHOLDER)
    return "".join(parts)


__all__ = ["PLACEHOLDER", "format_template"]
