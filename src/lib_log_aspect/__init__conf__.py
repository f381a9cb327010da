"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Callable

name = "lib_log_aspect"
title = "Method-level logging facade with Rich exception reports"
author = "bitranox"
shell_command = "lib_log_aspect"


def _installed_version() -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "0.0.0"


version = _installed_version()


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner line by line through ``writer``.

    Each emitted chunk ends with a newline so ``"".join`` of the chunks is the
    complete banner.
    """

    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    )
    if writer is None:
        writer = sys.stdout.write
    width = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{width}} = {value}\n")


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
