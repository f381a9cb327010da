"""Optional ``.env`` loading for the CLI and host applications.

Purpose
-------
Let operators keep ``LOG_ASPECT_*`` settings in a ``.env`` file next to their
project. Values are merged into ``os.environ`` without overriding variables
that are already set, so real environment values keep precedence.

Contents
--------
* :data:`DOTENV_ENV_VAR` - environment toggle read by the CLI.
* :func:`enable_dotenv` - locate and load the nearest ``.env`` once.
* :func:`use_dotenv_requested` - resolve the CLI flag against the toggle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

from dotenv import find_dotenv, load_dotenv

from .runtime._settings import env_bool

DOTENV_ENV_VAR = "LOG_ASPECT_USE_DOTENV"

logger = logging.getLogger(__name__)

_LOADED: Path | None = None
_LOCK = Lock()


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file and return its resolved path.

    The search walks upwards from ``search_from`` (default: the current
    working directory). Existing environment variables are never overridden.
    Repeated calls return the first loaded path without reading it again.
    """

    global _LOADED
    with _LOCK:
        if _LOADED is not None:
            return _LOADED
        if search_from is not None:
            candidate = _find_upwards(search_from)
        else:
            found = find_dotenv(usecwd=True)
            candidate = Path(found) if found else None
        if candidate is None:
            logger.debug("No .env file found")
            return None
        load_dotenv(candidate, override=False)
        _LOADED = candidate.resolve()
        logger.debug("Loaded environment from %s", _LOADED)
        return _LOADED


def use_dotenv_requested(flag: bool | None) -> bool:
    """Return whether ``.env`` loading is requested; an explicit flag wins."""

    if flag is not None:
        return flag
    return env_bool(DOTENV_ENV_VAR, default=False)


def _find_upwards(start: Path) -> Path | None:
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED
    with _LOCK:
        _LOADED = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "use_dotenv_requested"]
