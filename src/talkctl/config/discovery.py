"""Locating ``talkctl.toml``.

The config names the database the installer writes to, so a file the
operator named explicitly must exist: a missing ``--config`` or
``TALKCTL_CONFIG`` target is an error, never a silent fall-back to the
default SQLite file.  Without either, the finder walks up from the
working directory the way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "talkctl.toml"
CONFIG_ENV_VAR = "TALKCTL_CONFIG"


class ConfigNotFound(FileNotFoundError):
    """A config file named by flag or environment does not exist."""

    def __init__(self, path: Path, origin: str) -> None:
        super().__init__(f"Config file from {origin} not found: {path}")
        self.path = path
        self.origin = origin


def find_config(start: Path | None = None, *, explicit: str | Path | None = None) -> Path | None:
    """Resolve the config file for one invocation.

    Lookup order: *explicit* (the ``--config`` flag), ``TALKCTL_CONFIG``,
    then ``talkctl.toml`` in *start* (default: cwd) or any parent.

    Returns None only when nothing was named and the walk-up found nothing.

    Raises:
        ConfigNotFound: *explicit* or ``TALKCTL_CONFIG`` names a missing file.
    """
    named = (("--config", explicit), (CONFIG_ENV_VAR, os.environ.get(CONFIG_ENV_VAR)))
    for origin, value in named:
        if value:
            path = Path(value).expanduser()
            if not path.is_file():
                raise ConfigNotFound(path, origin)
            return path

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
