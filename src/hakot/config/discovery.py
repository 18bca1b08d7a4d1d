"""Locate the ``hakot.toml`` that configures a run.

A file named on the command line (``--config``) or in ``HAKOT_CONFIG`` must
exist.  Otherwise the nearest ``hakot.toml`` at or above the working
directory is used, if any.  Relative ``[store] snapshot_path`` values are
later resolved against the directory of whichever file is found.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "hakot.toml"
CONFIG_ENV_VAR = "HAKOT_CONFIG"


class ConfigNotFoundError(FileNotFoundError):
    """A config file was named explicitly but does not exist."""


def find_config(explicit: str | Path | None = None, start: Path | None = None) -> Path | None:
    """Return the config file for this run, or None when there is none.

    Raises:
        ConfigNotFoundError: If *explicit* or ``HAKOT_CONFIG`` names a
            path that is not a file.
    """
    named = explicit or os.environ.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named)
        if not path.is_file():
            raise ConfigNotFoundError(f"Config file not found: {path}")
        return path

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
