"""Utility helpers for resolving the scriptree home directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

_HOME_ENV: Final[str] = "SCRIPTREE_HOME"
_DEFAULT_HOME: Final[Path] = Path.home() / ".scriptree"


def home_dir() -> Path:
    """Return the directory holding ``config.yml`` and the script registry."""

    value = os.getenv(_HOME_ENV)
    if value:
        return Path(value).expanduser()
    return _DEFAULT_HOME
