"""
config.py

Process-wide settings, resolved once at startup and passed explicitly to
the command-line tools.

- data_dir:  where the `<name>_wordlist.txt` dictionaries live
- cache_dir: where guess caches are written
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from alphadocte.exceptions import StateError

log = logging.getLogger(__name__)

APP_NAME = "alphadocte"
WORDLE_DEFAULT_SIZE = 5
DEFAULT_MAX_GUESSES = 6
DEFAULT_NUMBER_OF_GUESSES = 10

DATA_ENV_VAR = "ALPHADOCTE_DATA_DIR"
XDG_DATA_ENV_VAR = "XDG_DATA_DIRS"
XDG_DATA_DEFAULT = "/usr/local/share/:/usr/share/"
XDG_CACHE_ENV_VAR = "XDG_CACHE_HOME"
XDG_CACHE_DEFAULT = ".cache"
HOME_ENV_VAR = "HOME"
LOCAL_DATA_DIR = Path("data")


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    cache_dir: Path

    def cache_path(self, name: str) -> Path:
        """Cache file used for the dictionary called `name`."""
        return self.cache_dir / f"{name}.json"


def resolve_data_dir(environ: Mapping[str, str]) -> Path:
    explicit = environ.get(DATA_ENV_VAR)
    if explicit:
        return Path(explicit)

    # XDG only allows absolute paths
    for entry in environ.get(XDG_DATA_ENV_VAR, XDG_DATA_DEFAULT).split(":"):
        if not entry:
            continue
        base = Path(entry)
        if base.is_absolute() and (base / APP_NAME).is_dir():
            return base / APP_NAME

    return LOCAL_DATA_DIR


def resolve_cache_dir(environ: Mapping[str, str]) -> Path:
    xdg_cache = environ.get(XDG_CACHE_ENV_VAR)
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    home = environ.get(HOME_ENV_VAR)
    if home:
        return Path(home) / XDG_CACHE_DEFAULT / APP_NAME
    raise StateError(
        f"Neither {XDG_CACHE_ENV_VAR} nor {HOME_ENV_VAR} are set, cannot find cache path."
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    settings = Settings(data_dir=resolve_data_dir(env), cache_dir=resolve_cache_dir(env))
    log.debug("settings: %s", settings)
    return settings
