"""Locate the folco.toml that applies to an invocation.

Lookup order: ``$FOLCO_CONFIG``, then the nearest ``folco.toml`` from the
working directory upwards, then the per-user file under
``$XDG_CONFIG_HOME/folco`` (``~/.config/folco`` when unset).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "folco.toml"
CONFIG_ENV_VAR = "FOLCO_CONFIG"


def user_config_path() -> Path:
    """Per-user config file, whether or not it exists."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "folco" / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    A set ``FOLCO_CONFIG`` is authoritative: if it names a missing file,
    no other location is consulted.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((p for p in _candidates(start) if p.is_file()), None)


def _candidates(start: Path | None) -> Iterator[Path]:
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME
    yield user_config_path()
