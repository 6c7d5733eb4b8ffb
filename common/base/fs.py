"""Filesystem helper utilities shared across common modules."""

from __future__ import annotations

import os
from pathlib import Path


def ensure_dir(path: Path | str) -> Path:
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p


def ensure_parent(path: Path | str) -> Path:
    return ensure_dir(Path(path).expanduser().parent)


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def user_config_dir() -> Path:
    """Return the per-user configuration base ($XDG_CONFIG_HOME or ~/.config)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base).expanduser()
    return Path.home() / ".config"
