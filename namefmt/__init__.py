"""Filename normalization across a directory tree."""

from .classifier import classify  # noqa: F401
from .config import NamingConfig, resolve_config  # noqa: F401
from .engine import RunResult, run  # noqa: F401
from .errors import ConfigError, NamefmtError, RootPathError  # noqa: F401
from .models import Category, NamingStyle  # noqa: F401
from .transformer import transform  # noqa: F401
from .walker import walk  # noqa: F401

__all__ = [
    "Category",
    "ConfigError",
    "NamefmtError",
    "NamingConfig",
    "NamingStyle",
    "RootPathError",
    "RunResult",
    "classify",
    "resolve_config",
    "run",
    "transform",
    "walk",
]
