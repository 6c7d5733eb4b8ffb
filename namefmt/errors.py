"""Exception types raised by namefmt before any filesystem mutation."""

from __future__ import annotations


class NamefmtError(Exception):
    """Base class for fatal namefmt errors."""


class ConfigError(NamefmtError):
    """Configuration file missing, unreadable, or invalid."""


class RootPathError(NamefmtError):
    """Root path to process does not exist or is not a file or directory."""
