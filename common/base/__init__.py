"""Low-level shared utilities for namefmt."""

from .logging import get_logger, setup_logging, NamefmtLogger

__all__ = [
    "get_logger",
    "setup_logging",
    "NamefmtLogger",
]
