"""
common.base.logging

Typed logging for namefmt.

Features:
 - Custom NamefmtLogger subclass with Rich detection flag
 - Unified setup for Rich + standard logging on stderr
 - Optional per-run log file (only when a log directory is configured)
 - Colorized, emoji-enhanced level output
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, cast

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text


ROOT_LOGGER_NAME = "namefmt"

# ----------------------------------------------------------------------
# LEVEL STYLE METADATA
# ----------------------------------------------------------------------

ANSI_RESET = "\033[0m"

LEVEL_STYLES: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {"emoji": "🐛", "ansi": "\033[36m", "rich": "bright_cyan"},
    logging.INFO: {"emoji": "ℹ️", "ansi": "\033[32m", "rich": "green"},
    logging.WARNING: {"emoji": "⚠️", "ansi": "\033[33m", "rich": "yellow"},
    logging.ERROR: {"emoji": "❌", "ansi": "\033[31m", "rich": "red"},
    logging.CRITICAL: {"emoji": "💥", "ansi": "\033[95m", "rich": "bold magenta"},
}
DEFAULT_STYLE = LEVEL_STYLES[logging.INFO]


def _level_style(record: logging.LogRecord) -> Dict[str, str]:
    return LEVEL_STYLES.get(record.levelno, DEFAULT_STYLE)


# ----------------------------------------------------------------------
# FORMATTERS
# ----------------------------------------------------------------------

class ColorEmojiFormatter(logging.Formatter):
    """Console formatter that injects colored level names and emojis."""

    def __init__(self, *args: Any, use_color: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        style = _level_style(record)
        display = f"{style['emoji']} {record.levelname}"
        if self.use_color:
            display = f"{style['ansi']}{display}{ANSI_RESET}"

        record.level_display = display  # type: ignore[attr-defined]
        try:
            return super().format(record)
        finally:
            del record.level_display  # type: ignore[attr-defined]


class EmojiFormatter(logging.Formatter):
    """File formatter that prefixes log lines with the level emoji."""

    def format(self, record: logging.LogRecord) -> str:
        record.level_emoji = _level_style(record)["emoji"]  # type: ignore[attr-defined]
        return super().format(record)


class NamefmtRichHandler(RichHandler):
    """Rich console handler with emoji-enhanced level column."""

    def get_level_text(self, record: logging.LogRecord) -> Text:
        style = _level_style(record)
        text = Text()
        text.append(f"{style['emoji']} ", style=style["rich"])
        text.append(record.levelname, style=style["rich"])
        return text


# ----------------------------------------------------------------------
# LOGGER CLASS
# ----------------------------------------------------------------------

class NamefmtLogger(logging.Logger):
    """Custom logger with Rich support flag and optional log file."""

    rich_enabled: bool = False
    log_file: Optional[Path] = None


def _normalize_level(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().upper()
        if candidate in logging._nameToLevel:  # type: ignore[attr-defined]
            return candidate
    elif isinstance(value, int):
        label = logging.getLevelName(value)
        if isinstance(label, str) and not label.startswith("Level "):
            return label
    return "INFO"


def _resolve_use_rich(value: Optional[bool]) -> bool:
    if value is None:
        return sys.stderr.isatty()
    return bool(value)


# ----------------------------------------------------------------------
# BASE LOGGER SETUP
# ----------------------------------------------------------------------

def setup_logging(
    level: str | int | None = None,
    use_rich: Optional[bool] = None,
    log_dir: Optional[Path | str] = None,
    file_prefix: Optional[str] = None,
) -> NamefmtLogger:
    """
    Configure and return the global namefmt logger.

    Args:
        level: Desired logging level (INFO if unset or unknown).
        use_rich: Force-enable or disable the Rich handler. None enables it
            when stderr is a terminal.
        log_dir: Directory for a per-run log file. No file is written when
            omitted.
        file_prefix: Prefix for generated log filenames.
    """
    resolved_level = _normalize_level(level)
    resolved_use_rich = _resolve_use_rich(use_rich)
    resolved_file_prefix = file_prefix or ROOT_LOGGER_NAME

    logging.setLoggerClass(NamefmtLogger)
    logger = cast(NamefmtLogger, logging.getLogger(ROOT_LOGGER_NAME))
    logger.setLevel(resolved_level)

    # Tear down any previous handlers so we can rebuild with new settings.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # ------------------------------------------------------------------
    # Console Handler (Rich or ANSI), always on stderr
    # ------------------------------------------------------------------
    console_handler: logging.Handler
    if resolved_use_rich:
        console_handler = NamefmtRichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_time=True,
            show_level=True,
            show_path=False,
            log_time_format="[%X]",
        )
        logger.rich_enabled = True
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            ColorEmojiFormatter(
                fmt="%(asctime)s %(level_display)s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
                use_color=sys.stderr.isatty(),
            )
        )
        logger.rich_enabled = False
    console_handler.setLevel(logging.NOTSET)
    logger.addHandler(console_handler)

    # ------------------------------------------------------------------
    # File Handler
    # ------------------------------------------------------------------
    logger.log_file = None
    if log_dir:
        resolved_log_dir = Path(log_dir).expanduser()
        resolved_log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file_path = resolved_log_dir / f"{resolved_file_prefix}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            EmojiFormatter(
                fmt="%(asctime)s %(level_emoji)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.setLevel(logging.NOTSET)
        logger.addHandler(file_handler)
        logger.log_file = log_file_path

    # ------------------------------------------------------------------
    # Finalize
    # ------------------------------------------------------------------
    logger.propagate = False
    logger._initialized = True  # type: ignore[attr-defined]
    logger.debug(
        "Logger initialized at level %s (Rich=%s)",
        resolved_level,
        "ON" if logger.rich_enabled else "OFF",
    )
    if logger.log_file is not None:
        logger.info("📄 Log file created at: %s", logger.log_file.resolve())

    return logger


# ----------------------------------------------------------------------
# UTILITY ACCESSOR
# ----------------------------------------------------------------------

def get_logger(name: str = ROOT_LOGGER_NAME) -> NamefmtLogger:
    """Retrieve a namespaced namefmt logger (configured later via setup_logging)."""

    logging.setLoggerClass(NamefmtLogger)
    base = cast(NamefmtLogger, logging.getLogger(ROOT_LOGGER_NAME))

    if not getattr(base, "_initialized", False) and not base.handlers:
        base.addHandler(logging.NullHandler())

    if not name or name == ROOT_LOGGER_NAME:
        return base
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return cast(NamefmtLogger, logging.getLogger(name))

    return cast(NamefmtLogger, base.getChild(name))
