"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: YAML or TOML (flat ``key = value``) loader, chosen by suffix
 - `coerce_bool` / `coerce_str_list`: value normalization with clear errors
 - `extract_section`: fetch an optional mapping section
 - `extract_logging_settings`: normalized ``[logging]`` section
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import tomli
import yaml

from common.base.file_io import read_toml, read_yaml
from common.base.logging import get_logger

log = get_logger(__name__)

ConfigDict = Dict[str, Any]

YAML_SUFFIXES = {".yaml", ".yml"}
LOGGING_SECTION_KEY = "logging"
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def is_yaml_path(path: Path | str) -> bool:
    return Path(path).suffix.lower() in YAML_SUFFIXES


def load_config(path: str | Path | None) -> ConfigDict:
    """
    Load a configuration document into a plain dict.

    ``.yaml``/``.yml`` files are parsed with PyYAML, everything else as TOML.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file cannot be read or parsed, or its root is not
            a mapping.
    """
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {cfg_path}")
    if not cfg_path.is_file():
        raise ValueError(f"Configuration path is not a file: {cfg_path}")

    try:
        data: Any = read_yaml(cfg_path) if is_yaml_path(cfg_path) else read_toml(cfg_path)
    except (yaml.YAMLError, tomli.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"Failed to parse {cfg_path}: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Failed to read {cfg_path}: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration root must be a mapping in {cfg_path}")

    return dict(data)


def coerce_bool(value: Any, key: str, config_path: Optional[Path] = None) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    where = f"Configuration '{config_path}'" if config_path else "Configuration"
    raise ValueError(f"{where} field '{key}' must be a boolean, got {value!r}.")


def coerce_str_list(value: Any, key: str, config_path: Optional[Path] = None) -> List[str]:
    """Accept a list of strings or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        items: List[str] = []
        for item in value:
            if not isinstance(item, str):
                where = f"Configuration '{config_path}'" if config_path else "Configuration"
                raise ValueError(f"{where} field '{key}' must only contain strings, got {item!r}.")
            if item.strip():
                items.append(item.strip())
        return items
    where = f"Configuration '{config_path}'" if config_path else "Configuration"
    raise ValueError(f"{where} field '{key}' must be a list or comma-separated string.")


def extract_section(root: Mapping[str, Any], key: str, config_path: Optional[Path] = None) -> ConfigDict:
    section = root.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        where = f" in {config_path}" if config_path else ""
        raise ValueError(f"'{key}' section must be a mapping{where}")
    return dict(section)


def _normalize_use_rich(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"auto", "default", ""}:
            return None
        if lowered in YES_VALUES:
            return True
        if lowered in NO_VALUES:
            return False
    return None


def extract_logging_settings(root: Mapping[str, Any], config_path: Optional[Path] = None) -> ConfigDict:
    section = extract_section(root, LOGGING_SECTION_KEY, config_path)
    ignored = sorted(key for key in section if key not in LOGGING_ALLOWED_KEYS)
    if ignored:
        log.debug(f"Ignoring unknown logging keys: {', '.join(ignored)}")

    settings: ConfigDict = {}
    if section.get("level") is not None:
        settings["level"] = str(section["level"])
    if "use_rich" in section:
        settings["use_rich"] = _normalize_use_rich(section["use_rich"])
    if section.get("log_dir"):
        log_dir = Path(str(section["log_dir"])).expanduser()
        if not log_dir.is_absolute() and config_path is not None:
            log_dir = config_path.expanduser().resolve().parent / log_dir
        settings["log_dir"] = str(log_dir)
    if section.get("file_prefix"):
        settings["file_prefix"] = str(section["file_prefix"])
    return settings
