"""
namefmt.config

Config Resolver: merges built-in defaults with an optional override file into
an immutable ``NamingConfig`` snapshot that is passed explicitly to the
classifier, transformer and executor.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from common.base.file_io import write_text, write_yaml
from common.base.fs import ensure_parent, user_config_dir
from common.base.logging import get_logger
from common.shared.loader import (
    coerce_bool,
    coerce_str_list,
    extract_logging_settings,
    extract_section,
    is_yaml_path,
    load_config,
)

from .errors import ConfigError
from .models import Behavior, Ecosystem, NamingStyle

log = get_logger(__name__)

APP_NAME = "namefmt"
DEFAULT_CONFIG_FILENAME = "namefmt.toml"

DEFAULT_EXE_EXTENSIONS: Tuple[str, ...] = ("exe", "bin", "app")
DEFAULT_PACKAGE_MARKERS: Tuple[str, ...] = ("package.json", "Cargo.toml", "pyproject.toml")
DEFAULT_ECOSYSTEM_STYLES: Dict[str, NamingStyle] = {
    "package.json": NamingStyle.KEBAB,
    "Cargo.toml": NamingStyle.SNAKE,
    "pyproject.toml": NamingStyle.SNAKE,
}

BOOL_KEYS = ("replace_spaces", "timestamp", "include_hidden")
KNOWN_KEYS = set(BOOL_KEYS) | {"exclude", "styles", "detection", "ecosystems", "behaviors", "logging"}

DEFAULT_CONFIG_TOML = """\
replace_spaces = true
timestamp = false
include_hidden = false
exclude = []

[styles]
regular = "snake_case"
executable = "kebab-case"

[detection]
exe_extensions = ["exe", "bin", "app"]
package_dirs = ["package.json", "Cargo.toml", "pyproject.toml"]

[ecosystems]
"package.json" = "kebab-case"
"Cargo.toml" = "snake_case"
"pyproject.toml" = "snake_case"
"""


def _normalize_extension(value: str) -> str:
    return value.strip().lstrip(".").lower()


@dataclass(frozen=True)
class NamingConfig:
    """Immutable configuration snapshot for one run."""

    replace_spaces: bool = True
    timestamp: bool = False
    include_hidden: bool = False
    exclude: Tuple[str, ...] = ()
    regular_style: NamingStyle = NamingStyle.SNAKE
    executable_style: NamingStyle = NamingStyle.KEBAB
    exe_extensions: FrozenSet[str] = frozenset(DEFAULT_EXE_EXTENSIONS)
    ecosystems: Tuple[Ecosystem, ...] = tuple(
        Ecosystem(marker, DEFAULT_ECOSYSTEM_STYLES[marker]) for marker in DEFAULT_PACKAGE_MARKERS
    )
    behaviors: Tuple[Behavior, ...] = ()
    logging: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )
    source: Optional[Path] = field(default=None, compare=False)

    @property
    def package_markers(self) -> Tuple[str, ...]:
        return tuple(eco.marker for eco in self.ecosystems)

    def is_executable_extension(self, extension: str) -> bool:
        return bool(extension) and _normalize_extension(extension) in self.exe_extensions

    def is_excluded(self, name: str) -> bool:
        return any(fnmatchcase(name, pattern) for pattern in self.exclude)

    def behavior_for(self, name: str) -> Optional[Behavior]:
        return next((b for b in self.behaviors if fnmatchcase(name, b.pattern)), None)

    def with_overrides(self, **changes: Any) -> "NamingConfig":
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "replace_spaces": self.replace_spaces,
            "timestamp": self.timestamp,
            "include_hidden": self.include_hidden,
            "exclude": list(self.exclude),
            "styles": {
                "regular": self.regular_style.value,
                "executable": self.executable_style.value,
            },
            "detection": {
                "exe_extensions": sorted(self.exe_extensions),
                "package_dirs": list(self.package_markers),
            },
            "ecosystems": {eco.marker: eco.style.value for eco in self.ecosystems},
            "behaviors": [{"pattern": b.pattern, "style": b.style.value} for b in self.behaviors],
        }


# ----------------------------------------------------------------------
# PARSING
# ----------------------------------------------------------------------

def _parse_style(value: Any, key: str, config_path: Optional[Path]) -> NamingStyle:
    try:
        return NamingStyle.parse(value)
    except ValueError as exc:
        raise ValueError(f"Configuration '{config_path}' field '{key}': {exc}") from exc


def _parse_behaviors(value: Any, config_path: Optional[Path]) -> Tuple[Behavior, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f"Configuration '{config_path}' field 'behaviors' must be a list of tables.")
    behaviors: List[Behavior] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, Mapping) or not entry.get("pattern") or "style" not in entry:
            raise ValueError(
                f"Configuration '{config_path}' behaviors[{index}] needs 'pattern' and 'style'."
            )
        behaviors.append(
            Behavior(
                pattern=str(entry["pattern"]),
                style=_parse_style(entry["style"], f"behaviors[{index}].style", config_path),
            )
        )
    return tuple(behaviors)


def _parse_ecosystems(
    detection: Mapping[str, Any],
    styles: Mapping[str, Any],
    config_path: Optional[Path],
) -> Tuple[Ecosystem, ...]:
    if "package_dirs" in detection:
        markers = coerce_str_list(detection["package_dirs"], "detection.package_dirs", config_path)
    else:
        markers = list(DEFAULT_PACKAGE_MARKERS)
    for marker in styles:
        if marker not in markers:
            markers.append(str(marker))

    ecosystems: List[Ecosystem] = []
    seen = set()
    for marker in markers:
        if marker in seen:
            continue
        seen.add(marker)
        if marker in styles:
            style = _parse_style(styles[marker], f"ecosystems.{marker}", config_path)
        else:
            style = DEFAULT_ECOSYSTEM_STYLES.get(marker, NamingStyle.SNAKE)
        ecosystems.append(Ecosystem(marker, style))
    return tuple(ecosystems)


def config_from_mapping(
    data: Mapping[str, Any],
    config_path: Optional[Path] = None,
    base: Optional[NamingConfig] = None,
) -> NamingConfig:
    """Overlay a parsed configuration document on ``base`` (built-in defaults)."""
    base = base or NamingConfig()
    ignored = sorted(str(key) for key in data if key not in KNOWN_KEYS)
    if ignored:
        log.debug(f"Ignoring unrecognized configuration keys: {', '.join(ignored)}")

    try:
        changes: Dict[str, Any] = {"source": config_path}
        for key in BOOL_KEYS:
            if key in data:
                changes[key] = coerce_bool(data[key], key, config_path)
        if "exclude" in data:
            changes["exclude"] = tuple(coerce_str_list(data["exclude"], "exclude", config_path))

        styles = extract_section(data, "styles", config_path)
        if "regular" in styles:
            changes["regular_style"] = _parse_style(styles["regular"], "styles.regular", config_path)
        if "executable" in styles:
            changes["executable_style"] = _parse_style(
                styles["executable"], "styles.executable", config_path
            )

        detection = extract_section(data, "detection", config_path)
        if "exe_extensions" in detection:
            extensions = coerce_str_list(detection["exe_extensions"], "detection.exe_extensions", config_path)
            changes["exe_extensions"] = frozenset(_normalize_extension(ext) for ext in extensions)

        ecosystem_styles = extract_section(data, "ecosystems", config_path)
        if "package_dirs" in detection or ecosystem_styles:
            changes["ecosystems"] = _parse_ecosystems(detection, ecosystem_styles, config_path)

        if "behaviors" in data:
            changes["behaviors"] = _parse_behaviors(data["behaviors"], config_path)

        changes["logging"] = MappingProxyType(extract_logging_settings(data, config_path))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    return base.with_overrides(**changes)


# ----------------------------------------------------------------------
# RESOLUTION
# ----------------------------------------------------------------------

def default_config_path() -> Path:
    return user_config_dir() / APP_NAME / DEFAULT_CONFIG_FILENAME


def resolve_config(
    config_path: Optional[Path | str] = None,
    *,
    timestamp: bool = False,
    use_default_location: bool = True,
) -> NamingConfig:
    """
    Build the configuration snapshot for a run.

    Args:
        config_path: Explicit override file. Missing or invalid is fatal.
        timestamp: Force the timestamp prefix on (CLI ``--timestamp``).
        use_default_location: Load the per-user default file when no
            explicit path is given and that file exists.

    Raises:
        ConfigError: If the configuration cannot be loaded or validated.
    """
    path: Optional[Path]
    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
    elif use_default_location and default_config_path().is_file():
        path = default_config_path()
    else:
        path = None

    config = NamingConfig()
    if path is not None:
        try:
            data = load_config(path)
        except (FileNotFoundError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc
        config = config_from_mapping(data, path, config)
        log.debug(f"Loaded configuration from {path}")

    if timestamp and not config.timestamp:
        config = config.with_overrides(timestamp=True)
    return config


def write_default_config(path: Optional[Path | str] = None) -> Path:
    """Write the built-in defaults to ``path`` (default per-user location)."""
    target = Path(path).expanduser() if path else default_config_path()
    if target.exists():
        raise ConfigError(f"Configuration file already exists: {target}")
    ensure_parent(target)
    try:
        if is_yaml_path(target):
            write_yaml(target, NamingConfig().as_dict())
        else:
            write_text(target, DEFAULT_CONFIG_TOML)
    except OSError as exc:
        raise ConfigError(f"Failed to write default config to {target}: {exc}") from exc
    log.info(f"📝 Default configuration written to {target}")
    return target
