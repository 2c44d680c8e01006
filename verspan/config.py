"""Configuration file loader for verspan.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``verspan.toml`` — settings under ``[verspan]`` table
- ``pyproject.toml`` — settings under ``[tool.verspan]`` table

Discovery order:

1. Explicit path from ``--config`` or ``VERSPAN_CONFIG``
2. ``verspan.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.verspan]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``verspan.toml``)::

    [verspan]
    widen_unrepresentable = false
    skip_invalid_versions = true
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, fields

import tomli

from verspan.exceptions import ConfigError
from verspan.utils.logger import get_logger
from verspan.constants import (
    DEFAULT_SKIP_INVALID_VERSIONS,
    DEFAULT_WIDEN_UNREPRESENTABLE,
)

logger = get_logger("config")

CONFIG_FILE_NAME = "verspan.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"
SECTION_NAME = "verspan"


@dataclass
class VerspanConfig:
    """Parsed and validated verspan configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        widen_unrepresentable: When a constraint set allows several
            disjoint intervals, export the least restrictive single range
            instead of raising ``UnrepresentableConstraintSet``.
        skip_invalid_versions: Drop unparseable entries from version
            listings (with a warning) instead of failing.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    widen_unrepresentable: bool = DEFAULT_WIDEN_UNREPRESENTABLE
    skip_invalid_versions: bool = DEFAULT_SKIP_INVALID_VERSIONS

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "widen_unrepresentable": self.widen_unrepresentable,
            "skip_invalid_versions": self.skip_invalid_versions,
        }


#: Option names accepted in the configuration table.
_KNOWN_OPTIONS = frozenset(f.name for f in fields(VerspanConfig) if f.name != "source_path")


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    verspan_toml = cwd / CONFIG_FILE_NAME
    if verspan_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, verspan_toml)
        return verspan_toml

    pyproject_toml = cwd / PYPROJECT_FILE_NAME
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", SECTION_NAME, pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.verspan]`` section.

    A pyproject.toml that cannot be read or parsed is treated as having
    no section, so discovery falls back to defaults.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return SECTION_NAME in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> VerspanConfig:
    """Load and validate verspan configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`VerspanConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return VerspanConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == PYPROJECT_FILE_NAME:
        section = raw.get("tool", {}).get(SECTION_NAME, {})
    else:
        section = raw.get(SECTION_NAME, {})

    if not section:
        logger.debug("Config file found but no verspan section, using defaults")
        return VerspanConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or contains invalid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomli.load(fh)
    except tomli.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> VerspanConfig:
    """Parse and validate the verspan configuration table.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    unknown = set(section.keys()) - _KNOWN_OPTIONS
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = VerspanConfig()
    for option in sorted(_KNOWN_OPTIONS):
        if option not in section:
            continue
        value = section[option]
        if not isinstance(value, bool):
            raise ConfigError(
                f"{option} must be a boolean, got {type(value).__name__}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, value)

    return config
