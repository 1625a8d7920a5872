"""Configuration file loader for modgate.

Supports two formats:

- ``modgate.toml``: settings under a ``[modgate]`` table
- ``pyproject.toml``: settings under a ``[tool.modgate]`` table

Discovery order:

1. Explicit path from ``--config`` or ``MODGATE_CONFIG``
2. ``modgate.toml`` in the current directory
3. ``pyproject.toml`` with a ``[tool.modgate]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``modgate.toml``)::

    [modgate]
    mods_dir = "Mods"
    definition_file = "Definition.json"
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from modgate.exceptions import ConfigError
from modgate.utils.logger import get_logger
from modgate.constants import DEFAULT_DEFINITION_FILE, DEFAULT_MODS_DIR

logger = get_logger("config")

_KNOWN_OPTIONS = ("mods_dir", "definition_file")


@dataclass
class ModGateConfig:
    """Parsed and validated modgate configuration.

    All fields have defaults, so an empty config file is valid.

    Attributes:
        mods_dir: Directory scanned for mods, relative to the working
            directory unless absolute.
        definition_file: Manifest file name inside each mod directory.
        source_path: Path to the loaded config file, or ``None``.
    """

    mods_dir: str = DEFAULT_MODS_DIR
    definition_file: str = DEFAULT_DEFINITION_FILE

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return user-facing options for debug logging."""
        return {
            "mods_dir": self.mods_dir,
            "definition_file": self.definition_file,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to the config file, or ``None`` if not found.

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

    modgate_toml = cwd / "modgate.toml"
    if modgate_toml.is_file():
        logger.debug("Found modgate.toml: %s", modgate_toml)
        return modgate_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_modgate_section(pyproject_toml):
        logger.debug("Found [tool.modgate] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_modgate_section(path: Path) -> bool:
    """Check whether ``pyproject.toml`` has a ``[tool.modgate]`` table.

    An unreadable or invalid ``pyproject.toml`` is treated as having none.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring %s: %s", path, exc)
        return False
    return "modgate" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> ModGateConfig:
    """Load and validate modgate configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`ModGateConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return ModGateConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("modgate", {})
    else:
        section = raw.get("modgate", {})

    if not section:
        logger.debug("Config file found but no modgate section, using defaults")
        return ModGateConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
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
) -> ModGateConfig:
    """Validate a ``[modgate]`` or ``[tool.modgate]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or empty values.
    """
    unknown = set(section) - set(_KNOWN_OPTIONS)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = ModGateConfig()
    for option in _KNOWN_OPTIONS:
        if option not in section:
            continue
        value = section[option]
        if not isinstance(value, str):
            raise ConfigError(
                f"{option} must be a string, got {type(value).__name__}",
                config_path=config_path,
                option=option,
            )
        if not value.strip():
            raise ConfigError(
                f"{option} must not be empty",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, value)

    return config
