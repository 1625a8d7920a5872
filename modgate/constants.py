"""
Centralized constants for modgate.

Immutable values shared across the manifest loader, configuration layer,
CLI and logging setup. All values are intended to be treated as read-only.
"""

from typing import Final, Mapping

# ---------------------------------------------------------------------------
# Mod layout
# ---------------------------------------------------------------------------

#: Directory (relative to the working directory) scanned for mods.
DEFAULT_MODS_DIR: Final[str] = "Mods"

#: Manifest file expected inside every mod directory.
DEFAULT_DEFINITION_FILE: Final[str] = "Definition.json"

#: Maximum allowed manifest size (in bytes).
MAX_FILE_SIZE: Final[int] = 1 * 1024 * 1024  # 1 MB

# ---------------------------------------------------------------------------
# Manifest keys
# ---------------------------------------------------------------------------

MANIFEST_ID: Final[str] = "id"
MANIFEST_NAME: Final[str] = "name"
MANIFEST_VERSION: Final[str] = "version"
MANIFEST_LOG_LEVEL: Final[str] = "logLevel"
MANIFEST_REQUIRES: Final[str] = "requires"
MANIFEST_CONFLICTS_WITH: Final[str] = "conflictsWith"

#: Maximum number of dot-separated components in a mod version.
MAX_VERSION_COMPONENTS: Final[int] = 4

#: Manifest ``logLevel`` names mapped to :mod:`logging` levels.
LOG_LEVEL_NAMES: Final[Mapping[str, int]] = {
    "verbose": 5,
    "debug": 10,
    "information": 20,
    "warning": 30,
    "error": 40,
    "fatal": 50,
}

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
