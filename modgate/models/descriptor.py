"""
Mod descriptor data model for modgate.

A :class:`ModDescriptor` is the engine's read-only view of one mod: its
identifier, version, and the mods it requires or conflicts with. The
resolution engine never mutates descriptors; sorted output is a new
sequence over the same objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from modgate.constants import LOG_LEVEL_NAMES
from modgate.exceptions import DuplicateModError
from modgate.models.version import ModVersion, VersionConstraint

#: Mapping of mod identifier to an optional version constraint.
ModReferences = Mapping[str, Optional[VersionConstraint]]


def normalize_identifier(identifier: str) -> str:
    """Return the case-insensitive lookup key for a mod identifier."""
    return identifier.lower()


def _freeze(references: Optional[ModReferences]) -> ModReferences:
    return MappingProxyType(dict(references or {}))


@dataclass(frozen=True, eq=False)
class ModDescriptor:
    """Declared metadata of a single mod.

    Args:
        identifier: Unique, case-insensitive mod identifier.
        version: Version of this mod.
        requires: Mods that must be present, with optional constraints.
        conflicts_with: Mods that must not be present (or not in the
            constrained version range).
        name: Display name from the manifest.
        log_level: Logging level requested by the manifest, if any.
        base_path: Directory the manifest was loaded from.
    """

    identifier: str
    version: ModVersion
    requires: ModReferences = field(default_factory=dict)
    conflicts_with: ModReferences = field(default_factory=dict)
    name: Optional[str] = None
    log_level: Optional[int] = None
    base_path: Optional[Path] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "requires", _freeze(self.requires))
        object.__setattr__(self, "conflicts_with", _freeze(self.conflicts_with))

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return normalize_identifier(self.identifier)

    @property
    def display_name(self) -> str:
        return self.name or self.identifier

    def to_json(self) -> Dict[str, object]:
        """Return a JSON-serializable representation."""
        return {
            "id": self.identifier,
            "name": self.name,
            "version": str(self.version),
            "requires": _references_to_json(self.requires),
            "conflictsWith": _references_to_json(self.conflicts_with),
            "logLevel": _log_level_to_json(self.log_level),
        }

    def __str__(self) -> str:
        return f"{self.identifier} [{self.version}]"

    def __repr__(self) -> str:
        return (
            "ModDescriptor("
            f"identifier={self.identifier!r}, "
            f"version={str(self.version)!r}, "
            f"requires={sorted(self.requires)!r}, "
            f"conflicts_with={sorted(self.conflicts_with)!r}"
            ")"
        )


def _references_to_json(references: ModReferences) -> Dict[str, str]:
    return {
        identifier: constraint.to_manifest_string() if constraint else ""
        for identifier, constraint in sorted(references.items())
    }


def _log_level_to_json(level: Optional[int]) -> Optional[str]:
    for name, value in LOG_LEVEL_NAMES.items():
        if value == level:
            return name.capitalize()
    return None


def index_descriptors(descriptors: Iterable[ModDescriptor]) -> Dict[str, ModDescriptor]:
    """Map normalized identifiers to descriptors.

    Raises:
        DuplicateModError: Two descriptors share an identifier, ignoring case.
    """
    index: Dict[str, ModDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.key in index:
            raise DuplicateModError(descriptor.identifier)
        index[descriptor.key] = descriptor
    return index
