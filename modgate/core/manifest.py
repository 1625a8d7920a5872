"""Manifest parsing for modgate.

Turns the decoded JSON of a mod manifest (``Definition.json``) into a
:class:`~modgate.models.descriptor.ModDescriptor`. Malformed input raises
:class:`~modgate.exceptions.ManifestError`; nothing here touches the
filesystem.

Manifest layout::

    {
        "id": "Railroader.FirstMod",
        "name": "First Mod",
        "version": "1.2.0",
        "logLevel": "Debug",
        "requires": {"Core": ">=1.0", "Maps": ""},
        "conflictsWith": {"OldMaps": "<2.0"}
    }

Constraint grammar:

- ``""``                 any version
- ``"1.2"``              same as ``>=1.2``
- ``"=1.2"``             exactly 1.2
- ``">1.2"``, ``">=1.2"``, ``"<1.2"``, ``"<=1.2"``
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from modgate.exceptions import ManifestError
from modgate.models.descriptor import ModDescriptor
from modgate.models.version import ModVersion, VersionConstraint, VersionOperator
from modgate.constants import (
    LOG_LEVEL_NAMES,
    MANIFEST_CONFLICTS_WITH,
    MANIFEST_ID,
    MANIFEST_LOG_LEVEL,
    MANIFEST_NAME,
    MANIFEST_REQUIRES,
    MANIFEST_VERSION,
    MAX_VERSION_COMPONENTS,
)

__all__ = [
    "descriptor_from_manifest",
    "parse_constraint",
    "parse_references",
    "parse_version",
]

_VERSION_PATTERN = re.compile(
    r"^[0-9]+(?:\.[0-9]+){1,%d}$" % (MAX_VERSION_COMPONENTS - 1)
)

_EXPECTED_VERSION = "Expected a valid version (e.g., '1', '1.2', '1.2.3' or '1.2.3.4')."


def parse_version(
    value: Any,
    *,
    mod_id: Optional[str] = None,
    field: str = MANIFEST_VERSION,
) -> ModVersion:
    """Parse a dotted version string.

    A bare major version such as ``"1"`` is read as ``"1.0"``.

    Raises:
        ManifestError: ``value`` is not a string of 1-4 numeric components.
    """
    if not isinstance(value, str):
        raise ManifestError(
            f"Invalid version token {type(value).__name__}. {_EXPECTED_VERSION}",
            mod_id=mod_id,
            field=field,
        )

    text = value.strip()
    if "." not in text:
        text += ".0"

    if not _VERSION_PATTERN.match(text):
        raise ManifestError(
            f"Invalid version format '{value}'. {_EXPECTED_VERSION}",
            mod_id=mod_id,
            field=field,
        )

    return ModVersion(tuple(int(part) for part in text.split(".")))


def _split_operator(mod_id: str, constraint: str) -> Tuple[VersionOperator, int]:
    head = constraint[0]
    has_equals = len(constraint) > 1 and constraint[1] == "="

    if head == ">":
        return (VersionOperator.GREATER_OR_EQUAL, 2) if has_equals else (VersionOperator.GREATER_THAN, 1)
    if head == "<":
        return (VersionOperator.LESS_OR_EQUAL, 2) if has_equals else (VersionOperator.LESS_THAN, 1)
    if head == "=":
        return VersionOperator.EQUAL, 1
    if "0" <= head <= "9":
        return VersionOperator.GREATER_OR_EQUAL, 0

    raise ManifestError(
        f"Invalid operator '{head}' for mod '{mod_id}'. "
        "Supported operators: =, >, >=, <=, <.",
        mod_id=mod_id,
    )


def parse_constraint(mod_id: str, constraint: Optional[str]) -> Optional[VersionConstraint]:
    """Parse a manifest version constraint.

    Args:
        mod_id: Identifier of the referenced mod, used in error messages.
        constraint: Constraint text; empty or ``None`` means any version.

    Returns:
        The parsed constraint, or ``None`` when any version is acceptable.

    Raises:
        ManifestError: Unknown operator or malformed version.
    """
    if not constraint:
        return None

    operator, skip = _split_operator(mod_id, constraint)
    version_text = constraint[skip:].lstrip()
    if not version_text:
        raise ManifestError(
            f"Missing version after operator in constraint '{constraint}' "
            f"for mod '{mod_id}'.",
            mod_id=mod_id,
        )

    return VersionConstraint(parse_version(version_text, mod_id=mod_id), operator)


def parse_references(
    value: Any,
    *,
    field: str,
    owner: Optional[str] = None,
) -> Dict[str, Optional[VersionConstraint]]:
    """Parse a ``requires`` or ``conflictsWith`` object.

    Args:
        value: Decoded JSON value; ``None`` means no references.
        field: Manifest field name, used in error messages.
        owner: Identifier of the mod declaring the references.

    Raises:
        ManifestError: ``value`` is not an object of string constraints.
    """
    if value is None:
        return {}

    if not isinstance(value, Mapping):
        raise ManifestError(
            f"Invalid {field}: expected an object mapping mod ids to constraints.",
            mod_id=owner,
            field=field,
        )

    references: Dict[str, Optional[VersionConstraint]] = {}
    for identifier, constraint in value.items():
        if not isinstance(constraint, str):
            raise ManifestError(
                f"Invalid version constraint for mod '{identifier}' in {field}. "
                "Expected a string.",
                mod_id=owner,
                field=field,
            )
        references[identifier] = parse_constraint(identifier, constraint)

    return references


def _parse_log_level(value: Any, mod_id: str) -> Optional[int]:
    if value is None:
        return None

    level = LOG_LEVEL_NAMES.get(str(value).lower())
    if level is None:
        raise ManifestError(
            f"Invalid log level '{value}'. "
            f"Expected one of: {', '.join(name.capitalize() for name in LOG_LEVEL_NAMES)}.",
            mod_id=mod_id,
            field=MANIFEST_LOG_LEVEL,
        )
    return level


def _required_string(data: Mapping[str, Any], key: str, mod_id: Optional[str]) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ManifestError(
            f"Manifest field '{key}' is required and must be a non-empty string.",
            mod_id=mod_id,
            field=key,
        )
    return value


def descriptor_from_manifest(
    data: Any,
    *,
    base_path: Optional[Path] = None,
) -> ModDescriptor:
    """Build a descriptor from a decoded manifest.

    Args:
        data: Decoded JSON object.
        base_path: Directory the manifest belongs to.

    Returns:
        The parsed :class:`ModDescriptor`.

    Raises:
        ManifestError: A required field is missing or any field is malformed.
    """
    if not isinstance(data, Mapping):
        raise ManifestError("Manifest must be a JSON object.")

    identifier = _required_string(data, MANIFEST_ID, None)
    name = _required_string(data, MANIFEST_NAME, identifier)

    if MANIFEST_VERSION not in data:
        raise ManifestError(
            f"Manifest field '{MANIFEST_VERSION}' is required.",
            mod_id=identifier,
            field=MANIFEST_VERSION,
        )
    version = parse_version(data[MANIFEST_VERSION], mod_id=identifier)

    return ModDescriptor(
        identifier=identifier,
        version=version,
        requires=parse_references(
            data.get(MANIFEST_REQUIRES), field=MANIFEST_REQUIRES, owner=identifier
        ),
        conflicts_with=parse_references(
            data.get(MANIFEST_CONFLICTS_WITH),
            field=MANIFEST_CONFLICTS_WITH,
            owner=identifier,
        ),
        name=name,
        log_level=_parse_log_level(data.get(MANIFEST_LOG_LEVEL), identifier),
        base_path=base_path,
    )
