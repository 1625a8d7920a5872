"""
Unified data model exports for modgate.

Example:
    >>> from modgate.models import ModDescriptor, ModVersion, VersionConstraint
"""

from __future__ import annotations

from modgate.models.descriptor import (
    ModDescriptor,
    ModReferences,
    index_descriptors,
    normalize_identifier,
)
from modgate.models.version import (
    ModVersion,
    VersionConstraint,
    VersionOperator,
    satisfies,
)

__all__ = [
    "ModDescriptor",
    "ModReferences",
    "ModVersion",
    "VersionConstraint",
    "VersionOperator",
    "index_descriptors",
    "normalize_identifier",
    "satisfies",
]
