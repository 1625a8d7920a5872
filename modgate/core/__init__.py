"""
Core functionality exports for modgate.

    from modgate.core import resolve, ModDefinitionLoader

The resolution engine (validator, sorter, resolver) is pure: it performs no
I/O and keeps no state between calls. The loader and manifest parser feed
it from disk.
"""

from __future__ import annotations

from modgate.core.loader import ModDefinitionLoader
from modgate.core.validator import RequirementValidator, ValidationReport
from modgate.core.sorter import DependencySorter, SortResult, VisitState
from modgate.core.resolver import ModResolver, ResolutionResult, resolve
from modgate.core.manifest import (
    descriptor_from_manifest,
    parse_constraint,
    parse_references,
    parse_version,
)

__all__ = [
    "ModDefinitionLoader",
    "RequirementValidator",
    "ValidationReport",
    "DependencySorter",
    "SortResult",
    "VisitState",
    "ModResolver",
    "ResolutionResult",
    "resolve",
    "descriptor_from_manifest",
    "parse_constraint",
    "parse_references",
    "parse_version",
]
