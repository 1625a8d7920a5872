"""
modgate: dependency validation and load ordering for game mods.

Given a set of mod descriptors, each declaring the mods it requires and
conflicts with (optionally version-constrained), modgate decides whether the
set can be loaded and, if so, in which order:

    • Missing requirements and unsatisfied version constraints
    • Conflicting mods present in the set
    • Cyclic dependencies, each reported with its full chain
    • Dependency-first load order, all-or-nothing

Example:
    >>> from modgate import resolve
    >>> result = resolve(descriptors)
    >>> result.load_order()
    ['Core', 'Maps', 'Trains']
"""

from __future__ import annotations

from modgate.__version__ import __version__
from modgate.core.resolver import ModResolver, ResolutionResult, resolve
from modgate.models import (
    ModDescriptor,
    ModVersion,
    VersionConstraint,
    VersionOperator,
    satisfies,
)

__author__ = "modgate Contributors"
__license__ = "Apache-2.0"
__description__ = "Dependency validation and load ordering for game mods."

__all__ = [
    "__version__",
    "ModDescriptor",
    "ModResolver",
    "ModVersion",
    "ResolutionResult",
    "VersionConstraint",
    "VersionOperator",
    "resolve",
    "satisfies",
]
