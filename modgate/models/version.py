"""
Version and version-constraint models for modgate.

A mod version is a dotted sequence of one to four non-negative integers
(major, minor, build, revision). Ordering is delegated to
:class:`packaging.version.Version`, which compares release segments
component-wise and treats missing trailing components as zero, so
``1.0`` and ``1.0.0`` compare equal.
"""

from __future__ import annotations

import operator as _op
from enum import Enum
from functools import total_ordering
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from packaging.version import Version

from modgate.constants import MAX_VERSION_COMPONENTS
from modgate.exceptions import UnknownOperatorError


@total_ordering
@dataclass(frozen=True, eq=False)
class ModVersion:
    """A dotted numeric mod version such as ``1.2`` or ``1.2.3.4``.

    The declared precision is preserved for display, but comparison and
    hashing ignore trailing zero components.

    Args:
        components: One to four non-negative integers.
    """

    components: Tuple[int, ...]

    def __post_init__(self) -> None:
        components = tuple(self.components)
        if not 1 <= len(components) <= MAX_VERSION_COMPONENTS:
            raise ValueError(
                f"A mod version has 1 to {MAX_VERSION_COMPONENTS} components, "
                f"got {len(components)}"
            )
        for part in components:
            if isinstance(part, bool) or not isinstance(part, int) or part < 0:
                raise ValueError(f"Invalid version component: {part!r}")
        object.__setattr__(self, "components", components)

    @classmethod
    def of(cls, *components: int) -> "ModVersion":
        """Build a version from positional components, e.g. ``of(1, 0, 0)``."""
        return cls(tuple(components))

    @property
    def major(self) -> int:
        return self.components[0]

    @property
    def minor(self) -> Optional[int]:
        return self._component(1)

    @property
    def build(self) -> Optional[int]:
        return self._component(2)

    @property
    def revision(self) -> Optional[int]:
        return self._component(3)

    def _component(self, index: int) -> Optional[int]:
        return self.components[index] if len(self.components) > index else None

    def _release(self) -> Version:
        return Version(str(self))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModVersion):
            return NotImplemented
        return self._release() == other._release()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ModVersion):
            return NotImplemented
        return self._release() < other._release()

    def __hash__(self) -> int:
        return hash(self._release())

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.components)

    def __repr__(self) -> str:
        return f"ModVersion({str(self)!r})"


class VersionOperator(Enum):
    """Comparison operator of a :class:`VersionConstraint`.

    Values are the operator tokens accepted in manifests.
    """

    EQUAL = "="
    GREATER_THAN = ">"
    GREATER_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="


_COMPARATORS: Dict[VersionOperator, Callable[[Any, Any], bool]] = {
    VersionOperator.EQUAL: _op.eq,
    VersionOperator.GREATER_THAN: _op.gt,
    VersionOperator.GREATER_OR_EQUAL: _op.ge,
    VersionOperator.LESS_THAN: _op.lt,
    VersionOperator.LESS_OR_EQUAL: _op.le,
}

# Display symbols; EQUAL renders as the bare version.
_DISPLAY_SYMBOLS: Dict[VersionOperator, str] = {
    VersionOperator.EQUAL: "",
    VersionOperator.GREATER_THAN: ">",
    VersionOperator.GREATER_OR_EQUAL: ">=",
    VersionOperator.LESS_OR_EQUAL: "<=",
    VersionOperator.LESS_THAN: "<",
}


@dataclass(frozen=True)
class VersionConstraint:
    """An operator applied to a version, e.g. ``>=1.2.0``.

    Args:
        version: Version to compare against.
        operator: Comparison operator; defaults to exact match.
    """

    version: ModVersion
    operator: VersionOperator = VersionOperator.EQUAL

    def to_manifest_string(self) -> str:
        """Render the constraint the way manifests spell it.

        ``>=`` is written as the bare version and exact matches carry an
        explicit ``=``, so the result parses back to an equal constraint.
        """
        if self.operator is VersionOperator.GREATER_OR_EQUAL:
            return str(self.version)
        if self.operator not in _COMPARATORS:
            raise UnknownOperatorError(self.operator)
        return f"{self.operator.value}{self.version}"

    def __str__(self) -> str:
        symbol = _DISPLAY_SYMBOLS.get(self.operator)  # type: ignore[call-overload]
        if symbol is None:
            symbol = f"[Invalid operator: {self.operator}]"
        return f"{symbol}{self.version}"


def satisfies(actual: ModVersion, constraint: VersionConstraint) -> bool:
    """Check whether ``actual`` satisfies ``constraint``.

    Args:
        actual: Version of the mod being checked.
        constraint: Constraint declared by the dependent mod.

    Returns:
        True if the comparison holds.

    Raises:
        UnknownOperatorError: The constraint's operator is not a
            :class:`VersionOperator` member.

    Examples:
        >>> satisfies(ModVersion.of(1, 0, 0), VersionConstraint(ModVersion.of(1, 0), VersionOperator.GREATER_OR_EQUAL))
        True
    """
    try:
        compare = _COMPARATORS[constraint.operator]
    except (KeyError, TypeError):
        raise UnknownOperatorError(constraint.operator) from None
    return compare(actual, constraint.version)
