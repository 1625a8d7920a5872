"""Resolution orchestration for modgate.

Sequences the two validation stages and enforces the all-or-nothing
contract:

1. **Requirement and conflict validation** via
   :class:`~modgate.core.validator.RequirementValidator`. Any problem stops
   here; the sorter never sees a set with missing requirements.
2. **Dependency ordering** via :class:`~modgate.core.sorter.DependencySorter`.
   Any cycle, or any mod blocked by one, discards the whole order.

A successful resolution returns every input mod exactly once, in
dependency-first order. A failed one returns no mods at all plus the full
list of problems; callers must never load a subset.

Typical usage::

    from modgate.core import resolve

    result = resolve(descriptors)
    if result.is_valid:
        for mod in result.ordered:
            load(mod)
    else:
        report(result.errors)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from modgate.utils.logger import get_logger
from modgate.models.descriptor import ModDescriptor
from modgate.core.sorter import DependencySorter
from modgate.core.validator import RequirementValidator

logger = get_logger("resolver")

__all__ = ["ModResolver", "ResolutionResult", "resolve"]


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving a mod set.

    Attributes:
        ordered: Mods in load order; empty whenever ``errors`` is not.
        errors: Every problem found, in discovery order.
    """

    ordered: Tuple[ModDescriptor, ...] = field(default_factory=tuple)
    errors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def load_order(self) -> List[str]:
        """Return the identifiers of :attr:`ordered`."""
        return [mod.identifier for mod in self.ordered]

    def summary(self) -> str:
        """Generate a human-readable summary of the resolution.

        Example::

            >>> print(result.summary())
            Resolution failed with 2 error(s):
              - Cyclic dependency detected: A -> B -> A
              - Mod 'C' requires mod 'D', but it is not present.
        """
        if self.is_valid:
            return f"Resolved {len(self.ordered)} mod(s): {', '.join(self.load_order())}"

        lines = [f"Resolution failed with {len(self.errors)} error(s):"]
        lines.extend(f"  - {error}" for error in self.errors)
        return "\n".join(lines)


class ModResolver:
    """Validates a mod set and computes its load order.

    The resolver holds no per-call state; one instance can serve any
    number of concurrent calls.

    Args:
        validator: Requirement/conflict validator to use.
        sorter: Dependency sorter to use.
    """

    def __init__(
        self,
        validator: Optional[RequirementValidator] = None,
        sorter: Optional[DependencySorter] = None,
    ) -> None:
        self.validator = validator or RequirementValidator()
        self.sorter = sorter or DependencySorter()

    def resolve(self, descriptors: Iterable[ModDescriptor]) -> ResolutionResult:
        """Validate ``descriptors`` and order them by their requirements.

        Args:
            descriptors: The complete mod set, in discovery order.

        Returns:
            A :class:`ResolutionResult`: either every mod in load order
            and no errors, or no mods and every error found.

        Raises:
            DuplicateModError: Two descriptors share an identifier.
            UnknownOperatorError: A constraint carries an invalid operator.
        """
        mods = tuple(descriptors)
        logger.debug("Resolving %d mod(s)", len(mods))

        report = self.validator.validate(mods)
        if not report.is_valid:
            return self._fail(report.errors)

        sorted_result = self.sorter.sort(mods)
        if not sorted_result.is_valid:
            return self._fail(sorted_result.errors)

        logger.info(
            "Resolved load order: %s",
            ", ".join(mod.identifier for mod in sorted_result.ordered) or "<empty>",
        )
        return ResolutionResult(ordered=sorted_result.ordered)

    @staticmethod
    def _fail(errors: Tuple[str, ...]) -> ResolutionResult:
        logger.error("Mod preprocessing failed with error(s): %s", list(errors))
        return ResolutionResult(errors=errors)


def resolve(descriptors: Iterable[ModDescriptor]) -> ResolutionResult:
    """Resolve ``descriptors`` with a default :class:`ModResolver`."""
    return ModResolver().resolve(descriptors)
