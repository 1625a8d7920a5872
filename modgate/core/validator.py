"""Requirement and conflict validation for modgate.

Checks every declared ``requires`` and ``conflicts_with`` relationship in a
descriptor set for existence and version satisfaction. Validation is
exhaustive: every problem across every descriptor is collected, nothing
stops at the first failure.

Typical usage::

    report = RequirementValidator().validate(descriptors)
    if not report.is_valid:
        for error in report.errors:
            print(error)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from modgate.utils.logger import get_logger
from modgate.models.version import satisfies
from modgate.models.descriptor import (
    ModDescriptor,
    index_descriptors,
    normalize_identifier,
)

logger = get_logger("validator")

__all__ = ["RequirementValidator", "ValidationReport"]


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of requirement and conflict validation.

    Attributes:
        errors: Human-readable problems, in discovery order.
    """

    errors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class RequirementValidator:
    """Validates requirement and conflict declarations of a mod set."""

    def validate(self, descriptors: Sequence[ModDescriptor]) -> ValidationReport:
        """Check every requirement and conflict in ``descriptors``.

        Args:
            descriptors: The complete mod set.

        Returns:
            A :class:`ValidationReport` listing every problem found.

        Raises:
            DuplicateModError: Two descriptors share an identifier.
            UnknownOperatorError: A constraint carries an invalid operator.
        """
        index = index_descriptors(descriptors)
        errors: List[str] = []

        for mod in descriptors:
            self._check_requirements(mod, index, errors)
            self._check_conflicts(mod, index, errors)

        logger.debug(
            "Validated %d mod(s): %d problem(s)", len(descriptors), len(errors)
        )
        return ValidationReport(tuple(errors))

    @staticmethod
    def _check_requirements(
        mod: ModDescriptor,
        index: Dict[str, ModDescriptor],
        errors: List[str],
    ) -> None:
        for required_id, constraint in mod.requires.items():
            required = index.get(normalize_identifier(required_id))
            if required is None:
                errors.append(
                    f"Mod '{mod.identifier}' requires mod '{required_id}', "
                    "but it is not present."
                )
                continue

            if constraint is not None and not satisfies(required.version, constraint):
                errors.append(
                    f"Mod '{mod.identifier}' requires mod '{required_id}' with "
                    f"version constraint '{constraint}', but found version "
                    f"'{required.version}'."
                )

    @staticmethod
    def _check_conflicts(
        mod: ModDescriptor,
        index: Dict[str, ModDescriptor],
        errors: List[str],
    ) -> None:
        for conflict_id, constraint in mod.conflicts_with.items():
            conflicting = index.get(normalize_identifier(conflict_id))
            if conflicting is None:
                continue

            if constraint is None:
                errors.append(
                    f"Mod '{mod.identifier}' conflicts with mod '{conflict_id}' "
                    f"(version: '{conflicting.version}')."
                )
            elif satisfies(conflicting.version, constraint):
                errors.append(
                    f"Mod '{mod.identifier}' conflicts with mod '{conflict_id}' "
                    f"(version: '{conflicting.version}', constraint: '{constraint}')."
                )
