"""Unit tests for modgate.core.validator.

Error lists are compared as sets except where a single message is checked,
since the discovery order across unrelated mods is not part of the
contract.
"""

from __future__ import annotations

from typing import Callable

import pytest

from modgate.core.validator import RequirementValidator, ValidationReport
from modgate.exceptions import DuplicateModError, UnknownOperatorError
from modgate.models import ModDescriptor, ModVersion, VersionConstraint, VersionOperator

MakeMod = Callable[..., ModDescriptor]


@pytest.fixture
def validator() -> RequirementValidator:
    return RequirementValidator()


@pytest.mark.unit
class TestValidationReport:
    """Tests for ValidationReport."""

    def test_empty_report_is_valid(self) -> None:
        assert ValidationReport().is_valid
        assert ValidationReport().errors == ()

    def test_report_with_errors_is_invalid(self) -> None:
        assert not ValidationReport(("problem",)).is_valid


@pytest.mark.unit
class TestRequirements:
    """Tests for requirement existence and version checks."""

    def test_no_mods(self, validator: RequirementValidator) -> None:
        assert validator.validate([]).is_valid

    def test_satisfied_requirements(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [
            make_mod("A", requires={"B": ">=1.0.0", "C": ""}),
            make_mod("B", "1.0.0"),
            make_mod("C", "0.1"),
        ]

        report = validator.validate(mods)

        assert report.is_valid
        assert report.errors == ()

    def test_missing_requirement(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        report = validator.validate([make_mod("A", requires=["B"]), make_mod("C")])

        assert not report.is_valid
        assert report.errors == ("Mod 'A' requires mod 'B', but it is not present.",)

    def test_missing_requirement_with_constraint_reports_only_absence(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        report = validator.validate([make_mod("A", requires={"B": ">=2.0"})])

        assert report.errors == ("Mod 'A' requires mod 'B', but it is not present.",)

    def test_unsatisfied_constraint(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", requires={"B": ">1.0.0"}), make_mod("B", "1.0.0")]

        report = validator.validate(mods)

        assert report.errors == (
            "Mod 'A' requires mod 'B' with version constraint '>1.0.0', "
            "but found version '1.0.0'.",
        )

    def test_equal_constraint_uses_bare_version_in_message(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", requires={"B": "=2.0"}), make_mod("B", "1.5")]

        report = validator.validate(mods)

        assert report.errors == (
            "Mod 'A' requires mod 'B' with version constraint '2.0', "
            "but found version '1.5'.",
        )

    def test_greater_or_equal_is_inclusive(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", requires={"B": ">=1.0.0"}), make_mod("B", "1.0.0")]

        assert validator.validate(mods).is_valid

    def test_lookup_is_case_insensitive(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", requires={"railroader.core": ">=1.0"}), make_mod("Railroader.Core")]

        assert validator.validate(mods).is_valid

    def test_unknown_operator_is_raised(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        broken = VersionConstraint(ModVersion.of(1, 0), "~=")  # type: ignore[arg-type]
        mods = [make_mod("A", requires={"B": broken}), make_mod("B")]

        with pytest.raises(UnknownOperatorError):
            validator.validate(mods)

    def test_duplicate_identifiers_are_rejected(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        with pytest.raises(DuplicateModError):
            validator.validate([make_mod("A"), make_mod("a")])


@pytest.mark.unit
class TestConflicts:
    """Tests for conflict detection."""

    def test_absent_conflict_is_ignored(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        assert validator.validate([make_mod("A", conflicts=["B"])]).is_valid

    def test_unconstrained_conflict(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", conflicts=["B"]), make_mod("B", "2.3")]

        report = validator.validate(mods)

        assert report.errors == ("Mod 'A' conflicts with mod 'B' (version: '2.3').",)

    def test_constrained_conflict_matching(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", conflicts={"B": ">=1.0.0"}), make_mod("B", "1.0.0")]

        report = validator.validate(mods)

        assert report.errors == (
            "Mod 'A' conflicts with mod 'B' (version: '1.0.0', constraint: '>=1.0.0').",
        )

    def test_constrained_conflict_not_matching(
        self, validator: RequirementValidator, make_mod: MakeMod
    ) -> None:
        mods = [make_mod("A", conflicts={"B": "<1.0"}), make_mod("B", "1.0.0")]

        assert validator.validate(mods).is_valid


@pytest.mark.unit
class TestExhaustiveValidation:
    """Every problem is collected, regardless of input order."""

    @pytest.fixture
    def broken_set(self, make_mod: MakeMod) -> list:
        return [
            make_mod("A", requires={"B": ">=2.0", "Missing": ""}),
            make_mod("B", "1.0.0", requires=["AlsoMissing"]),
            make_mod(
                "C",
                conflicts={"A": VersionConstraint(ModVersion.of(1, 0, 0), VersionOperator.EQUAL)},
            ),
        ]

    def test_collects_every_error(
        self, validator: RequirementValidator, broken_set: list
    ) -> None:
        report = validator.validate(broken_set)

        assert set(report.errors) == {
            "Mod 'A' requires mod 'B' with version constraint '>=2.0', "
            "but found version '1.0.0'.",
            "Mod 'A' requires mod 'Missing', but it is not present.",
            "Mod 'B' requires mod 'AlsoMissing', but it is not present.",
            "Mod 'C' conflicts with mod 'A' (version: '1.0.0', constraint: '1.0.0').",
        }
        assert len(report.errors) == 4

    def test_result_independent_of_input_order(
        self, validator: RequirementValidator, broken_set: list
    ) -> None:
        forward = validator.validate(broken_set)
        backward = validator.validate(list(reversed(broken_set)))

        assert set(forward.errors) == set(backward.errors)
        assert len(forward.errors) == len(backward.errors)

    def test_descriptors_are_not_modified(
        self, validator: RequirementValidator, broken_set: list
    ) -> None:
        before = [(mod.identifier, dict(mod.requires), dict(mod.conflicts_with)) for mod in broken_set]

        validator.validate(broken_set)

        after = [(mod.identifier, dict(mod.requires), dict(mod.conflicts_with)) for mod in broken_set]
        assert before == after
