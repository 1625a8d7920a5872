"""Cycle-aware dependency ordering for modgate.

Produces a load order in which every mod follows all of the mods it
requires, or reports every cyclic dependency and every mod blocked by one.

The traversal is a depth-first search driven by an explicit stack, so deep
dependency chains never hit the interpreter's recursion limit. Each node is
tracked in a single state map:

* absent: not visited yet
* ``IN_PROGRESS``: on the active branch; reaching it again closes a cycle
* ``VALID``: appended to the output
* ``INVALID``: part of a cycle, or requires a mod that is

Nodes are appended in postorder, so dependencies always precede dependents.
Roots are taken in input order, which keeps the output deterministic.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from modgate.exceptions import ModGateError
from modgate.utils.logger import get_logger
from modgate.models.descriptor import (
    ModDescriptor,
    index_descriptors,
    normalize_identifier,
)

logger = get_logger("sorter")

__all__ = ["DependencySorter", "SortResult", "VisitState"]


class VisitState(Enum):
    """Traversal state of a single mod."""

    IN_PROGRESS = "in_progress"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class SortResult:
    """Outcome of dependency ordering.

    Attributes:
        ordered: Mods that could be ordered, dependencies first.
        errors: Cycle and blocked-by-cycle messages.
    """

    ordered: Tuple[ModDescriptor, ...] = field(default_factory=tuple)
    errors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class _Frame:
    mod: ModDescriptor
    pending: Iterator[str]
    # Identifier as spelled by the dependent that pushed this frame.
    via: Optional[str] = None
    is_valid: bool = True


class _Traversal:
    """Mutable state of one sort call."""

    def __init__(self, descriptors: Sequence[ModDescriptor]) -> None:
        self.descriptors = descriptors
        self.index = index_descriptors(descriptors)
        self.states: Dict[str, VisitState] = {}
        self.path: List[ModDescriptor] = []
        self.positions: Dict[str, int] = {}
        self.cycle_membership: Dict[str, Set[int]] = {}
        self.cycle_count = 0
        self.ordered: List[ModDescriptor] = []
        self.errors: List[str] = []

    def run(self) -> SortResult:
        for mod in self.descriptors:
            if mod.key not in self.states:
                self._visit(mod)
        return SortResult(tuple(self.ordered), tuple(self.errors))

    def _visit(self, root: ModDescriptor) -> None:
        stack = [self._enter(root)]

        while stack:
            frame = stack[-1]
            required_id = next(frame.pending, None)

            if required_id is None:
                stack.pop()
                self._leave(frame)
                if stack and not frame.is_valid:
                    self._blocked(stack[-1], frame.via or frame.mod.identifier)
                continue

            state = self.states.get(normalize_identifier(required_id))
            if state is VisitState.IN_PROGRESS:
                self._report_cycle(required_id)
                frame.is_valid = False
            elif state is VisitState.INVALID:
                self._blocked(frame, required_id)
            elif state is None:
                stack.append(self._enter(self._lookup(frame.mod, required_id), required_id))

    def _enter(self, mod: ModDescriptor, via: Optional[str] = None) -> _Frame:
        self.states[mod.key] = VisitState.IN_PROGRESS
        self.positions[mod.key] = len(self.path)
        self.path.append(mod)
        return _Frame(mod, iter(mod.requires), via)

    def _leave(self, frame: _Frame) -> None:
        self.path.pop()
        del self.positions[frame.mod.key]

        if frame.is_valid:
            self.states[frame.mod.key] = VisitState.VALID
            self.ordered.append(frame.mod)
        else:
            self.states[frame.mod.key] = VisitState.INVALID

    def _lookup(self, dependent: ModDescriptor, required_id: str) -> ModDescriptor:
        try:
            return self.index[normalize_identifier(required_id)]
        except KeyError:
            raise ModGateError(
                f"Mod '{dependent.identifier}' requires unknown mod "
                f"'{required_id}'; validate requirements before sorting",
                {"mod": dependent.identifier, "requires": required_id},
            ) from None

    def _report_cycle(self, required_id: str) -> None:
        members = self.path[self.positions[normalize_identifier(required_id)]:]
        chain = [mod.identifier for mod in members]
        chain.append(members[0].identifier)
        self.errors.append(f"Cyclic dependency detected: {' -> '.join(chain)}")

        cycle = self.cycle_count
        self.cycle_count += 1
        for mod in members:
            self.cycle_membership.setdefault(mod.key, set()).add(cycle)

    def _blocked(self, frame: _Frame, required_id: str) -> None:
        """Mark ``frame`` invalid because ``required_id`` could not be ordered.

        Mods on the same cycle share a single cycle message, so no extra
        message is emitted between them.
        """
        frame.is_valid = False

        own = self.cycle_membership.get(frame.mod.key, set())
        theirs = self.cycle_membership.get(normalize_identifier(required_id), set())
        if own & theirs:
            return

        self.errors.append(
            f"Mod '{frame.mod.identifier}' cannot resolve mod '{required_id}' "
            f"because mod '{required_id}' is part of a cyclic dependency."
        )


class DependencySorter:
    """Orders mods so that every requirement loads before its dependents.

    Only meaningful for sets whose requirements all exist; run
    :class:`~modgate.core.validator.RequirementValidator` first.
    """

    def sort(self, descriptors: Sequence[ModDescriptor]) -> SortResult:
        """Order ``descriptors`` by their requirements.

        Args:
            descriptors: Mod set with no missing requirements.

        Returns:
            A :class:`SortResult` with the dependency-first order of every
            orderable mod and one message per cycle or blocked mod.

        Raises:
            DuplicateModError: Two descriptors share an identifier.
            ModGateError: A requirement names a mod outside the set.
        """
        result = _Traversal(descriptors).run()
        logger.debug(
            "Ordered %d of %d mod(s): %s",
            len(result.ordered),
            len(descriptors),
            ", ".join(mod.identifier for mod in result.ordered) or "<none>",
        )
        return result
