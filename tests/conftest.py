"""Shared fixtures for the modgate test suite."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Generator, Iterable, Mapping, Optional, Union

import pytest

import modgate.utils.logger as logger_module
from modgate.core.manifest import parse_constraint, parse_version
from modgate.models import ModDescriptor, VersionConstraint

References = Union[None, Iterable[str], Mapping[str, Union[str, VersionConstraint, None]]]


def _references(value: References) -> Dict[str, Optional[VersionConstraint]]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {
            identifier: parse_constraint(identifier, constraint)
            if isinstance(constraint, str)
            else constraint
            for identifier, constraint in value.items()
        }
    return {identifier: None for identifier in value}


def build_mod(
    identifier: str,
    version: str = "1.0.0",
    requires: References = None,
    conflicts: References = None,
) -> ModDescriptor:
    """Build a descriptor; constraints may be given as manifest strings."""
    return ModDescriptor(
        identifier=identifier,
        version=parse_version(version),
        requires=_references(requires),
        conflicts_with=_references(conflicts),
        name=f"{identifier} Mod",
    )


@pytest.fixture
def make_mod() -> Callable[..., ModDescriptor]:
    """Factory fixture for :class:`ModDescriptor` objects.

    ``requires`` and ``conflicts`` accept a list of identifiers (any
    version) or a mapping of identifier to a manifest constraint string
    such as ``">=1.0"``, a :class:`VersionConstraint`, or ``None``.
    """
    return build_mod


@pytest.fixture(autouse=True)
def reset_modgate_logging() -> Generator[None, None, None]:
    """Undo any logging setup performed by the CLI during a test."""
    yield
    root_logger = logging.getLogger(logger_module.ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False
