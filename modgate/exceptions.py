"""
Custom exception hierarchy for modgate.

All exceptions inherit from :class:`ModGateError` and carry optional
structured metadata via the ``details`` attribute for diagnostics and
logging.

Validation problems found while resolving a mod set (missing requirements,
conflicts, cycles) are *not* exceptions: they are reported as strings on
the result objects. Exceptions are reserved for malformed input at the
loader boundary and for programming errors inside the engine.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class ModGateError(Exception):
    """Base exception for all modgate errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


class ManifestError(ModGateError):
    """Raised when a mod manifest, version or constraint cannot be parsed.

    Args:
        message: Error description.
        mod_id: Identifier of the mod being parsed, if known.
        field: Manifest field that failed to parse.
        file_path: Path to the manifest file.
    """

    __slots__ = ("mod_id", "field", "file_path")

    def __init__(
        self,
        message: str,
        *,
        mod_id: Optional[str] = None,
        field: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "mod", mod_id)
        _add_if(details, "field", field)
        _add_if(details, "file", file_path)

        super().__init__(message, details)

        self.mod_id = mod_id
        self.field = field
        self.file_path = file_path


class FileOperationError(ModGateError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed.
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(ModGateError):
    """Raised when the configuration file is missing, unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Offending option name, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class UnknownOperatorError(ModGateError, ValueError):
    """Raised when a version constraint carries an unrecognized operator.

    This signals a defect in whatever built the constraint; manifest
    parsing never produces such a value.
    """

    __slots__ = ("operator",)

    def __init__(self, operator: Any) -> None:
        super().__init__(f"Unknown version operator: {operator}")
        self.operator = operator


class DuplicateModError(ModGateError):
    """Raised when a descriptor set contains the same identifier twice.

    Identifiers are compared case-insensitively. Uniqueness is the caller's
    responsibility, so this is a contract violation rather than a
    validation problem.
    """

    __slots__ = ("identifier",)

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Duplicate mod identifier: {identifier}",
            {"mod": identifier},
        )
        self.identifier = identifier
