"""Centralized error definitions for the club configuration library."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from lmrc_config.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class LmrcConfigError(Exception):
    """Base exception for all club configuration errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class FieldViolation(LmrcConfigError):
    """A single rule broken by a single field.

    Violations are collected by the schema validators rather than raised one
    at a time, but each one is still an exception so ad-hoc callers may raise
    it directly.
    """
    def __init__(self, path: str, message: str, code: ErrorCode, details: dict[str, Any] | None = None):
        super().__init__(message, code, details)
        self.path = path

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldViolation):
            return NotImplemented
        return (type(self), self.path, self.message) == (type(other), other.path, other.message)

    def __hash__(self) -> int:
        return hash((type(self), self.path, self.message))

    def to_dict(self) -> dict[str, Any]:
        """Serialize violation for JSON output."""
        return {
            'path': self.path,
            'type': type(self).__name__,
            'code': self.code.value,
            'message': self.message,
        }

class FormatError(FieldViolation):
    """Time, colour, URL or identifier pattern mismatch."""
    def __init__(self, path: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(path, message, ErrorCode.FORMAT_INVALID, details)

class RangeError(FieldViolation):
    """Ordered values out of order."""
    def __init__(self, path: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(path, message, ErrorCode.RANGE_INVALID, details)

class InvalidTimeWindow(RangeError):
    """Session start time not strictly before its end time."""
    def __init__(self, path: str, start: str, end: str):
        super().__init__(
            path,
            f"start time {start} must be before end time {end}",
            {"start": start, "end": end}
        )

class UniquenessError(FieldViolation):
    """Value that must be unique appears more than once."""
    def __init__(self, path: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(path, message, ErrorCode.DUPLICATE_ID, details)

class DuplicateSessionId(UniquenessError):
    """Two sessions in one profile share an id."""
    def __init__(self, path: str, session_id: str):
        super().__init__(path, f"duplicate session id '{session_id}'", {"session_id": session_id})
        self.session_id = session_id

class RequiredFieldError(FieldViolation):
    """Required field missing or empty."""
    def __init__(self, path: str, message: str = "is required", details: dict[str, Any] | None = None):
        super().__init__(path, message, ErrorCode.REQUIRED_FIELD, details)

class PolicyError(FieldViolation):
    """Value present where policy forbids it."""
    def __init__(self, path: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(path, message, ErrorCode.POLICY_VIOLATION, details)

class CredentialsInConfig(PolicyError):
    """Credential field found inside a club profile."""
    def __init__(self, path: str):
        super().__init__(path, "credentials must not be stored in the club profile")

class ValidationError(LmrcConfigError):
    """Validation failed with one or more field violations."""
    def __init__(self, violations: Iterable[FieldViolation], subject: str = "configuration"):
        self.violations: list[FieldViolation] = list(violations)
        self.subject = subject
        super().__init__(
            f"Invalid {subject}: {len(self.violations)} violation(s)",
            ErrorCode.VALIDATION_FAILED,
            {"paths": self.paths}
        )

    @property
    def paths(self) -> list[str]:
        """Field paths of all violations, in the order found."""
        return [violation.path for violation in self.violations]

    def of_type(self, violation_type: type[FieldViolation]) -> list[FieldViolation]:
        """Violations that are instances of the given type."""
        return [v for v in self.violations if isinstance(v, violation_type)]

    def __str__(self) -> str:
        lines = [f"Invalid {self.subject}:"]
        lines.extend(f"  - {violation}" for violation in self.violations)
        return "\n".join(lines)

class ConfigError(LmrcConfigError):
    """Configuration error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None, code: ErrorCode = ErrorCode.CONFIG_INVALID):
        super().__init__(message, code, details)

class StorageError(LmrcConfigError):
    """Session storage error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.STORAGE_ERROR, details)

class SessionNotFoundError(LmrcConfigError):
    """Session id not present in a profile."""
    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}", ErrorCode.NOT_FOUND, {"session_id": session_id})
        self.session_id = session_id

def raise_if_violations(violations: list[FieldViolation], subject: str = "configuration") -> None:
    """Raise ValidationError when any violation was collected."""
    if violations:
        logger.debug(f"Rejected {subject} with {len(violations)} violation(s)")
        raise ValidationError(violations, subject)
