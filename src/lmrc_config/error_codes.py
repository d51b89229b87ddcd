"""Error codes for the club configuration library."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Field Errors
    FORMAT_INVALID = "format_invalid"
    RANGE_INVALID = "range_invalid"
    DUPLICATE_ID = "duplicate_id"
    REQUIRED_FIELD = "required_field"
    POLICY_VIOLATION = "policy_violation"

    # Aggregate Errors
    VALIDATION_FAILED = "validation_failed"

    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    CONFIG_MISSING = "config_missing"

    # Storage Errors
    STORAGE_ERROR = "storage_error"
    NOT_FOUND = "not_found"
