"""
Rowing club configuration: club profiles, booking sessions and the runtime
configuration loader.
"""

__version__ = '1.0.0'

from .defaults import complete_profile, create_default_profile
from .exceptions import (
    ConfigError,
    CredentialsInConfig,
    DuplicateSessionId,
    FieldViolation,
    FormatError,
    InvalidTimeWindow,
    LmrcConfigError,
    PolicyError,
    RangeError,
    RequiredFieldError,
    SessionNotFoundError,
    StorageError,
    UniquenessError,
    ValidationError,
)
from .models import (
    ClubProfile,
    Session,
    format_session,
    profile_violations,
    session_violations,
    validate_club_profile,
    validate_session,
)
from .validators import is_valid_hex_color, is_valid_time_string, is_valid_url

__all__ = [
    'ClubProfile',
    'ConfigError',
    'CredentialsInConfig',
    'DuplicateSessionId',
    'FieldViolation',
    'FormatError',
    'InvalidTimeWindow',
    'LmrcConfigError',
    'PolicyError',
    'RangeError',
    'RequiredFieldError',
    'Session',
    'SessionNotFoundError',
    'StorageError',
    'UniquenessError',
    'ValidationError',
    'complete_profile',
    'create_default_profile',
    'format_session',
    'is_valid_hex_color',
    'is_valid_time_string',
    'is_valid_url',
    'profile_violations',
    'session_violations',
    'validate_club_profile',
    'validate_session',
]
