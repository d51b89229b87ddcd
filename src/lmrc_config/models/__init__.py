"""
Models package for the club configuration library.
Contains the session and club profile schemas.
"""

from .club_profile import (
    Branding,
    ClubInfo,
    ClubProfile,
    RevSportSettings,
    profile_violations,
    validate_club_profile,
)
from .session import Session, format_session, session_violations, validate_session

__all__ = [
    'Branding',
    'ClubInfo',
    'ClubProfile',
    'RevSportSettings',
    'Session',
    'format_session',
    'profile_violations',
    'session_violations',
    'validate_club_profile',
    'validate_session',
]
