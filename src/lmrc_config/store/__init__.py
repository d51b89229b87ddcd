"""Profile and session persistence."""

from .profile_store import ProfileStore
from .session_database import SessionDatabase, SessionMetadata, StoredSession

__all__ = ['ProfileStore', 'SessionDatabase', 'SessionMetadata', 'StoredSession']
