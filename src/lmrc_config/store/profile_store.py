"""File-backed club profile storage."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from lmrc_config.config.utils import deep_merge, resolve_path
from lmrc_config.error_codes import ErrorCode
from lmrc_config.exceptions import ConfigError, SessionNotFoundError
from lmrc_config.models.club_profile import ClubProfile, validate_club_profile
from lmrc_config.models.session import Session
from lmrc_config.utils.logging_utils import LoggerMixin


YAML_SUFFIXES = {'.yaml', '.yml'}

class ProfileStore(LoggerMixin):
    """Loads and saves a club profile file, validating on every read and write.

    The file format follows the extension: ``.yaml``/``.yml`` for YAML,
    anything else for JSON. Every mutation reloads the profile, applies the
    change and re-validates the whole profile before writing, so an invalid
    profile never reaches disk.
    """

    def __init__(self, path: str | Path):
        LoggerMixin.__init__(self)
        self.path = resolve_path(path)
        self.set_log_context(profile=str(self.path))

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in YAML_SUFFIXES

    def exists(self) -> bool:
        return self.path.is_file()

    def read_raw(self) -> Any:
        """Parse the profile file without validating it.

        Raises:
            ConfigError: If the file is missing or cannot be parsed
        """
        if not self.exists():
            raise ConfigError(
                f"Configuration file not found: {self.path}",
                {"path": str(self.path)},
                code=ErrorCode.CONFIG_MISSING
            )
        try:
            with open(self.path, encoding="utf-8") as f:
                if self.is_yaml:
                    return yaml.safe_load(f)
                return json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to parse {self.path}: {e}", {"path": str(self.path)}) from e

    def load(self) -> ClubProfile:
        """Load and validate the profile.

        Raises:
            ConfigError: If the file is missing or unreadable
            ValidationError: If the profile is invalid
        """
        profile = validate_club_profile(self.read_raw())
        self.debug("Loaded club profile", club=profile.club.id, sessions=len(profile.sessions))
        return profile

    def save(self, profile: ClubProfile | Mapping[str, Any]) -> ClubProfile:
        """Validate and write a profile, creating the parent directory.

        Raises:
            ValidationError: If the profile is invalid (nothing is written)
        """
        data = profile.to_dict() if isinstance(profile, ClubProfile) else profile
        validated = validate_club_profile(data)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._dump(validated.to_dict())
        self.info("Saved club profile", club=validated.club.id)
        return validated

    def write_draft(self, profile: ClubProfile) -> None:
        """Write a profile template without validating it.

        Only for drafts from ``create_default_profile``; ``load`` will reject
        the file until the missing fields are filled in.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._dump(profile.to_dict())
        self.warning("Wrote draft club profile; complete it before deployment", club=profile.club.id)

    def _dump(self, data: dict[str, Any]) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            if self.is_yaml:
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
            else:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")

    def _save_with(self, changes: Mapping[str, Any]) -> ClubProfile:
        data = self.load().to_dict()
        data.update(changes)
        return self.save(data)

    def update_sessions(self, sessions: list[Session] | list[dict[str, Any]]) -> ClubProfile:
        """Replace the whole session list."""
        return self._save_with({'sessions': [_session_dict(session) for session in sessions]})

    def add_session(self, session: Session | dict[str, Any]) -> ClubProfile:
        """Append a session; duplicate ids are rejected by validation."""
        data = self.load().to_dict()
        data['sessions'].append(_session_dict(session))
        return self.save(data)

    def remove_session(self, session_id: str) -> ClubProfile:
        """Remove a session by id. Removing the last session fails validation."""
        data = self.load().to_dict()
        data['sessions'] = [s for s in data['sessions'] if s['id'] != session_id]
        return self.save(data)

    def update_session(self, session_id: str, updates: Mapping[str, Any]) -> ClubProfile:
        """Merge field updates (serialized keys) into one session.

        Raises:
            SessionNotFoundError: If no session has this id
        """
        data = self.load().to_dict()
        for index, session in enumerate(data['sessions']):
            if session['id'] == session_id:
                data['sessions'][index] = {**session, **updates}
                return self.save(data)
        raise SessionNotFoundError(session_id)

    def update_branding(self, branding: Mapping[str, Any]) -> ClubProfile:
        """Merge partial branding values (serialized keys) into the profile."""
        data = self.load().to_dict()
        return self.save(deep_merge(data, {'branding': dict(branding)}))

def _session_dict(session: Session | Mapping[str, Any]) -> dict[str, Any]:
    return session.to_dict() if isinstance(session, Session) else dict(session)
