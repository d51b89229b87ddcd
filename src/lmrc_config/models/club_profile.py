"""Club profile model and schema.

The club profile is the master configuration for one club deployment:
identity, branding, the booking sessions and the RevSport integration
endpoint. RevSport credentials never live here; they come from the runtime
config (environment or secret store).
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from lmrc_config.exceptions import (
    CredentialsInConfig,
    DuplicateSessionId,
    FieldViolation,
    FormatError,
    RequiredFieldError,
    raise_if_violations,
)
from lmrc_config.models.fields import check_string, field_path, require_mapping
from lmrc_config.models.session import Session, session_violations, validate_session
from lmrc_config.validators import (
    is_non_empty,
    is_valid_timezone,
    is_valid_club_id,
    is_valid_hex_color,
    is_valid_url,
)


SCHEMA_VERSION = "1.0.0"

# Keys that would carry a secret if they ever showed up in a profile
CREDENTIAL_KEYS = frozenset({
    'username', 'password', 'token', 'apikey', 'api_key', 'secret', 'credentials'
})


@dataclass(frozen=True)
class ClubInfo:
    """Club identity."""
    id: str
    name: str
    short_name: str
    timezone: str

@dataclass(frozen=True)
class Branding:
    """Club branding used by the booking UI."""
    logo_url: str
    primary_color: str
    secondary_color: str

@dataclass(frozen=True)
class RevSportSettings:
    """RevSport integration endpoint (no credentials)."""
    base_url: str

@dataclass(frozen=True)
class ClubProfile:
    """Complete club configuration."""
    version: str
    club: ClubInfo
    branding: Branding
    sessions: tuple[Session, ...]
    rev_sport: RevSportSettings

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON/YAML file shape."""
        return {
            'version': self.version,
            'club': {
                'id': self.club.id,
                'name': self.club.name,
                'shortName': self.club.short_name,
                'timezone': self.club.timezone,
            },
            'branding': {
                'logoUrl': self.branding.logo_url,
                'primaryColor': self.branding.primary_color,
                'secondaryColor': self.branding.secondary_color,
            },
            'sessions': [session.to_dict() for session in self.sessions],
            'revSport': {
                'baseUrl': self.rev_sport.base_url,
            },
        }

    def session_by_id(self, session_id: str) -> Session | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    def sessions_for_day(self, weekday: int) -> list[Session]:
        """Sessions running on a weekday (0=Sunday), by start time then priority."""
        return sorted(
            (session for session in self.sessions if session.runs_on(weekday)),
            key=lambda session: (session.start_time, session.rank)
        )

    def with_sessions(self, sessions: tuple[Session, ...] | list[Session]) -> 'ClubProfile':
        """Copy of this profile with a different session list (not validated)."""
        return replace(self, sessions=tuple(sessions))


def profile_violations(data: Any) -> list[FieldViolation]:
    """Collect every rule a candidate club profile breaks.

    Args:
        data: Candidate profile in serialized (camelCase) form

    Returns:
        List of violations with dotted field paths, empty when valid
    """
    violations: list[FieldViolation] = []
    profile = require_mapping(data, "", violations)
    if profile is None:
        return violations

    violations.extend(_credential_violations(profile, ""))
    check_string(profile, 'version', "", violations)

    club = require_mapping(profile.get('club'), 'club', violations)
    if club is not None:
        check_string(club, 'id', 'club', violations, is_valid_club_id,
                     "a lowercase id of letters, digits and hyphens")
        check_string(club, 'name', 'club', violations)
        check_string(club, 'shortName', 'club', violations)
        check_string(club, 'timezone', 'club', violations, is_valid_timezone, "an IANA timezone name")

    branding = require_mapping(profile.get('branding'), 'branding', violations)
    if branding is not None:
        check_string(branding, 'logoUrl', 'branding', violations, is_valid_url, "a valid URL")
        check_string(branding, 'primaryColor', 'branding', violations, is_valid_hex_color, "a 6-digit hex colour")
        check_string(branding, 'secondaryColor', 'branding', violations, is_valid_hex_color, "a 6-digit hex colour")

    violations.extend(_sessions_violations(profile.get('sessions')))

    rev_sport = require_mapping(profile.get('revSport'), 'revSport', violations)
    if rev_sport is not None:
        violations.extend(_credential_violations(rev_sport, 'revSport'))
        check_string(rev_sport, 'baseUrl', 'revSport', violations, is_valid_url, "a valid URL")

    return violations

def _sessions_violations(sessions: Any) -> list[FieldViolation]:
    if sessions is None:
        return [RequiredFieldError('sessions')]
    if not isinstance(sessions, (list, tuple)):
        return [FormatError('sessions', "must be a list of sessions")]
    if not sessions:
        return [RequiredFieldError('sessions', "must contain at least one session")]

    violations: list[FieldViolation] = []
    seen: set[str] = set()
    for index, session in enumerate(sessions):
        path = field_path('sessions', index)
        violations.extend(session_violations(session, path))
        session_id = session.get('id') if isinstance(session, Mapping) else None
        if not isinstance(session_id, str) or not is_non_empty(session_id):
            continue
        if session_id in seen:
            violations.append(DuplicateSessionId(field_path(path, 'id'), session_id))
        seen.add(session_id)
    return violations

def _credential_violations(data: Mapping[str, Any], parent: str) -> list[FieldViolation]:
    return [
        CredentialsInConfig(field_path(parent, key))
        for key in data
        if isinstance(key, str) and key.lower() in CREDENTIAL_KEYS
    ]

def validate_club_profile(data: Any) -> ClubProfile:
    """Validate a candidate profile and return it as a ``ClubProfile``.

    Validation is all-or-nothing: any violation means no profile is returned.

    Raises:
        ValidationError: With every violation found
    """
    raise_if_violations(profile_violations(data), "club profile")
    club, branding = data['club'], data['branding']
    return ClubProfile(
        version=data['version'],
        club=ClubInfo(
            id=club['id'],
            name=club['name'],
            short_name=club['shortName'],
            timezone=club['timezone']
        ),
        branding=Branding(
            logo_url=branding['logoUrl'],
            primary_color=branding['primaryColor'],
            secondary_color=branding['secondaryColor']
        ),
        sessions=tuple(
            validate_session(session, field_path('sessions', index))
            for index, session in enumerate(data['sessions'])
        ),
        rev_sport=RevSportSettings(base_url=data['revSport']['baseUrl'])
    )

def revalidate(profile: ClubProfile) -> ClubProfile:
    """Run a typed profile (e.g. a modified copy) back through the schema."""
    return validate_club_profile(profile.to_dict())
