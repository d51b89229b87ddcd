"""Runtime configuration validation."""

from collections.abc import Mapping
from typing import Any

from lmrc_config.config.types import (
    BoatGroups,
    ClubSettings,
    Config,
    LegacySessions,
    SessionWindow,
)
from lmrc_config.exceptions import (
    FieldViolation,
    FormatError,
    InvalidTimeWindow,
    RangeError,
    raise_if_violations,
)
from lmrc_config.models.fields import check_string, field_path, require_mapping
from lmrc_config.validators import (
    is_valid_timezone,
    is_valid_hex_color,
    is_valid_time_string,
    is_valid_url,
)


SLOT_NAMES = ('morning1', 'morning2')


def legacy_sessions_violations(data: Any, path: str = 'sessions') -> list[FieldViolation]:
    """Validate the fixed two-slot session shape.

    Each slot needs HH:MM times with start before end, and the first slot
    must finish no later than the second one starts.
    """
    violations: list[FieldViolation] = []
    sessions = require_mapping(data, path, violations)
    if sessions is None:
        return violations

    for slot in SLOT_NAMES:
        slot_path = field_path(path, slot)
        window = require_mapping(sessions.get(slot), slot_path, violations)
        if window is None:
            continue
        check_string(window, 'start', slot_path, violations, is_valid_time_string, "a valid HH:MM time")
        check_string(window, 'end', slot_path, violations, is_valid_time_string, "a valid HH:MM time")
        start, end = window.get('start'), window.get('end')
        if is_valid_time_string(start) and is_valid_time_string(end) and start >= end:
            violations.append(InvalidTimeWindow(field_path(slot_path, 'end'), start, end))

    if not violations:
        first_end = sessions['morning1']['end']
        second_start = sessions['morning2']['start']
        if first_end > second_start:
            violations.append(RangeError(
                field_path(path, 'morning2.start'),
                f"morning2 starts at {second_start} before morning1 ends at {first_end}",
                {"morning1_end": first_end, "morning2_start": second_start}
            ))
    return violations

def config_violations(data: Any) -> list[FieldViolation]:
    """Collect every rule a candidate runtime config breaks."""
    violations: list[FieldViolation] = []
    config = require_mapping(data, "", violations)
    if config is None:
        return violations

    check_string(config, 'baseUrl', "", violations, is_valid_url, "a valid URL")
    check_string(config, 'username', "", violations)
    check_string(config, 'password', "", violations)
    if not isinstance(config.get('debug'), bool):
        violations.append(FormatError('debug', "must be a boolean"))
    violations.extend(legacy_sessions_violations(config.get('sessions')))
    return violations

def club_settings_violations(data: Any) -> list[FieldViolation]:
    """Collect every rule a candidate club settings mapping breaks."""
    violations: list[FieldViolation] = []
    settings = require_mapping(data, "", violations)
    if settings is None:
        return violations

    check_string(settings, 'name', "", violations)
    check_string(settings, 'shortName', "", violations)
    check_string(settings, 'timezone', "", violations, is_valid_timezone, "an IANA timezone name")

    branding = require_mapping(settings.get('branding'), 'branding', violations)
    if branding is not None:
        check_string(branding, 'primaryColor', 'branding', violations, is_valid_hex_color, "a 6-digit hex colour")
        check_string(branding, 'secondaryColor', 'branding', violations, is_valid_hex_color, "a 6-digit hex colour")
        if branding.get('logoUrl') is not None:
            check_string(branding, 'logoUrl', 'branding', violations, is_valid_url, "a valid URL")

    violations.extend(legacy_sessions_violations(settings.get('sessions')))
    return violations

def _legacy_sessions(data: Mapping[str, Any]) -> LegacySessions:
    return LegacySessions(*(
        SessionWindow(start=data[slot]['start'], end=data[slot]['end'])
        for slot in SLOT_NAMES
    ))

def validate_config(data: Any) -> Config:
    """Validate a candidate runtime config.

    Raises:
        ValidationError: With every violation found
    """
    raise_if_violations(config_violations(data), "runtime configuration")
    return Config(
        base_url=data['baseUrl'],
        username=data['username'],
        password=data['password'],
        debug=data['debug'],
        sessions=_legacy_sessions(data['sessions'])
    )

def validate_club_settings(data: Any) -> ClubSettings:
    """Validate a candidate club settings mapping.

    Raises:
        ValidationError: With every violation found
    """
    raise_if_violations(club_settings_violations(data), "club settings")
    branding = data['branding']
    return ClubSettings(
        name=data['name'],
        short_name=data['shortName'],
        timezone=data['timezone'],
        primary_color=branding['primaryColor'],
        secondary_color=branding['secondaryColor'],
        logo_url=branding.get('logoUrl'),
        sessions=_legacy_sessions(data['sessions']),
        boat_groups=BoatGroups()
    )
