"""Tests for the club profile schema."""

import pytest

from lmrc_config.exceptions import (
    CredentialsInConfig,
    DuplicateSessionId,
    FormatError,
    RequiredFieldError,
    ValidationError,
)
from lmrc_config.models.club_profile import (
    ClubProfile,
    profile_violations,
    revalidate,
    validate_club_profile,
)
from lmrc_config.models.session import Session


def test_valid_profile(profile_data):
    assert profile_violations(profile_data) == []

    profile = validate_club_profile(profile_data)

    assert isinstance(profile, ClubProfile)
    assert profile.club.short_name == "LMRC"
    assert profile.branding.primary_color == "#1e40af"
    assert profile.rev_sport.base_url == "https://www.lakemacquarierowingclub.org.au"
    assert [session.id for session in profile.sessions] == ["AM1", "AM2"]

def test_round_trip(profile_data):
    assert validate_club_profile(profile_data).to_dict() == profile_data

def test_session_without_color_or_priority(profile_data):
    del profile_data["sessions"][1]["color"]
    del profile_data["sessions"][1]["priority"]

    profile = validate_club_profile(profile_data)

    assert profile.session_by_id("AM2").priority is None
    assert [s.id for s in profile.sessions_for_day(1)] == ["AM1", "AM2"]
    assert profile.to_dict() == profile_data

def test_duplicate_session_ids(profile_data):
    profile_data["sessions"][1]["id"] = "AM1"

    with pytest.raises(ValidationError) as exc_info:
        validate_club_profile(profile_data)

    duplicates = exc_info.value.of_type(DuplicateSessionId)
    assert len(duplicates) == 1
    assert duplicates[0].path == "sessions[1].id"
    assert duplicates[0].session_id == "AM1"

def test_credentials_rejected_in_rev_sport(profile_data):
    profile_data["revSport"]["username"] = "captain"
    profile_data["revSport"]["Password"] = "s3cret"

    violations = profile_violations(profile_data)

    assert {v.path for v in violations} == {"revSport.username", "revSport.Password"}
    assert all(isinstance(v, CredentialsInConfig) for v in violations)

def test_credentials_rejected_at_top_level(profile_data):
    profile_data["apiKey"] = "abc123"
    assert profile_violations(profile_data) == [CredentialsInConfig("apiKey")]

def test_club_id_must_be_normalized(profile_data):
    profile_data["club"]["id"] = "LMRC"

    violations = profile_violations(profile_data)

    assert len(violations) == 1
    assert isinstance(violations[0], FormatError)
    assert violations[0].path == "club.id"

@pytest.mark.parametrize("color,valid", [("#ABC", False), ("#AABBCC", True), ("navy", False)])
def test_branding_colors(profile_data, color, valid):
    profile_data["branding"]["primaryColor"] = color
    assert (profile_violations(profile_data) == []) is valid

def test_logo_url_required(profile_data):
    del profile_data["branding"]["logoUrl"]
    assert profile_violations(profile_data) == [RequiredFieldError("branding.logoUrl")]

def test_base_url_must_be_url(profile_data):
    profile_data["revSport"]["baseUrl"] = "lakemacquarierowingclub.org.au"
    assert [v.path for v in profile_violations(profile_data)] == ["revSport.baseUrl"]

def test_empty_sessions(profile_data):
    profile_data["sessions"] = []

    violations = profile_violations(profile_data)

    assert len(violations) == 1
    assert isinstance(violations[0], RequiredFieldError)
    assert violations[0].path == "sessions"

def test_nested_session_paths(profile_data):
    profile_data["sessions"][1]["startTime"] = "7:30"
    profile_data["sessions"][0]["daysOfWeek"] = [1, 9]

    paths = [v.path for v in profile_violations(profile_data)]

    assert paths == ["sessions[0].daysOfWeek[1]", "sessions[1].startTime"]

def test_missing_sections(profile_data):
    del profile_data["club"]
    profile_data["revSport"] = "https://example.org"

    violations = profile_violations(profile_data)

    assert RequiredFieldError("club") in violations
    assert [v.path for v in violations if isinstance(v, FormatError)] == ["revSport"]

def test_not_a_mapping():
    assert [type(v) for v in profile_violations(None)] == [RequiredFieldError]

def test_unknown_timezone_rejected(profile_data):
    profile_data["club"]["timezone"] = "Mars/Olympus"

    violations = profile_violations(profile_data)

    assert [(type(v), v.path) for v in violations] == [(FormatError, "club.timezone")]

def test_error_message_lists_violations(profile_data):
    profile_data["version"] = ""
    profile_data["club"]["timezone"] = "Sydney time"

    with pytest.raises(ValidationError) as exc_info:
        validate_club_profile(profile_data)

    message = str(exc_info.value)
    assert message.startswith("Invalid club profile:")
    assert "  - version: is required" in message
    assert "club.timezone" in message


class TestClubProfileQueries:
    """Test cases for ClubProfile helpers."""

    @pytest.fixture
    def profile(self, profile_data):
        profile_data["sessions"].append({
            "id": "SAT",
            "name": "Saturday Row",
            "startTime": "06:00",
            "endTime": "08:00",
            "daysOfWeek": [6],
            "color": "#22c55e",
            "priority": 3
        })
        return validate_club_profile(profile_data)

    def test_session_by_id(self, profile):
        assert profile.session_by_id("SAT").name == "Saturday Row"
        assert profile.session_by_id("PM") is None

    def test_sessions_for_day(self, profile):
        assert [s.id for s in profile.sessions_for_day(1)] == ["AM1", "AM2"]
        assert [s.id for s in profile.sessions_for_day(6)] == ["SAT"]
        assert profile.sessions_for_day(0) == []

    def test_with_sessions_then_revalidate(self, profile):
        clash = Session("AM1", "Clash", "09:00", "10:00", (1,), "#3b82f6", 4)
        modified = profile.with_sessions(profile.sessions + (clash,))

        assert len(modified.sessions) == 4
        with pytest.raises(ValidationError) as exc_info:
            revalidate(modified)
        assert exc_info.value.paths == ["sessions[3].id"]
