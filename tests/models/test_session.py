"""Tests for the booking session schema."""

import pytest

from lmrc_config.exceptions import (
    FormatError,
    InvalidTimeWindow,
    RequiredFieldError,
    ValidationError,
)
from lmrc_config.models.session import (
    Session,
    format_days,
    format_session,
    session_violations,
    validate_session,
)


class TestSessionViolations:
    """Test cases for session_violations."""

    def test_valid_session(self, session_data):
        assert session_violations(session_data) == []

    def test_start_must_be_before_end(self, session_data):
        session_data["startTime"] = "08:00"
        session_data["endTime"] = "07:00"

        violations = session_violations(session_data)

        assert len(violations) == 1
        assert isinstance(violations[0], InvalidTimeWindow)
        assert violations[0].path == "endTime"
        assert "08:00" in violations[0].message

    def test_equal_times_rejected(self, session_data):
        session_data["endTime"] = session_data["startTime"]
        assert [type(v) for v in session_violations(session_data)] == [InvalidTimeWindow]

    def test_bad_time_format(self, session_data):
        session_data["startTime"] = "6:30"

        violations = session_violations(session_data)

        assert violations == [FormatError("startTime", "'6:30' is not a valid HH:MM time")]

    def test_empty_days(self, session_data):
        session_data["daysOfWeek"] = []

        violations = session_violations(session_data)

        assert len(violations) == 1
        assert isinstance(violations[0], RequiredFieldError)
        assert violations[0].path == "daysOfWeek"

    def test_day_codes_reported_by_index(self, session_data):
        session_data["daysOfWeek"] = [1, 7, True]

        violations = session_violations(session_data)

        assert [v.path for v in violations] == ["daysOfWeek[1]", "daysOfWeek[2]"]
        assert all(isinstance(v, FormatError) for v in violations)

    def test_days_must_be_a_list(self, session_data):
        session_data["daysOfWeek"] = "Mon-Fri"
        assert [v.path for v in session_violations(session_data)] == ["daysOfWeek"]

    def test_color_and_priority_optional(self):
        saturday = {
            "id": "SAT",
            "name": "Saturday",
            "startTime": "07:00",
            "endTime": "09:00",
            "daysOfWeek": [6]
        }

        assert session_violations(saturday) == []

        session = validate_session(saturday)
        assert session.color is None
        assert session.priority is None
        assert session.to_dict() == saturday

    def test_color_checked_when_given(self, session_data):
        session_data["color"] = ""
        assert session_violations(session_data) == [FormatError("color", "'' is not a 6-digit hex colour")]

    def test_null_color_and_priority_accepted(self, session_data):
        session_data["color"] = None
        session_data["priority"] = None
        assert session_violations(session_data) == []

    def test_priority_must_be_integer(self, session_data):
        session_data["priority"] = "1"
        assert [type(v) for v in session_violations(session_data)] == [FormatError]

    def test_blank_name_is_missing(self, session_data):
        session_data["name"] = "  "
        assert session_violations(session_data) == [RequiredFieldError("name")]

    def test_all_violations_collected(self, session_data):
        session_data["startTime"] = "25:00"
        session_data["color"] = "blue"
        session_data["id"] = ""

        violations = session_violations(session_data)

        assert {v.path for v in violations} == {"id", "startTime", "color"}

    def test_path_prefix(self, session_data):
        session_data["color"] = "#ABC"
        violations = session_violations(session_data, "sessions[3]")
        assert violations[0].path == "sessions[3].color"

    def test_not_a_mapping(self):
        violations = session_violations(["AM1"])
        assert len(violations) == 1
        assert isinstance(violations[0], FormatError)
        assert str(violations[0]).startswith("<root>: must be an object")


class TestValidateSession:
    """Test cases for validate_session."""

    def test_returns_typed_session(self, session_data):
        session = validate_session(session_data)

        assert session == Session(
            id="AM1",
            name="Morning Session 1",
            start_time="06:30",
            end_time="07:30",
            days_of_week=(1, 2, 3, 4, 5),
            color="#60a5fa",
            priority=1
        )

    def test_days_sorted_and_deduplicated(self, session_data):
        session_data["daysOfWeek"] = [5, 1, 1, 0]
        assert validate_session(session_data).days_of_week == (0, 1, 5)

    def test_raises_with_every_violation(self, session_data):
        session_data["startTime"] = "09:00"
        session_data["color"] = "red"

        with pytest.raises(ValidationError) as exc_info:
            validate_session(session_data)

        assert exc_info.value.paths == ["endTime", "color"]
        assert exc_info.value.of_type(InvalidTimeWindow)

    def test_round_trip(self, session_data):
        assert validate_session(session_data).to_dict() == session_data


class TestSessionHelpers:
    """Test cases for Session behaviour and formatting."""

    @pytest.fixture
    def morning(self, session_data):
        return validate_session(session_data)

    def test_duration(self, morning):
        assert morning.duration_minutes == 60

    def test_runs_on(self, morning):
        assert morning.runs_on(1)
        assert not morning.runs_on(0)

    def test_overlaps(self, morning):
        later = Session("AM2", "Late", "07:30", "08:30", (1,), "#3b82f6", 2)
        inside = Session("X", "Inside", "07:00", "08:00", (3,), "#3b82f6", 2)
        weekend = Session("W", "Weekend", "06:30", "07:30", (0, 6), "#3b82f6", 2)

        assert not morning.overlaps(later)
        assert morning.overlaps(inside)
        assert not morning.overlaps(weekend)

    def test_format_session(self):
        session = Session("AM", "Morning", "06:30", "08:30", (1, 2, 3, 4, 5), "#3b82f6", 1)
        assert format_session(session) == "Morning 6:30 AM–8:30 AM"

    def test_format_days(self):
        assert format_days((6, 0, 1)) == "Sun, Mon, Sat"
