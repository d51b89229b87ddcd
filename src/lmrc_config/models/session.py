"""Booking session model and schema.

A session is a named, recurring wall-clock window (e.g. ``AM1`` 06:30-07:30,
Monday to Friday) during which members may book boats.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lmrc_config.exceptions import (
    FieldViolation,
    FormatError,
    InvalidTimeWindow,
    RequiredFieldError,
    raise_if_violations,
)
from lmrc_config.models.fields import check_string, field_path, require_mapping
from lmrc_config.validators import (
    WEEKDAY_NAMES,
    format_time_12h,
    is_integer,
    is_valid_hex_color,
    is_valid_time_string,
    is_valid_weekday,
    time_to_minutes,
)


UNRANKED = float('inf')

@dataclass(frozen=True)
class Session:
    """Validated booking session."""
    id: str
    name: str
    start_time: str
    end_time: str
    days_of_week: tuple[int, ...]
    color: str | None = None
    priority: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Session':
        """Build a session from its serialized form without validating it."""
        return cls(
            id=data['id'],
            name=data['name'],
            start_time=data['startTime'],
            end_time=data['endTime'],
            days_of_week=tuple(data['daysOfWeek']),
            color=data.get('color'),
            priority=data.get('priority')
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize, leaving out the optional keys that are unset."""
        data: dict[str, Any] = {
            'id': self.id,
            'name': self.name,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'daysOfWeek': list(self.days_of_week),
        }
        if self.color is not None:
            data['color'] = self.color
        if self.priority is not None:
            data['priority'] = self.priority
        return data

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)

    @property
    def rank(self) -> float:
        """Sort key for priority; sessions without one sort last."""
        return self.priority if self.priority is not None else UNRANKED

    def runs_on(self, weekday: int) -> bool:
        return weekday in self.days_of_week

    def overlaps(self, other: 'Session') -> bool:
        """Whether both sessions share a weekday and their windows intersect."""
        if not set(self.days_of_week) & set(other.days_of_week):
            return False
        return self.start_time < other.end_time and other.start_time < self.end_time


def session_violations(data: Any, path: str = "") -> list[FieldViolation]:
    """Collect every rule a candidate session breaks.

    Each rule is checked independently so the caller gets the full list,
    not just the first failure.

    Args:
        data: Candidate session in serialized (camelCase) form
        path: Path prefix for reported violations, e.g. ``sessions[2]``

    Returns:
        List of violations, empty when the session is valid
    """
    violations: list[FieldViolation] = []
    session = require_mapping(data, path, violations)
    if session is None:
        return violations

    check_string(session, 'id', path, violations)
    check_string(session, 'name', path, violations)
    check_string(session, 'startTime', path, violations, is_valid_time_string, "a valid HH:MM time")
    check_string(session, 'endTime', path, violations, is_valid_time_string, "a valid HH:MM time")

    start, end = session.get('startTime'), session.get('endTime')
    if is_valid_time_string(start) and is_valid_time_string(end) and start >= end:
        violations.append(InvalidTimeWindow(field_path(path, 'endTime'), start, end))

    violations.extend(_days_violations(session.get('daysOfWeek'), field_path(path, 'daysOfWeek')))
    # color and priority are optional; checked only when given
    color = session.get('color')
    if color is not None and not is_valid_hex_color(color):
        violations.append(FormatError(field_path(path, 'color'), f"{color!r} is not a 6-digit hex colour"))

    priority = session.get('priority')
    if priority is not None and not is_integer(priority):
        violations.append(FormatError(field_path(path, 'priority'), f"must be an integer, got {priority!r}"))

    return violations

def _days_violations(days: Any, path: str) -> list[FieldViolation]:
    if days is None:
        return [RequiredFieldError(path)]
    if not isinstance(days, (list, tuple, set, frozenset)):
        return [FormatError(path, "must be a list of weekday numbers")]
    if not days:
        return [RequiredFieldError(path, "must contain at least one weekday")]
    return [
        FormatError(field_path(path, index), f"{day!r} is not a weekday code 0-6 (0=Sunday)")
        for index, day in enumerate(days)
        if not is_valid_weekday(day)
    ]

def validate_session(data: Any, path: str = "") -> Session:
    """Validate a candidate session and return it as a ``Session``.

    Raises:
        ValidationError: With every violation found
    """
    raise_if_violations(session_violations(data, path), "session")
    return Session(
        id=data['id'],
        name=data['name'],
        start_time=data['startTime'],
        end_time=data['endTime'],
        days_of_week=tuple(sorted(set(data['daysOfWeek']))),
        color=data.get('color'),
        priority=data.get('priority')
    )

def format_session(session: Session) -> str:
    """Human-readable session label, e.g. ``Morning 6:30 AM–8:30 AM``."""
    return f"{session.name} {format_time_12h(session.start_time)}–{format_time_12h(session.end_time)}"

def format_days(days_of_week: tuple[int, ...]) -> str:
    """Short weekday list, e.g. ``Mon, Tue, Wed``."""
    return ", ".join(WEEKDAY_NAMES[day] for day in sorted(days_of_week))
