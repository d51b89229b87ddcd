"""Reconcile the two session representations.

The club profile's session list is the canonical form. The booking server
still reads two fixed slots (``morning1``/``morning2``); those are derived
here as a view over the list, and a loaded runtime ``Config`` can be checked
against a profile so the two never drift apart silently.
"""

from collections.abc import Iterable

from lmrc_config.config.types import Config, LegacySessions, SessionWindow
from lmrc_config.exceptions import FieldViolation, RangeError, RequiredFieldError
from lmrc_config.models.club_profile import ClubProfile
from lmrc_config.models.session import Session


SLOT_IDS = {'morning1': 'AM1', 'morning2': 'AM2'}
SLOT_NAMES = {'morning1': 'Morning Session 1', 'morning2': 'Morning Session 2'}
WEEKDAYS_MON_FRI = (1, 2, 3, 4, 5)
SLOT_COLORS = {'morning1': '#60a5fa', 'morning2': '#3b82f6'}


def ordered_sessions(sessions: Iterable[Session]) -> list[Session]:
    """Sessions ordered by priority (unset last), then start time."""
    return sorted(sessions, key=lambda session: (session.rank, session.start_time))

def legacy_view(sessions: Iterable[Session]) -> LegacySessions:
    """Derive the two fixed slots from the first two sessions by priority.

    Raises:
        ValueError: If fewer than two sessions are given
    """
    first_two = ordered_sessions(sessions)[:2]
    if len(first_two) < 2:
        raise ValueError("At least two sessions are needed to build the morning1/morning2 view")
    morning1, morning2 = sorted(first_two, key=lambda session: session.start_time)
    return LegacySessions(
        morning1=SessionWindow(start=morning1.start_time, end=morning1.end_time),
        morning2=SessionWindow(start=morning2.start_time, end=morning2.end_time)
    )

def sessions_from_legacy(
    legacy: LegacySessions,
    days_of_week: tuple[int, ...] = WEEKDAYS_MON_FRI
) -> tuple[Session, ...]:
    """Expand the two fixed slots into full ``Session`` values."""
    return tuple(
        Session(
            id=SLOT_IDS[slot],
            name=SLOT_NAMES[slot],
            start_time=window.start,
            end_time=window.end,
            days_of_week=days_of_week,
            color=SLOT_COLORS[slot],
            priority=priority
        )
        for priority, (slot, window) in enumerate(
            (('morning1', legacy.morning1), ('morning2', legacy.morning2)),
            start=1
        )
    )

def check_consistency(profile: ClubProfile, config: Config) -> list[FieldViolation]:
    """Report where a runtime config's slots disagree with a profile's sessions."""
    if len(profile.sessions) < 2:
        return [RequiredFieldError('sessions', "profile needs two sessions to match morning1/morning2")]

    expected = legacy_view(profile.sessions)
    violations: list[FieldViolation] = []
    for slot in ('morning1', 'morning2'):
        want: SessionWindow = getattr(expected, slot)
        have: SessionWindow = getattr(config.sessions, slot)
        if want != have:
            violations.append(RangeError(
                f"sessions.{slot}",
                f"runtime slot {have.start}-{have.end} does not match profile {want.start}-{want.end}",
                {"config": have.to_dict(), "profile": want.to_dict()}
            ))
    return violations
