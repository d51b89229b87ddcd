"""Runtime configuration type definitions."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SessionWindow:
    """Start and end of one fixed legacy session slot."""
    start: str
    end: str

    def to_dict(self) -> dict[str, str]:
        return {'start': self.start, 'end': self.end}

@dataclass(frozen=True)
class LegacySessions:
    """The two fixed morning slots the booking server understands."""
    morning1: SessionWindow
    morning2: SessionWindow

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {'morning1': self.morning1.to_dict(), 'morning2': self.morning2.to_dict()}

@dataclass(frozen=True)
class Config:
    """Validated runtime configuration consumed by the booking server."""
    base_url: str
    username: str
    password: str = field(repr=False)
    debug: bool
    sessions: LegacySessions

    def to_dict(self, mask_credentials: bool = True) -> dict[str, Any]:
        """Serialize, masking the password unless asked not to."""
        return {
            'baseUrl': self.base_url,
            'username': self.username,
            'password': '***MASKED***' if mask_credentials else self.password,
            'debug': self.debug,
            'sessions': self.sessions.to_dict(),
        }

@dataclass(frozen=True)
class BoatGroups:
    """Boat type patterns used to group the fleet for display."""
    singles: tuple[str, ...] = ('1X',)
    doubles: tuple[str, ...] = ('2X', '2-')
    quads: tuple[str, ...] = ('4X', '4+', '4-', '8X', '8+')

@dataclass(frozen=True)
class ClubSettings:
    """Club branding variant of the runtime configuration."""
    name: str
    short_name: str
    timezone: str
    primary_color: str
    secondary_color: str
    sessions: LegacySessions
    logo_url: str | None = None
    boat_groups: BoatGroups = field(default_factory=BoatGroups)
