"""Default club profile generation."""

import logging
import re
from dataclasses import replace

from lmrc_config.models.club_profile import (
    SCHEMA_VERSION,
    Branding,
    ClubInfo,
    ClubProfile,
    RevSportSettings,
    revalidate,
)
from lmrc_config.models.session import Session


logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Australia/Sydney"
PLACEHOLDER_LOGO_URL = "https://via.placeholder.com/150"
DEFAULT_PRIMARY_COLOR = "#1e40af"
DEFAULT_SECONDARY_COLOR = "#0ea5e9"

DEFAULT_SESSION = Session(
    id="AM",
    name="Morning",
    start_time="06:30",
    end_time="08:30",
    days_of_week=(1, 2, 3, 4, 5),  # Mon-Fri
    color="#3b82f6",
    priority=1
)


def normalize_club_id(club_id: str) -> str:
    """Lowercase and replace whitespace runs with single hyphens."""
    return re.sub(r'\s+', '-', club_id.strip().lower())

def derive_short_name(club_name: str) -> str:
    """Initials of each word, e.g. ``Lake Macquarie Rowing Club`` -> ``LMRC``."""
    return "".join(word[0] for word in club_name.split()).upper()

def create_default_profile(club_id: str, club_name: str) -> ClubProfile:
    """Create a draft club profile template.

    The result is deliberately incomplete: ``rev_sport.base_url`` is empty and
    the logo is a placeholder, so it fails full validation until the caller
    fills those in (see ``complete_profile``).

    Args:
        club_id: Club identifier, normalized to lowercase-hyphenated form
        club_name: Display name; the short name is derived from its initials

    Returns:
        Draft ClubProfile
    """
    return ClubProfile(
        version=SCHEMA_VERSION,
        club=ClubInfo(
            id=normalize_club_id(club_id),
            name=club_name,
            short_name=derive_short_name(club_name),
            timezone=DEFAULT_TIMEZONE
        ),
        branding=Branding(
            logo_url=PLACEHOLDER_LOGO_URL,
            primary_color=DEFAULT_PRIMARY_COLOR,
            secondary_color=DEFAULT_SECONDARY_COLOR
        ),
        sessions=(DEFAULT_SESSION,),
        rev_sport=RevSportSettings(base_url="")
    )

def complete_profile(draft: ClubProfile, base_url: str, logo_url: str | None = None) -> ClubProfile:
    """Fill in the deployment-specific fields of a draft and validate it.

    Raises:
        ValidationError: If the completed profile is still invalid
    """
    profile = replace(draft, rev_sport=RevSportSettings(base_url=base_url))
    if logo_url is not None:
        profile = replace(profile, branding=replace(profile.branding, logo_url=logo_url))
    logger.debug(f"Completing draft profile for club {profile.club.id}")
    return revalidate(profile)
