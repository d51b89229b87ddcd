"""Pytest configuration and shared fixtures."""

import copy
import logging

import pytest

from lmrc_config.config.env import EnvConfig


VALID_PROFILE = {
    "version": "1.0.0",
    "club": {
        "id": "lmrc",
        "name": "Lake Macquarie Rowing Club",
        "shortName": "LMRC",
        "timezone": "Australia/Sydney"
    },
    "branding": {
        "logoUrl": "https://www.lakemacquarierowingclub.org.au/logo.png",
        "primaryColor": "#1e40af",
        "secondaryColor": "#0ea5e9"
    },
    "sessions": [
        {
            "id": "AM1",
            "name": "Morning Session 1",
            "startTime": "06:30",
            "endTime": "07:30",
            "daysOfWeek": [1, 2, 3, 4, 5],
            "color": "#60a5fa",
            "priority": 1
        },
        {
            "id": "AM2",
            "name": "Morning Session 2",
            "startTime": "07:30",
            "endTime": "08:30",
            "daysOfWeek": [1, 2, 3, 4, 5],
            "color": "#3b82f6",
            "priority": 2
        }
    ],
    "revSport": {
        "baseUrl": "https://www.lakemacquarierowingclub.org.au"
    }
}

CONFIG_VARIABLES = (
    set(EnvConfig.ENV_MAPPING)
    | set(EnvConfig.CLUB_ENV_MAPPING)
    | {EnvConfig.DEBUG_VAR, 'LMRC_LOG_LEVEL', 'LMRC_LOG_FILE'}
)


@pytest.fixture
def profile_data():
    """A valid club profile in serialized form (fresh copy per test)."""
    return copy.deepcopy(VALID_PROFILE)

@pytest.fixture
def session_data(profile_data):
    """A valid session in serialized form."""
    return profile_data["sessions"][0]

@pytest.fixture
def credentials():
    """Minimal variables for a loadable runtime config."""
    return {
        "REVSPORT_USERNAME": "captain",
        "REVSPORT_PASSWORD": "s3cret"
    }

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's environment out of config loading."""
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    yield

@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
