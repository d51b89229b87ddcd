"""Tests for runtime configuration loading from the environment."""

import logging

import pytest

from lmrc_config.config.env import DictSource, EnvConfig
from lmrc_config.config.settings import (
    build_club_settings,
    build_config,
    load_club_settings,
    load_config,
)
from lmrc_config.config.types import BoatGroups, LegacySessions, SessionWindow
from lmrc_config.config.validation import config_violations, legacy_sessions_violations
from lmrc_config.error_codes import ErrorCode
from lmrc_config.exceptions import ConfigError, InvalidTimeWindow, RangeError


class TestBuildConfig:
    """Test cases for assembling the candidate config."""

    def test_defaults(self):
        candidate = build_config(DictSource({}))

        assert candidate == {
            'baseUrl': EnvConfig.DEFAULT_BASE_URL,
            'username': '',
            'password': '',
            'sessions': {
                'morning1': {'start': '06:30', 'end': '07:30'},
                'morning2': {'start': '07:30', 'end': '08:30'},
            },
            'debug': False,
        }

    def test_empty_values_use_defaults(self):
        candidate = build_config(DictSource({'REVSPORT_BASE_URL': '', 'SESSION_1_START': ''}))

        assert candidate['baseUrl'] == EnvConfig.DEFAULT_BASE_URL
        assert candidate['sessions']['morning1']['start'] == '06:30'

    @pytest.mark.parametrize("value,expected", [
        ('true', True),
        ('TRUE', False),
        ('1', False),
        ('yes', False),
        ('', False),
    ])
    def test_debug_only_for_exact_true(self, value, expected):
        assert build_config(DictSource({'REVSPORT_DEBUG': value}))['debug'] is expected

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv('REVSPORT_USERNAME', 'captain')
        monkeypatch.setenv('SESSION_2_END', '09:00')

        candidate = build_config()

        assert candidate['username'] == 'captain'
        assert candidate['sessions']['morning2']['end'] == '09:00'


class TestLoadConfig:
    """Test cases for load_config."""

    def test_loads_defaults_with_credentials(self, credentials):
        config = load_config(DictSource(credentials))

        assert config.base_url == 'https://www.lakemacquarierowingclub.org.au'
        assert config.username == 'captain'
        assert config.password == 's3cret'
        assert config.debug is False
        assert config.sessions == LegacySessions(
            morning1=SessionWindow('06:30', '07:30'),
            morning2=SessionWindow('07:30', '08:30')
        )

    def test_overrides(self, credentials):
        config = load_config(DictSource({
            **credentials,
            'REVSPORT_BASE_URL': 'https://rowing.example.org',
            'REVSPORT_DEBUG': 'true',
            'SESSION_1_START': '05:45',
            'SESSION_1_END': '07:00',
            'SESSION_2_START': '07:15',
            'SESSION_2_END': '08:15',
        }))

        assert config.base_url == 'https://rowing.example.org'
        assert config.debug is True
        assert config.sessions.morning1 == SessionWindow('05:45', '07:00')
        assert config.sessions.morning2 == SessionWindow('07:15', '08:15')

    def test_missing_credentials(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config(DictSource({}))

        error = exc_info.value
        assert error.code == ErrorCode.CONFIG_INVALID
        assert [v['path'] for v in error.details['violations']] == ['username', 'password']

    def test_bad_time_format(self, credentials):
        with pytest.raises(ConfigError) as exc_info:
            load_config(DictSource({**credentials, 'SESSION_1_START': '6:30'}))

        violations = exc_info.value.details['violations']
        assert violations == [{
            'path': 'sessions.morning1.start',
            'type': 'FormatError',
            'code': 'format_invalid',
            'message': "'6:30' is not a valid HH:MM time",
        }]

    def test_start_after_end(self, credentials):
        with pytest.raises(ConfigError) as exc_info:
            load_config(DictSource({**credentials, 'SESSION_1_START': '08:00'}))

        violations = exc_info.value.details['violations']
        assert [(v['path'], v['type']) for v in violations] == [('sessions.morning1.end', 'InvalidTimeWindow')]

    def test_slots_must_not_overlap(self, credentials):
        with pytest.raises(ConfigError) as exc_info:
            load_config(DictSource({**credentials, 'SESSION_1_END': '08:00'}))

        violations = exc_info.value.details['violations']
        assert [(v['path'], v['type']) for v in violations] == [('sessions.morning2.start', 'RangeError')]

    def test_bad_base_url(self, credentials):
        with pytest.raises(ConfigError) as exc_info:
            load_config(DictSource({**credentials, 'REVSPORT_BASE_URL': 'not-a-url'}))

        assert exc_info.value.details['violations'][0]['path'] == 'baseUrl'

    def test_every_violation_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger='lmrc_config.config.settings'):
            with pytest.raises(ConfigError):
                load_config(DictSource({'SESSION_2_START': '7:30'}))

        messages = [record.getMessage() for record in caplog.records]
        assert messages[0] == "Configuration validation failed with 3 error(s)"
        assert "  username: is required" in messages
        assert "  password: is required" in messages
        assert any("sessions.morning2.start" in message for message in messages)

    def test_password_not_in_repr(self, credentials):
        config = load_config(DictSource(credentials))

        assert 's3cret' not in repr(config)
        assert config.to_dict()['password'] == '***MASKED***'
        assert config.to_dict(mask_credentials=False)['password'] == 's3cret'


class TestLegacySessionRules:
    """Test cases for the fixed two-slot rules."""

    def test_touching_slots_allowed(self):
        assert legacy_sessions_violations({
            'morning1': {'start': '06:30', 'end': '07:30'},
            'morning2': {'start': '07:30', 'end': '08:30'},
        }) == []

    def test_each_slot_checked(self):
        violations = legacy_sessions_violations({
            'morning1': {'start': '07:30', 'end': '06:30'},
            'morning2': {'start': '09:00', 'end': '09:00'},
        })

        assert [v.path for v in violations] == ['sessions.morning1.end', 'sessions.morning2.end']
        assert all(isinstance(v, InvalidTimeWindow) for v in violations)

    def test_overlap_is_range_error(self):
        violations = legacy_sessions_violations({
            'morning1': {'start': '06:30', 'end': '07:45'},
            'morning2': {'start': '07:30', 'end': '08:30'},
        })

        assert len(violations) == 1
        assert isinstance(violations[0], RangeError)

    def test_missing_slot(self):
        violations = legacy_sessions_violations({'morning1': {'start': '06:30', 'end': '07:30'}})
        assert [v.path for v in violations] == ['sessions.morning2']

    def test_debug_must_be_bool(self):
        candidate = build_config(DictSource({'REVSPORT_USERNAME': 'u', 'REVSPORT_PASSWORD': 'p'}))
        candidate['debug'] = 'true'
        assert [v.path for v in config_violations(candidate)] == ['debug']


class TestClubSettings:
    """Test cases for the club branding settings."""

    def test_defaults(self):
        settings = load_club_settings(DictSource({}))

        assert settings.name == 'Lake Macquarie Rowing Club'
        assert settings.short_name == 'LMRC'
        assert settings.timezone == 'Australia/Sydney'
        assert settings.primary_color == '#1e40af'
        assert settings.secondary_color == '#0ea5e9'
        assert settings.logo_url is None
        assert settings.boat_groups == BoatGroups()
        assert settings.sessions.morning2 == SessionWindow('07:30', '08:30')

    def test_boat_groups(self):
        groups = BoatGroups()
        assert groups.singles == ('1X',)
        assert '2-' in groups.doubles
        assert '8+' in groups.quads

    def test_overrides(self):
        settings = load_club_settings(DictSource({
            'CLUB_NAME': 'Sydney Rowing Club',
            'CLUB_SHORT_NAME': 'SRC',
            'CLUB_LOGO_URL': 'https://src.example.org/logo.svg',
        }))

        assert settings.name == 'Sydney Rowing Club'
        assert settings.short_name == 'SRC'
        assert settings.logo_url == 'https://src.example.org/logo.svg'

    def test_candidate_shape(self):
        candidate = build_club_settings(DictSource({'CLUB_PRIMARY_COLOR': '#000000'}))
        assert candidate['branding'] == {
            'primaryColor': '#000000',
            'secondaryColor': '#0ea5e9',
            'logoUrl': None,
        }

    def test_invalid(self):
        with pytest.raises(ConfigError) as exc_info:
            load_club_settings(DictSource({'CLUB_PRIMARY_COLOR': 'blue', 'CLUB_LOGO_URL': 'logo.png'}))

        paths = [v['path'] for v in exc_info.value.details['violations']]
        assert paths == ['branding.primaryColor', 'branding.logoUrl']
