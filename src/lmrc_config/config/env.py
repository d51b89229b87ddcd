"""Configuration sources and environment variable mapping."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from dotenv import dotenv_values

from lmrc_config.error_codes import ErrorCode
from lmrc_config.exceptions import ConfigError


logger = logging.getLogger(__name__)

@runtime_checkable
class ConfigSource(Protocol):
    """Anything that can supply a raw string value for a configuration key."""

    def read(self, key: str) -> str | None:
        ...

class EnvironmentSource:
    """Reads values from the process environment."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def read(self, key: str) -> str | None:
        return self._environ.get(key)

class DictSource:
    """Reads values from an in-memory mapping."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = dict(values or {})

    def read(self, key: str) -> str | None:
        value = self._values.get(key)
        return None if value is None else str(value)

class DotenvFileSource(DictSource):
    """Reads ``KEY=value`` lines from a ``.env`` file.

    Parsed with python-dotenv; the file is not loaded into ``os.environ``.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.is_file():
            raise ConfigError(
                f"Environment file not found: {self.path}",
                {"path": str(self.path)},
                code=ErrorCode.CONFIG_MISSING
            )
        values = dotenv_values(self.path, encoding="utf-8")
        logger.debug(f"Loaded {len(values)} variable(s) from {self.path}")
        super().__init__(values)

class YamlFileSource(DictSource):
    """Reads values from a flat YAML mapping keyed by variable name."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.exists():
            raise ConfigError(
                f"Configuration file not found: {self.path}",
                {"path": str(self.path)},
                code=ErrorCode.CONFIG_MISSING
            )
        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration file must contain a mapping: {self.path}", {"path": str(self.path)})
        logger.debug(f"Loaded {len(data)} configuration value(s) from {self.path}")
        super().__init__(data)

class ChainedSource:
    """Tries each source in order and returns the first non-empty value.

    An empty value counts as unset, so it never hides a later source.
    """

    def __init__(self, *sources: ConfigSource):
        self.sources = sources

    def read(self, key: str) -> str | None:
        for source in self.sources:
            value = source.read(key)
            if value:
                return value
        return None

class EnvConfig:
    """Environment variable names and documented defaults."""

    DEFAULT_BASE_URL = 'https://www.lakemacquarierowingclub.org.au'

    # Variable name -> (path in the candidate config, default)
    ENV_MAPPING: dict[str, tuple[tuple[str, ...], str]] = {
        'REVSPORT_BASE_URL': (('baseUrl',), DEFAULT_BASE_URL),
        'REVSPORT_USERNAME': (('username',), ''),
        'REVSPORT_PASSWORD': (('password',), ''),
        'SESSION_1_START': (('sessions', 'morning1', 'start'), '06:30'),
        'SESSION_1_END': (('sessions', 'morning1', 'end'), '07:30'),
        'SESSION_2_START': (('sessions', 'morning2', 'start'), '07:30'),
        'SESSION_2_END': (('sessions', 'morning2', 'end'), '08:30'),
    }

    CLUB_ENV_MAPPING: dict[str, tuple[tuple[str, ...], str | None]] = {
        'CLUB_NAME': (('name',), 'Lake Macquarie Rowing Club'),
        'CLUB_SHORT_NAME': (('shortName',), 'LMRC'),
        'CLUB_TIMEZONE': (('timezone',), 'Australia/Sydney'),
        'CLUB_PRIMARY_COLOR': (('branding', 'primaryColor'), '#1e40af'),
        'CLUB_SECONDARY_COLOR': (('branding', 'secondaryColor'), '#0ea5e9'),
        'CLUB_LOGO_URL': (('branding', 'logoUrl'), None),
        'SESSION_1_START': (('sessions', 'morning1', 'start'), '06:30'),
        'SESSION_1_END': (('sessions', 'morning1', 'end'), '07:30'),
        'SESSION_2_START': (('sessions', 'morning2', 'start'), '07:30'),
        'SESSION_2_END': (('sessions', 'morning2', 'end'), '08:30'),
    }

    DEBUG_VAR = 'REVSPORT_DEBUG'

    @staticmethod
    def get_value(source: ConfigSource, key: str, default: str | None = None) -> str | None:
        """Read a key, treating unset and empty values alike as missing."""
        value = source.read(key)
        return value if value else default

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
        """Set value in nested dictionary using path tuple."""
        current = config
        for part in path[:-1]:
            current = current.setdefault(part, {})
        current[path[-1]] = value

    @classmethod
    def build_candidate(
        cls,
        source: ConfigSource,
        mapping: Mapping[str, tuple[tuple[str, ...], str | None]]
    ) -> dict[str, Any]:
        """Assemble a nested candidate mapping from a source and its defaults."""
        candidate: dict[str, Any] = {}
        for env_var, (path, default) in mapping.items():
            cls._set_nested_value(candidate, path, cls.get_value(source, env_var, default))
        return candidate

    @classmethod
    def get_debug(cls, source: ConfigSource) -> bool:
        """Debug is on only for the exact lowercase string ``true``."""
        return source.read(cls.DEBUG_VAR) == 'true'

    @classmethod
    def get_logging_config(cls, source: ConfigSource) -> dict[str, str | None]:
        """Get logging configuration from a source."""
        return {
            'level': cls.get_value(source, 'LMRC_LOG_LEVEL', 'WARNING'),
            'file': cls.get_value(source, 'LMRC_LOG_FILE'),
        }
