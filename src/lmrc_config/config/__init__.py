"""Runtime configuration package."""

from .env import (
    ChainedSource,
    ConfigSource,
    DictSource,
    DotenvFileSource,
    EnvConfig,
    EnvironmentSource,
    YamlFileSource,
)
from .settings import (
    ConfigurationManager,
    build_club_settings,
    build_config,
    load_club_settings,
    load_config,
)
from .types import BoatGroups, ClubSettings, Config, LegacySessions, SessionWindow

__all__ = [
    'BoatGroups',
    'ChainedSource',
    'ClubSettings',
    'Config',
    'ConfigSource',
    'ConfigurationManager',
    'DictSource',
    'DotenvFileSource',
    'EnvConfig',
    'EnvironmentSource',
    'LegacySessions',
    'SessionWindow',
    'YamlFileSource',
    'build_club_settings',
    'build_config',
    'load_club_settings',
    'load_config',
]
