"""Runtime configuration loading."""

import logging
from typing import Any

from lmrc_config.config.env import ConfigSource, EnvConfig, EnvironmentSource
from lmrc_config.config.types import ClubSettings, Config
from lmrc_config.config.validation import validate_club_settings, validate_config
from lmrc_config.exceptions import ConfigError, ValidationError


logger = logging.getLogger(__name__)

def build_config(source: ConfigSource | None = None) -> dict[str, Any]:
    """Assemble the candidate runtime config from a source and the defaults."""
    source = source or EnvironmentSource()
    candidate = EnvConfig.build_candidate(source, EnvConfig.ENV_MAPPING)
    candidate['debug'] = EnvConfig.get_debug(source)
    return candidate

def build_club_settings(source: ConfigSource | None = None) -> dict[str, Any]:
    """Assemble the candidate club settings from a source and the defaults."""
    return EnvConfig.build_candidate(source or EnvironmentSource(), EnvConfig.CLUB_ENV_MAPPING)

def _reject(error: ValidationError, subject: str) -> ConfigError:
    logger.error(f"{subject} validation failed with {len(error.violations)} error(s)")
    for violation in error.violations:
        logger.error(
            f"  {violation}",
            extra={'extra_fields': {'path': violation.path, 'type': type(violation).__name__}}
        )
    return ConfigError(
        f"Invalid {subject}. Check the environment variables.",
        {"violations": [violation.to_dict() for violation in error.violations]}
    )

def load_config(source: ConfigSource | None = None) -> Config:
    """Load and validate the runtime configuration.

    A failure here is a deployment defect: every violation is logged and
    ``ConfigError`` is raised so startup can abort.

    Args:
        source: Where to read overrides from (default: process environment)

    Returns:
        Validated, immutable Config

    Raises:
        ConfigError: If the configuration is invalid
    """
    try:
        config = validate_config(build_config(source))
    except ValidationError as e:
        raise _reject(e, "Configuration") from e
    logger.debug(f"Loaded configuration for {config.base_url} (debug={config.debug})")
    return config

def load_club_settings(source: ConfigSource | None = None) -> ClubSettings:
    """Load and validate the club branding settings.

    Raises:
        ConfigError: If the settings are invalid
    """
    try:
        return validate_club_settings(build_club_settings(source))
    except ValidationError as e:
        raise _reject(e, "Club settings") from e

class ConfigurationManager:
    """Holds the validated configuration snapshot for the process.

    Build one at startup and hand it to the components that need it. The
    snapshot is immutable; ``reload`` validates a complete new candidate
    before replacing it and keeps the old one if validation fails.
    """

    def __init__(self, source: ConfigSource | None = None):
        self.source = source or EnvironmentSource()
        self._config: Config | None = None
        self._club_settings: ClubSettings | None = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    @property
    def club_settings(self) -> ClubSettings:
        """Get the current club settings, loading them on first use."""
        if self._club_settings is None:
            self._club_settings = load_club_settings(self.source)
        return self._club_settings

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    def load(self) -> Config:
        """Load configuration once; later calls return the same snapshot."""
        if self._config is None:
            self._config = load_config(self.source)
        return self._config

    def reload(self) -> Config:
        """Validate a fresh candidate and swap it in.

        Raises:
            ConfigError: If the candidate is invalid (current snapshot kept)
        """
        candidate = load_config(self.source)
        self._config = candidate
        self._club_settings = None
        logger.info("Configuration reloaded")
        return candidate
