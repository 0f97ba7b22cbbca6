"""
Platform configuration.

Settings come from three layers, later ones winning: the field defaults,
an optional JSON config file (``--config`` on the command line), and
``COURSEBOARD_*`` environment variables.
"""

import json
from typing import Any, Dict, Mapping, Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


ENV_PREFIX = "COURSEBOARD_"

# Levels uvicorn understands; ``trace`` is uvicorn-only and logs as DEBUG elsewhere.
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


class PlatformConfig(BaseSettings):
    """Settings for the Courseboard platform."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="forbid",
        validate_assignment=True,
    )

    host: str = "0.0.0.0"
    rest_port: int = Field(default=8000, gt=0, lt=65536)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # None disables snapshotting; state then lives only as long as the process.
    snapshot_path: Optional[str] = None

    # Reject unknown course ids and report missing vote requests/enrollments.
    strict_references: bool = False

    # Seconds to wait for the REST server to bind before giving up.
    startup_timeout: float = Field(default=10.0, gt=0)

    @classmethod
    def settings_customise_sources(cls, settings_cls, init_settings, env_settings,
                                   dotenv_settings, file_secret_settings):
        # Environment beats values passed in (the JSON file layer).
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.lower() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value.upper()

    @field_validator("log_file", "snapshot_path")
    @classmethod
    def _empty_path_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlatformConfig":
        """Build a config from a plain mapping. Unknown keys are rejected."""
        try:
            return cls(**dict(data))
        except PydanticValidationError as e:
            raise _configuration_error(e)

    @classmethod
    def from_file(cls, path: str) -> "PlatformConfig":
        """Load a JSON config file."""
        try:
            with open(path, 'r', encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config file {path} is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def load_config(path: Optional[str] = None) -> PlatformConfig:
    """Resolve the effective configuration."""
    return PlatformConfig.from_file(path) if path else PlatformConfig.from_dict({})


def _configuration_error(error: PydanticValidationError) -> ConfigurationError:
    fields = [".".join(str(part) for part in item["loc"]) for item in error.errors()]
    return ConfigurationError(
        f"Invalid configuration: {error}",
        error_code="INVALID_CONFIG",
        details={"fields": fields}
    )
