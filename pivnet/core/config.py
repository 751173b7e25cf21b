"""
Configuration Management.

Loads runtime settings from PIVNET_* environment variables and credentials
from the rc file (default ~/.pivnetrc).

Settings (environment):
    PIVNET_HOST        - Default API host for login
    PIVNET_CONFIG      - Path to the rc file
    PIVNET_TIMEOUT     - HTTP timeout in seconds
    PIVNET_LOG_LEVEL   - Log level when --verbose is not given
    PIVNET_LOG_FORMAT  - Log format (console or json)
    PIVNET_LOG_FILE    - Optional JSONL log file

RC file (YAML):
    profiles - list of {name, api_token, host}, validated by RCFileSchema
"""

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pivnet.core.config_schema import RCFileSchema
from pivnet.core.exceptions import ConfigurationError

DEFAULT_HOST = "https://network.pivotal.io"
DEFAULT_PROFILE = "default"
RC_FILENAME = ".pivnetrc"
RC_FILE_MODE = 0o600
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config_path() -> Path:
    """Location of the rc file when neither --config nor PIVNET_CONFIG is set."""
    return Path.home() / RC_FILENAME


class Settings(BaseSettings):
    """Runtime settings. Credentials are never read from here, only from the rc file."""

    host: str = DEFAULT_HOST
    config: Path | None = None
    timeout: float = 30.0
    log_level: str = "WARNING"
    log_format: str = "console"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="PIVNET_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def config_path(self) -> Path:
        """Resolved rc file path."""
        return self.config if self.config is not None else default_config_path()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Raises:
        ConfigurationError: If a PIVNET_* variable has an invalid value
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid PIVNET_* environment settings:\n{e}") from e


def load_rc_file(path: Path) -> RCFileSchema:
    """
    Load and validate the rc file.

    A missing or empty file is treated as having no profiles.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if not path.exists():
        return RCFileSchema()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Invalid config file {path}: expected a mapping")

    try:
        return RCFileSchema(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}:\n{e}") from e


def save_rc_file(path: Path, rc_file: RCFileSchema) -> None:
    """
    Write the rc file, readable by the owner only.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    data = rc_file.model_dump(mode="json")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, RC_FILE_MODE)
        with os.fdopen(fd, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        # An existing file keeps its old mode on open
        os.chmod(path, RC_FILE_MODE)
    except OSError as e:
        raise ConfigurationError(f"Could not write config file {path}: {e}") from e
