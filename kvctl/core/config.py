"""
Configuration Management.

Loads secrets and overrides from the environment (and config/.env when
present) and settings from config/settings/*.yaml.

Environment (KVCTL_ prefix):
    KVCTL_HTTP_ADDR, KVCTL_HTTP_TOKEN, KVCTL_HTTP_AUTH,
    KVCTL_HTTP_SSL, KVCTL_HTTP_SSL_VERIFY, KVCTL_CACERT

Settings (YAML):
    client.yaml   - Agent address, scheme, timeout, TLS verification
    logging.yaml  - Logging configuration

Precedence for any value: command-line flag, environment, YAML, default.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from kvctl.core.config_schema import ClientSchema, LoggingSchema


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides and secrets. Empty values mean "not set"."""

    http_addr: str = ""
    http_token: str = ""
    http_auth: str = ""
    http_ssl: bool | None = None
    http_ssl_verify: bool | None = None
    cacert: str = ""

    model_config = SettingsConfigDict(
        env_prefix="KVCTL_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """
    Load YAML and validate against schema. Returns typed model instance.

    A missing project root or file yields the schema defaults.
    """
    try:
        raw = load_yaml_config(filename)
    except (RuntimeError, FileNotFoundError):
        raw = {}
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._client = _load_validated(ClientSchema, "client.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def client(self) -> ClientSchema:
        """Agent client settings."""
        return self._client

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings. Reads config/.env when a project root exists."""
    try:
        env_path = find_project_root() / "config" / ".env"
    except RuntimeError:
        return Settings()
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()
