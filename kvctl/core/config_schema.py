"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has unknown fields or wrong types, a clear ValidationError is raised
instead of a cryptic KeyError deep in a command.

Every field carries a default, since the CLI must also run outside a
checkout where no config/settings/ directory exists.

Each top-level class corresponds to one file in config/settings/:
    ClientSchema   → client.yaml
    LoggingSchema  → logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# client.yaml
# =============================================================================


class ClientSchema(_StrictBase):
    address: str = "127.0.0.1:8500"
    scheme: Literal["http", "https"] = "http"
    timeout: float = Field(default=30.0, gt=0)
    verify_ssl: bool = True
    ca_file: str | None = None


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool = True


class FileHandlerSchema(_StrictBase):
    enabled: bool = False
    path: str = "logs/kvctl.jsonl"
    max_bytes: int = 10485760
    backup_count: int = 5


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema = Field(default_factory=ConsoleHandlerSchema)
    file: FileHandlerSchema = Field(default_factory=FileHandlerSchema)


class LoggingSchema(_StrictBase):
    level: str = "WARNING"
    format: Literal["console", "json"] = "console"
    handlers: HandlersSchema = Field(default_factory=HandlersSchema)
