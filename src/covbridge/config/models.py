"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVBRIDGE__SECTION__KEY)
3. Working-directory YAML (.covbridge.yaml)
4. Built-in defaults (this file)

Examples:
    COVBRIDGE__LOGGING__LEVEL=DEBUG
    COVBRIDGE__CONVERSION__IGNORE_MARKER="istanbul ignore next"
    COVBRIDGE__CONVERSION__BASE_DIR=/src/myservice
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_IGNORE_MARKER = "coverage ignore next line"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVBRIDGE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Logs go to stderr; stdout carries the report.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ConversionConfig(BaseModel):
    """gocov -> Istanbul conversion settings.

    Env vars:
        COVBRIDGE__CONVERSION__IGNORE_MARKER: Text that flags the next line as skipped
        COVBRIDGE__CONVERSION__BASE_DIR: Directory that relative source paths resolve against
    """

    ignore_marker: str = Field(
        default=DEFAULT_IGNORE_MARKER,
        description="Case-sensitive text; statements starting on the line after it are skipped.",
    )
    base_dir: str | None = Field(
        default=None,
        description="Anchor for relative File paths. Default: current working directory.",
    )

    @field_validator("ignore_marker")
    @classmethod
    def validate_ignore_marker(cls, v: str) -> str:
        if not v:
            raise ValueError("Ignore marker must not be empty")
        return v


class CovBridgeConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
