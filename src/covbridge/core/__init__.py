"""Core module exports."""

from covbridge.core.errors import (
    ConfigError,
    CovBridgeError,
    ErrorCode,
    InputFormatError,
    InternalError,
    OffsetOutOfRangeError,
    SourceFileError,
    UsageError,
)
from covbridge.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "CovBridgeError",
    "ErrorCode",
    "InputFormatError",
    "InternalError",
    "OffsetOutOfRangeError",
    "SourceFileError",
    "UsageError",
    # Logging
    "configure_logging",
    "get_logger",
]
