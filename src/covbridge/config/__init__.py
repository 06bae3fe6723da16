"""Config module exports."""

from covbridge.config.loader import CONFIG_FILENAME, load_config
from covbridge.config.models import (
    DEFAULT_IGNORE_MARKER,
    ConversionConfig,
    CovBridgeConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_IGNORE_MARKER",
    "load_config",
    "ConversionConfig",
    "CovBridgeConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
