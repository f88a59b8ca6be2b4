"""ROM Bridge - Configuration Package."""

from .io import load_config, save_config
from .models import (
    BridgeConfig,
    ChannelConfig,
    LayoutConfig,
    LoggingConfig,
    UploadsConfig,
    validate_config,
)

__all__ = [
    "BridgeConfig",
    "ChannelConfig",
    "LayoutConfig",
    "LoggingConfig",
    "UploadsConfig",
    "load_config",
    "save_config",
    "validate_config",
]
