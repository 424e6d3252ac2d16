"""Core functionality for Waitroom."""

from waitroom.core.config import Config, load_config
from waitroom.core.errors import (
    AlreadyRegisteredError,
    ConfigurationFatalError,
    StoreUnavailableError,
    WaitroomError,
)

__all__ = [
    "Config",
    "load_config",
    "AlreadyRegisteredError",
    "ConfigurationFatalError",
    "StoreUnavailableError",
    "WaitroomError",
]
