"""Configuration package for Waitroom.

Pydantic configuration models and loading utilities, re-exported at the package level.
"""

from waitroom.core.config.loader import (
    check_unexpanded_vars,
    expand_env_vars,
    expand_env_vars_recursive,
    load_config,
)
from waitroom.core.config.models import (
    ApiConfig,
    Config,
    LoggingConfig,
    SchedulerConfig,
    StoreConfig,
    TokenConfig,
)

__all__ = [
    # Models
    "ApiConfig",
    "Config",
    "LoggingConfig",
    "SchedulerConfig",
    "StoreConfig",
    "TokenConfig",
    # Loaders
    "check_unexpanded_vars",
    "expand_env_vars",
    "expand_env_vars_recursive",
    "load_config",
]
