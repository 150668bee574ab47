"""Config module.

This module provides configuration management functionality.
"""

from hemo_visits.config.manager import (
    get_api_config,
    get_logging_config,
    load_config,
)
from hemo_visits.config.schema import (
    ApiConfig,
    Config,
    LoggingConfig,
    MockServerConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_api_config",
    "get_logging_config",
    # Configuration models
    "Config",
    "ApiConfig",
    "LoggingConfig",
    "MockServerConfig",
]
