"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Default configuration dictionary
# This is used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "api": {
        # Default to the local mock backend
        "base_url": "http://localhost:5080/api",
        "verify_tls": True,
        "timeout_connect": 10,
        "timeout_read": 30,
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/hemo-visits.log",
        # Do not redact PII by default (user must opt-in for privacy)
        "redact_pii": False,
        "components": {
            "form": "INFO",
            "services": "INFO",
            "transport": "INFO",
            "mock_server": "INFO",
        },
    },
    "mock_server": {
        "host": "127.0.0.1",
        "port": 5080,
        "url_prefix": "/api",
        "response_naming": "pascal",
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
