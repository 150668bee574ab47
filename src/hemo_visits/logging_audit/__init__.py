"""Logging Audit module.

This module provides logging configuration and audit trail functionality.
"""

from .audit import log_audit_event, log_transaction
from .formatters import PIIRedactingFormatter
from .logger import (
    configure_component_logging,
    configure_component_logging_from_config,
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_component_logging",
    "configure_component_logging_from_config",
    "configure_logging",
    "get_logger",
    "log_audit_event",
    "log_transaction",
    "PIIRedactingFormatter",
]
