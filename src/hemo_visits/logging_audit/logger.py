"""Logging configuration and logger factory for hemo-visits.

Records go through the root logger to a console handler and a rotating
file handler, both formatted by ``PIIRedactingFormatter``. Each component
of the ``hemo_visits`` package (form, services, transport, mock server)
gets its own level, so a noisy backend can be debugged without flooding
the form logs.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

from .formatters import PIIRedactingFormatter

if TYPE_CHECKING:
    from ..config.schema import ComponentLoggingConfig

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = Path("logs") / "hemo-visits.log"
LOG_FILE_ENV_VAR = "HEMO_VISITS_LOG_FILE"
MAX_LOG_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

PACKAGE_LOGGER = "hemo_visits"

COMPONENT_LOGGERS = {
    "form": "hemo_visits.form",
    "services": "hemo_visits.services",
    "transport": "hemo_visits.transport",
    "mock_server": "hemo_visits.mock_server",
}

# HTTP stack loggers: urllib3 under requests, werkzeug under the mock server
THIRD_PARTY_LOGGERS = ("urllib3", "werkzeug")

_logging_configured = False

logger = logging.getLogger(__name__)


def _numeric_level(level: str, what: str = "log level") -> int:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(
            f"Invalid {what}: {level}. "
            f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return numeric_level


def _resolve_log_file(log_file: Optional[Path]) -> Path:
    if log_file is not None:
        return log_file
    env_log_file = os.environ.get(LOG_FILE_ENV_VAR)
    return Path(env_log_file) if env_log_file else DEFAULT_LOG_FILE


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    redact_pii: bool = False,
) -> None:
    """Configure console and rotating file logging for hemo-visits.

    The console handler uses ``level``; the file handler always records
    DEBUG. The ``hemo_visits`` package logger is opened to DEBUG and the
    HTTP stack loggers are held at WARNING unless ``level`` is DEBUG.
    Safe to call more than once: handlers are replaced, not stacked.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path; defaults to HEMO_VISITS_LOG_FILE or
            logs/hemo-visits.log
        redact_pii: Whether to redact patient names and national ids

    Raises:
        ValueError: If the log level is invalid
        RuntimeError: If the log directory cannot be created

    Example:
        >>> configure_logging(level="DEBUG", redact_pii=True)
    """
    global _logging_configured

    numeric_level = _numeric_level(level)
    log_file = _resolve_log_file(log_file)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(
            f"Failed to create log directory: {log_file.parent}. "
            f"Ensure write permissions are available. Error: {e}"
        ) from e

    root_logger = logging.getLogger()
    if _logging_configured:
        root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)

    formatter = PIIRedactingFormatter(fmt=DEFAULT_LOG_FORMAT, redact_pii=redact_pii)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    try:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=MAX_LOG_FILE_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        root_logger.warning(
            f"Failed to create file handler for {log_file}: {e}. "
            f"Logging to console only."
        )
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)
    third_party_level = logging.DEBUG if numeric_level == logging.DEBUG else logging.WARNING
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    _logging_configured = True


def configure_component_logging(levels: Dict[str, str]) -> None:
    """Set the level of each ``hemo_visits`` component logger.

    Args:
        levels: Level per component name (form, services, transport,
            mock_server); components left out keep their level

    Raises:
        ValueError: If a component or a level is unknown

    Example:
        >>> configure_component_logging({"transport": "DEBUG", "form": "WARNING"})
    """
    for component, level in levels.items():
        if component not in COMPONENT_LOGGERS:
            raise ValueError(
                f"Unknown logging component: {component}. "
                f"Must be one of: {', '.join(COMPONENT_LOGGERS)}"
            )
        numeric_level = _numeric_level(level, f"log level for {component}")
        logger_name = COMPONENT_LOGGERS[component]
        logging.getLogger(logger_name).setLevel(numeric_level)
        logger.debug("Set %s logger level to %s", logger_name, level.upper())


def configure_component_logging_from_config(config: "ComponentLoggingConfig") -> None:
    """Apply a ``ComponentLoggingConfig`` to the component loggers."""
    configure_component_logging(config.as_levels())


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for the specified module, typically ``__name__``."""
    return logging.getLogger(module_name)
