"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_NAMING_CONVENTIONS = ["pascal", "snake", "camel"]


class ApiConfig(BaseModel):
    """Configuration for the visit records REST backend.

    Attributes:
        base_url: Base URL that resource paths (/patientVisits, ...) are appended to
        verify_tls: Whether to verify TLS certificates
        timeout_connect: Connection timeout in seconds
        timeout_read: Read timeout in seconds
    """

    base_url: str = Field(..., description="Backend base URL")
    verify_tls: bool = True
    timeout_connect: int = Field(
        default=10,
        ge=1,
        description="Connection timeout in seconds"
    )
    timeout_read: int = Field(
        default=30,
        ge=1,
        description="Read timeout in seconds"
    )

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL is valid HTTP/HTTPS and drop any trailing slash.

        Args:
            v: URL string to validate

        Returns:
            Validated URL string

        Raises:
            ValueError: If URL does not start with http:// or https://
        """
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"Invalid URL: {v}. Must start with http:// or https://"
            )
        return v.rstrip("/")


class ComponentLoggingConfig(BaseModel):
    """Per-component log levels for the hemo_visits loggers.

    Attributes:
        form: Level for the visit form controller
        services: Level for the visit, treatment, factor and patient clients
        transport: Level for the HTTP client (request/response transactions)
        mock_server: Level for the mock backend

    Example:
        >>> ComponentLoggingConfig(transport="DEBUG").as_levels()["transport"]
        'DEBUG'
    """

    form: str = Field(default="INFO", description="Log level for the visit form")
    services: str = Field(default="INFO", description="Log level for the REST clients")
    transport: str = Field(default="INFO", description="Log level for the HTTP client")
    mock_server: str = Field(default="INFO", description="Log level for the mock backend")

    @field_validator("form", "services", "transport", "mock_server")
    @classmethod
    def validate_component_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v_upper

    def as_levels(self) -> dict[str, str]:
        return self.model_dump()


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_pii: Whether to redact patient names and national ids from logs
        components: Per-component log levels
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/hemo-visits.log"),
        description="Log file path"
    )
    redact_pii: bool = Field(
        default=False,
        description="Redact PII from logs"
    )
    components: ComponentLoggingConfig = Field(default_factory=ComponentLoggingConfig)

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v_upper


class MockServerConfig(BaseModel):
    """Configuration for the in-memory mock backend.

    Attributes:
        host: Bind address
        port: Bind port
        url_prefix: Prefix the resource routes are mounted under
        response_naming: Field naming convention used in responses
            (pascal, snake or camel)
    """

    host: str = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=5080, ge=1, le=65535, description="Server port")
    url_prefix: str = Field(default="/api", description="Route prefix")
    response_naming: str = Field(
        default="pascal",
        description="Response field naming: pascal, snake or camel"
    )

    @field_validator("response_naming")
    @classmethod
    def validate_response_naming(cls, v: str) -> str:
        """Validate the response naming convention."""
        v_lower = v.lower()
        if v_lower not in VALID_NAMING_CONVENTIONS:
            raise ValueError(
                f"Invalid response_naming: {v}. "
                f"Must be one of: {', '.join(VALID_NAMING_CONVENTIONS)}"
            )
        return v_lower

    @field_validator("url_prefix")
    @classmethod
    def validate_url_prefix(cls, v: str) -> str:
        """Normalize the prefix to a leading slash and no trailing slash."""
        v = v.strip("/")
        return f"/{v}" if v else ""


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        api: REST backend configuration
        logging: Logging configuration
        mock_server: Mock backend configuration

    Example:
        >>> config = Config(api=ApiConfig(base_url="http://localhost:5080/api"))
        >>> config.api.timeout_read
        30
    """

    api: ApiConfig
    logging: LoggingConfig = LoggingConfig()
    mock_server: MockServerConfig = MockServerConfig()
