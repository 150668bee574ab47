"""Custom exception classes for hemo-visits.

All exceptions inherit from HemoVisitsError to allow catching all custom exceptions.
Transport failures are not wrapped: ``requests`` exceptions reach callers as-is.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests


class HemoVisitsError(Exception):
    """Base exception for all hemo-visits custom exceptions."""

    pass


class ValidationError(HemoVisitsError):
    """Raised when form or request data validation fails.

    Examples:
        - Unknown field name for a form setter
        - Invalid calendar date
        - Unknown visit type or diagnosis type
    """

    pass


class SubmissionNotAllowedError(ValidationError):
    """Raised when a visit is submitted while the submit action is disabled.

    Examples:
        - No patients available
        - No patient selected (patient_id == 0)
        - Center state, center name or entered-by left empty

    Attributes:
        missing_fields: Labels of the empty required inputs, in form order
    """

    def __init__(self, message: str, missing_fields: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields or []


class SubmissionInProgressError(HemoVisitsError):
    """Raised when a submit arrives while another one is in flight or done."""

    pass


class ConfigurationError(HemoVisitsError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Missing required configuration
        - Invalid configuration file format
        - Configuration value out of range
    """

    pass


class ErrorCategory(Enum):
    """Error categorization for reporting failed submission steps.

    Attributes:
        TRANSIENT: Worth retrying later (timeouts, 5xx responses)
        PERMANENT: Retrying will not help (validation errors, 4xx responses)
        CRITICAL: Backend unreachable or misconfigured
    """

    TRANSIENT = "TRANSIENT"
    PERMANENT = "PERMANENT"
    CRITICAL = "CRITICAL"


@dataclass
class ErrorInfo:
    """Structured error information for a failed step.

    Attributes:
        category: Error category (TRANSIENT, PERMANENT, CRITICAL)
        error_type: Exception class name (e.g., "HTTPError")
        message: Error message
        remediation: Actionable guidance for resolving the error
        is_retryable: Whether retrying the step may succeed
        status_code: HTTP status code when the error carries a response

    Example:
        >>> info = create_error_info(requests.Timeout("read timed out"))
        >>> info.is_retryable
        True
    """

    category: ErrorCategory
    error_type: str
    message: str
    remediation: str
    is_retryable: bool
    status_code: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "category": self.category.value,
            "error_type": self.error_type,
            "message": self.message,
            "remediation": self.remediation,
            "is_retryable": self.is_retryable,
            "status_code": self.status_code,
        }


def categorize_error(exception: Exception) -> ErrorCategory:
    """Categorize an exception raised by a backend call.

    Args:
        exception: The exception to categorize

    Returns:
        ErrorCategory indicating handling strategy

    Example:
        >>> categorize_error(requests.ConnectionError("refused"))
        <ErrorCategory.CRITICAL: 'CRITICAL'>
    """
    if isinstance(exception, ConfigurationError):
        return ErrorCategory.CRITICAL

    if isinstance(exception, requests.exceptions.SSLError):
        return ErrorCategory.CRITICAL

    # Endpoint unreachable
    if isinstance(exception, requests.ConnectionError):
        return ErrorCategory.CRITICAL

    if isinstance(exception, requests.Timeout):
        return ErrorCategory.TRANSIENT

    if isinstance(exception, requests.HTTPError):
        status_code = _status_code(exception)
        if status_code is not None and 500 <= status_code < 600:
            return ErrorCategory.TRANSIENT

    return ErrorCategory.PERMANENT


def create_error_info(exception: Exception) -> ErrorInfo:
    """Create structured error information from an exception.

    Args:
        exception: Exception that occurred

    Returns:
        ErrorInfo with categorization and remediation guidance
    """
    category = categorize_error(exception)
    return ErrorInfo(
        category=category,
        error_type=type(exception).__name__,
        message=str(exception),
        remediation=_generate_remediation(exception, category),
        is_retryable=category == ErrorCategory.TRANSIENT,
        status_code=_status_code(exception),
    )


def _status_code(exception: Exception) -> Optional[int]:
    response = getattr(exception, "response", None)
    if response is None:
        return None
    return getattr(response, "status_code", None)


def _generate_remediation(exception: Exception, category: ErrorCategory) -> str:
    """Generate actionable remediation message for an error.

    Args:
        exception: Exception that occurred
        category: Error category

    Returns:
        Actionable remediation message
    """
    if isinstance(exception, requests.exceptions.SSLError):
        return (
            "TLS/SSL validation failed. For a development backend with a self-signed "
            "certificate, set api.verify_tls=false in config.json."
        )

    if isinstance(exception, requests.ConnectionError):
        return (
            "Cannot reach the backend. Check api.base_url in config.json and that "
            "the service is running."
        )

    if isinstance(exception, requests.Timeout):
        return (
            "Request timed out. Retry later or increase api.timeout_read in config.json."
        )

    if isinstance(exception, ConfigurationError):
        return "Configuration error. Check config.json for missing or invalid values."

    if isinstance(exception, ValidationError):
        return "Review the form values and submit again."

    if category == ErrorCategory.TRANSIENT:
        return "The backend reported a server error. Retry the step later."

    return (
        "The backend rejected the request. Review the submitted values; "
        "inventory may need a manual correction."
    )
