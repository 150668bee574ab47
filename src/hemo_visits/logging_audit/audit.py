"""Audit trail functionality for hemo-visits.

This module provides structured audit logging for visit saves, treatment
creation, inventory changes and backend transactions.
"""

import json
import time
import uuid
from typing import Any, Dict, Optional

from .logger import get_logger

logger = get_logger(__name__)


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.

    Audit events are logged at INFO level for successful operations and
    ERROR level for failures.

    Args:
        event_type: Type of operation (e.g., "VISIT_SAVED", "TREATMENT_CREATED",
                   "INVENTORY_DECREMENTED", "SECONDARY_EFFECT_FAILED")
        details: Dictionary with event details. Common fields include:
                - status: "success" or "failure"
                - patient_id: Patient the event concerns
                - factor_id: Factor inventory item touched
                - error_message: Error details (if status is failure)
                - correlation_id: Optional correlation ID for related events

    Example:
        >>> log_audit_event("INVENTORY_DECREMENTED", {
        ...     "status": "success",
        ...     "factor_id": 4,
        ...     "quantity_before": 10,
        ...     "quantity_after": 7,
        ... })
    """
    if "timestamp" not in details:
        details["timestamp"] = time.time()

    if "correlation_id" not in details:
        details["correlation_id"] = str(uuid.uuid4())

    message_parts = [f"AUDIT [{event_type}]"]

    field_order = [
        "status",
        "patient_id",
        "visit_id",
        "factor_id",
        "error_message",
        "correlation_id",
    ]

    for field in field_order:
        if field in details:
            message_parts.append(f"{field}={details[field]}")

    for key, value in details.items():
        if key not in field_order and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    if details.get("status") == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)


def log_transaction(
    method: str,
    url: str,
    request_body: Optional[Any],
    response_text: str,
    status_code: int,
) -> None:
    """Log a backend request/response pair.

    The header line is logged at INFO level, the bodies at DEBUG level.

    Args:
        method: HTTP method
        url: Request URL
        request_body: JSON-serializable request payload, or None
        response_text: Raw response body
        status_code: HTTP status code
    """
    correlation_id = str(uuid.uuid4())
    request_text = "" if request_body is None else json.dumps(request_body, default=str)

    logger.info(
        f"TRANSACTION [{method} {url}] | "
        f"status_code={status_code} | "
        f"correlation_id={correlation_id} | "
        f"request_size={len(request_text)} bytes | "
        f"response_size={len(response_text)} bytes"
    )

    logger.debug(
        f"TRANSACTION REQUEST [{method} {url}] | "
        f"correlation_id={correlation_id}\n"
        f"{request_text}"
    )

    logger.debug(
        f"TRANSACTION RESPONSE [{method} {url}] | "
        f"correlation_id={correlation_id}\n"
        f"{response_text}"
    )
