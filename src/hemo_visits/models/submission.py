"""Visit submission outcome models.

A submission is a sequence of independent steps: the visit save, then the
optional treatment creation, then the optional inventory decrement. Each
step's outcome is tracked separately since nothing is rolled back.

Status values use strings: "pending", "success", "failed", "skipped"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from hemo_visits.models.treatment import TreatmentRecord
from hemo_visits.models.visit import VisitRequest
from hemo_visits.utils.exceptions import ErrorInfo


class SubmissionState(Enum):
    """Lifecycle of a form's single submission."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    DONE = "done"


@dataclass
class VisitSubmissionResult:
    """Per-step outcome of one visit submission.

    Attributes:
        request: Visit request handed to the save callback
        visit_status: Visit save status ("pending", "success")
        treatment_status: Treatment creation status
            ("pending", "success", "failed", "skipped")
        treatment_message: Human-readable treatment status or error message
        treatment: Treatment created by the backend
        inventory_status: Factor decrement status
            ("pending", "success", "failed", "skipped")
        inventory_message: Human-readable inventory status or error message
        factor_id: Factor decremented
        quantity_before: Factor quantity read from the snapshot
        quantity_after: Factor quantity sent to the backend
        error_info: Structured error of the failed secondary step, if any

    Example:
        >>> result = controller.submit()
        >>> if result.has_secondary_failure:
        ...     print(result.error_info.remediation)
    """

    request: VisitRequest
    visit_status: str = "pending"
    treatment_status: str = "pending"
    treatment_message: str = ""
    treatment: Optional[TreatmentRecord] = None
    inventory_status: str = "pending"
    inventory_message: str = ""
    factor_id: Optional[int] = None
    quantity_before: Optional[int] = None
    quantity_after: Optional[int] = None
    error_info: Optional[ErrorInfo] = None

    @property
    def visit_saved(self) -> bool:
        return self.visit_status == "success"

    @property
    def has_secondary_failure(self) -> bool:
        """True when the treatment or inventory step failed."""
        return "failed" in (self.treatment_status, self.inventory_status)

    @property
    def is_fully_successful(self) -> bool:
        """True when the visit saved and no secondary step failed."""
        return self.visit_saved and not self.has_secondary_failure

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "visit": {
                "status": self.visit_status,
                "request": self.request.to_payload(),
            },
            "treatment": {
                "status": self.treatment_status,
                "message": self.treatment_message,
                "id": self.treatment.id if self.treatment else None,
            },
            "inventory": {
                "status": self.inventory_status,
                "message": self.inventory_message,
                "factor_id": self.factor_id,
                "quantity_before": self.quantity_before,
                "quantity_after": self.quantity_after,
            },
            "error": self.error_info.to_dict() if self.error_info else None,
        }
