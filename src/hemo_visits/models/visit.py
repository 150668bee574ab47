"""Patient visit data models.

This module defines the visit enums, the visit submission request and the
canonical visit record returned by the records client.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class VisitType(str, Enum):
    """How the patient was seen."""

    TELEPHONE_CONSULTATION = "telephone_consultation"
    CENTER_VISIT = "center_visit"


class DiagnosisType(str, Enum):
    """Reason category of the visit."""

    NEW_PATIENT = "new_patient"
    FOLLOWUP = "followup"
    ADMISSION = "admission"


@dataclass(frozen=True)
class OtherMedicalTest:
    """Additional test result attached to a visit."""

    test_name: str
    test_result: str
    test_date: str


@dataclass(frozen=True)
class VisitRequest:
    """Visit create/update request.

    Built by the form controller on submit and consumed by the caller's
    ``save`` callback and by ``PatientVisitsClient.create``/``update``.

    Attributes:
        patient_id: Visiting patient
        visit_date: ISO timestamp of the visit
        diagnosis_type: Reason category
        center_state: Region of the treating center ("" when unset)
        center_name: Treating center ("" when unset)
        complaint: Complaint from the fixed list ("" when unset)
        complaint_other: Free-text complaint when complaint is "Other"
        complaint_details: Free-text details
        notes: Notes, including any admission follow-up line
        entered_by: Data-entry operator
        visit_type: Visit type, None when unset
        contact_relation: Relation of the person who made contact
        other_medical_tests: Additional test results
    """

    patient_id: int
    visit_date: str
    diagnosis_type: DiagnosisType = DiagnosisType.FOLLOWUP
    center_state: str = ""
    center_name: str = ""
    complaint: str = ""
    complaint_other: str = ""
    complaint_details: str = ""
    notes: str = ""
    entered_by: str = ""
    visit_type: Optional[VisitType] = None
    contact_relation: str = ""
    other_medical_tests: List[OtherMedicalTest] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Submission payload in the form's camelCase shape.

        ``visitType`` is omitted, not null, when unset.
        """
        payload: Dict[str, Any] = {
            "patientId": self.patient_id,
            "visitDate": self.visit_date,
            "centerState": self.center_state,
            "centerName": self.center_name,
            "diagnosisType": self.diagnosis_type.value,
            "complaint": self.complaint,
            "complaintOther": self.complaint_other,
            "complaintDetails": self.complaint_details,
            "notes": self.notes,
            "enteredBy": self.entered_by,
        }
        if self.visit_type:
            payload["visitType"] = self.visit_type.value
        return payload


@dataclass
class VisitRecord:
    """Canonical visit record, normalized from any backend naming convention.

    Enum-like fields keep the backend's raw string so records with values
    unknown to this client still load.
    """

    id: Optional[int] = None
    patient_id: Optional[int] = None
    visit_date: Optional[str] = None
    center_state: Optional[str] = None
    center_name: Optional[str] = None
    visit_type: Optional[str] = None
    diagnosis_type: Optional[str] = None
    complaint: Optional[str] = None
    complaint_other: Optional[str] = None
    complaint_details: Optional[str] = None
    notes: Optional[str] = None
    entered_by: Optional[str] = None
    factor_level_test_dates: List[str] = field(default_factory=list)
    inhibitor_screening_dates: List[str] = field(default_factory=list)
    viral_screening_dates: List[str] = field(default_factory=list)
    other_test_dates: List[str] = field(default_factory=list)
    hbsag_screen_dates: List[str] = field(default_factory=list)
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
