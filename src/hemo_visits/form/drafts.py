"""Transient form state of the visit form."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from hemo_visits.models.visit import DiagnosisType, VisitType


class VisitField(str, Enum):
    """Editable fields of the visit draft."""

    PATIENT_ID = "patient_id"
    VISIT_DATE = "visit_date"
    CENTER_STATE = "center_state"
    CENTER_NAME = "center_name"
    VISIT_TYPE = "visit_type"
    DIAGNOSIS_TYPE = "diagnosis_type"
    COMPLAINT = "complaint"
    COMPLAINT_OTHER = "complaint_other"
    COMPLAINT_DETAILS = "complaint_details"
    NOTES = "notes"
    ENTERED_BY = "entered_by"


class TreatmentField(str, Enum):
    """Editable fields of the treatment draft. The lot is derived."""

    FACTOR_ID = "factor_id"
    QUANTITY_LOT = "quantity_lot"
    INDICATION_OF_TREATMENT = "indication_of_treatment"


@dataclass
class VisitDraft:
    """Visit fields as edited in the form.

    Unset text fields hold ""; ``patient_id`` 0 means no patient selected.
    """

    patient_id: int = 0
    visit_date: Optional[date] = None
    center_state: str = ""
    center_name: str = ""
    visit_type: Optional[VisitType] = None
    diagnosis_type: DiagnosisType = DiagnosisType.FOLLOWUP
    complaint: str = ""
    complaint_other: str = ""
    complaint_details: str = ""
    notes: str = ""
    entered_by: str = ""


@dataclass
class TreatmentDraft:
    """On-demand treatment given during a center visit.

    ``factor_id`` 0 means no treatment; ``lot`` mirrors the selected factor.
    """

    factor_id: int = 0
    lot: str = ""
    quantity_lot: int = 0
    indication_of_treatment: str = ""
