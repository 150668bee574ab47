"""Models module.

This module provides data models and dataclasses for the application.
"""

from hemo_visits.models.factor import Factor, FactorUpdate
from hemo_visits.models.patient import Patient
from hemo_visits.models.submission import SubmissionState, VisitSubmissionResult
from hemo_visits.models.treatment import TreatmentRecord, TreatmentRequest
from hemo_visits.models.visit import (
    DiagnosisType,
    OtherMedicalTest,
    VisitRecord,
    VisitRequest,
    VisitType,
)

__all__ = [
    "DiagnosisType",
    "Factor",
    "FactorUpdate",
    "OtherMedicalTest",
    "Patient",
    "SubmissionState",
    "TreatmentRecord",
    "TreatmentRequest",
    "VisitRecord",
    "VisitRequest",
    "VisitSubmissionResult",
    "VisitType",
]
