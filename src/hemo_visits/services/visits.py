"""Visit records REST client.

This module translates between the backend's visit records and the
canonical ``VisitRecord``. Reads tolerate PascalCase, snake_case and
camelCase field names; writes always use PascalCase.
"""

import logging
from typing import Any, Dict, List, Mapping

from hemo_visits.models.visit import VisitRecord, VisitRequest
from hemo_visits.transport.http_client import ApiClient
from hemo_visits.utils.naming import resolve_field

logger = logging.getLogger(__name__)

VISITS_PATH = "/patientVisits"

# Canonical attribute -> PascalCase wire name
_SCALAR_FIELDS = {
    "id": "Id",
    "patient_id": "PatientId",
    "visit_date": "VisitDate",
    "center_state": "CenterState",
    "center_name": "CenterName",
    "visit_type": "VisitType",
    "diagnosis_type": "DiagnosisType",
    "complaint": "Complaint",
    "complaint_other": "ComplaintOther",
    "complaint_details": "ComplaintDetails",
    "notes": "Notes",
    "entered_by": "EnteredBy",
    "created_at": "CreatedAt",
}

_DATE_LIST_FIELDS = {
    "factor_level_test_dates": "FactorLevelTestDates",
    "inhibitor_screening_dates": "InhibitorScreeningDates",
    "viral_screening_dates": "ViralScreeningDates",
    "other_test_dates": "OtherTestDates",
    "hbsag_screen_dates": "HbsagScreenDates",
}


def normalize_visit(raw: Mapping[str, Any]) -> VisitRecord:
    """Normalize a backend visit record into a ``VisitRecord``.

    Each field is looked up as PascalCase, then snake_case, then camelCase.
    The date-list fields default to empty lists.

    Args:
        raw: Visit record as decoded from the backend

    Returns:
        Canonical visit record

    Example:
        >>> normalize_visit({"id": 1, "patient_id": 2}).patient_id
        2
    """
    values: Dict[str, Any] = {
        attr: resolve_field(raw, wire) for attr, wire in _SCALAR_FIELDS.items()
    }
    for attr, wire in _DATE_LIST_FIELDS.items():
        values[attr] = list(resolve_field(raw, wire, []))
    return VisitRecord(**values)


def visit_to_wire(visit: VisitRequest) -> Dict[str, Any]:
    """Transform a visit request into the backend's PascalCase shape.

    Optional text fields are always present, defaulting to "". ``VisitType``
    is only sent when set, ``OtherMedicalTests`` only when non-empty.

    Args:
        visit: Visit request

    Returns:
        Wire record
    """
    transformed: Dict[str, Any] = {
        "PatientId": visit.patient_id,
        "VisitDate": visit.visit_date,
        "DiagnosisType": visit.diagnosis_type.value,
        "ContactRelation": visit.contact_relation or "",
        "CenterState": visit.center_state or "",
        "CenterName": visit.center_name or "",
        "Complaint": visit.complaint or "",
        "ComplaintOther": visit.complaint_other or "",
        "ComplaintDetails": visit.complaint_details or "",
        "Notes": visit.notes or "",
        "EnteredBy": visit.entered_by or "",
    }

    if visit.visit_type:
        transformed["VisitType"] = visit.visit_type.value

    if visit.other_medical_tests:
        transformed["OtherMedicalTests"] = [
            {
                "TestName": test.test_name,
                "TestResult": test.test_result,
                "TestDate": test.test_date,
            }
            for test in visit.other_medical_tests
        ]

    return transformed


class PatientVisitsClient:
    """Client for the ``/patientVisits`` resource.

    Each operation is a single request. Transport and HTTP errors propagate
    to the caller unchanged.

    Example:
        >>> visits = PatientVisitsClient(api)
        >>> for visit in visits.fetch_all():
        ...     print(visit.id, visit.visit_date)
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def fetch_all(self) -> List[VisitRecord]:
        """List all visits; a non-list response yields an empty list."""
        data = self.api.get(VISITS_PATH)
        if not isinstance(data, list):
            logger.warning(
                "Expected a list from %s, got %s; treating as empty",
                VISITS_PATH,
                type(data).__name__,
            )
            return []
        return [normalize_visit(item) for item in data]

    def fetch_by_id(self, visit_id: int) -> VisitRecord:
        """Fetch one visit; an empty or non-object body yields a default record."""
        data = self.api.get(f"{VISITS_PATH}/{visit_id}")
        if not isinstance(data, dict):
            logger.warning(
                "Expected an object from %s/%s, got %s; using defaults",
                VISITS_PATH,
                visit_id,
                type(data).__name__,
            )
            data = {}
        return normalize_visit(data)

    def create(self, visit: VisitRequest) -> VisitRecord:
        """Create a visit and return the normalized created record."""
        data = self.api.post(VISITS_PATH, visit_to_wire(visit))
        record = normalize_visit(data if isinstance(data, dict) else {})
        logger.info("Created visit %s for patient %s", record.id, visit.patient_id)
        return record

    def update(self, visit_id: int, visit: VisitRequest) -> None:
        self.api.put(f"{VISITS_PATH}/{visit_id}", visit_to_wire(visit))
        logger.info("Updated visit %s", visit_id)

    def delete(self, visit_id: int) -> None:
        self.api.delete(f"{VISITS_PATH}/{visit_id}")
        logger.info("Deleted visit %s", visit_id)
