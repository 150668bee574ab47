"""In-memory records behind the mock backend.

Records are kept with PascalCase keys, the backend's native convention.
"""

from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional

from hemo_visits.utils.naming import field_variants

VISIT_FIELDS = [
    "PatientId", "VisitDate", "CenterState", "CenterName", "VisitType",
    "DiagnosisType", "ContactRelation", "Complaint", "ComplaintOther",
    "ComplaintDetails", "Notes", "EnteredBy", "OtherMedicalTests",
]
TREATMENT_FIELDS = [
    "PatientId", "TreatmentCenter", "TreatmentType", "IndicationOfTreatment",
    "Lot", "NoteDate", "QuantityLot",
]
FACTOR_FIELDS = [
    "Name", "LotNo", "Quantity", "ExpiryDate", "Mg", "DrugType",
    "SupplierName", "CompanyName",
]
DATE_LIST_FIELDS = [
    "FactorLevelTestDates", "InhibitorScreeningDates", "ViralScreeningDates",
    "OtherTestDates", "HbsagScreenDates",
]

SAMPLE_PATIENTS = [
    {"Id": 1, "FullName": "Amna Hassan", "NationalIdNumber": "1198723"},
    {"Id": 2, "FullName": "Omar Abdelrahman", "NationalIdNumber": "2045519"},
    {"Id": 3, "FullName": "Mohamed Osman", "NationalIdNumber": "3301276"},
]

SAMPLE_FACTORS = [
    {
        "Id": 1, "Name": "Advate", "LotNo": "LOT-8A21", "Quantity": 40,
        "ExpiryDate": "2027-06-30", "Mg": 500, "DrugType": "Factor VIII",
        "SupplierName": "National Medical Supplies Fund", "CompanyName": "Takeda",
    },
    {
        "Id": 2, "Name": "BeneFIX", "LotNo": "LOT-9B07", "Quantity": 12,
        "ExpiryDate": "2026-12-31", "Mg": 1000, "DrugType": "Factor IX",
        "SupplierName": "National Medical Supplies Fund", "CompanyName": "Pfizer",
    },
]


def pascalize(body: Mapping[str, Any], fields: List[str]) -> Dict[str, Any]:
    """Pick ``fields`` from a request body sent in any naming convention."""
    record: Dict[str, Any] = {}
    for pascal in fields:
        for key in field_variants(pascal):
            if key in body:
                record[pascal] = body[key]
                break
    return record


class InMemoryStore:
    """Thread-safe record store for the mock backend."""

    def __init__(self) -> None:
        self._lock = Lock()
        self.patients: Dict[int, Dict[str, Any]] = {}
        self.factors: Dict[int, Dict[str, Any]] = {}
        self.visits: Dict[int, Dict[str, Any]] = {}
        self.treatments: Dict[int, Dict[str, Any]] = {}
        self._next_ids = {"visits": 1, "treatments": 1}

    @classmethod
    def with_sample_data(cls) -> "InMemoryStore":
        store = cls()
        for patient in SAMPLE_PATIENTS:
            store.patients[patient["Id"]] = dict(patient)
        for factor in SAMPLE_FACTORS:
            store.factors[factor["Id"]] = dict(factor)
        return store

    def _next_id(self, resource: str) -> int:
        next_id = self._next_ids[resource]
        self._next_ids[resource] = next_id + 1
        return next_id

    def create_visit(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        with self._lock:
            record = pascalize(body, VISIT_FIELDS)
            record["Id"] = self._next_id("visits")
            record["CreatedAt"] = datetime.now(timezone.utc).isoformat()
            for name in DATE_LIST_FIELDS:
                record.setdefault(name, [])
            self.visits[record["Id"]] = record
            return dict(record)

    def update_visit(self, visit_id: int, body: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            existing = self.visits.get(visit_id)
            if existing is None:
                return None
            existing.update(pascalize(body, VISIT_FIELDS))
            if "VisitType" not in pascalize(body, ["VisitType"]):
                existing.pop("VisitType", None)
            return dict(existing)

    def delete_visit(self, visit_id: int) -> bool:
        with self._lock:
            return self.visits.pop(visit_id, None) is not None

    def create_treatment(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        with self._lock:
            record = pascalize(body, TREATMENT_FIELDS)
            record["Id"] = self._next_id("treatments")
            self.treatments[record["Id"]] = record
            return dict(record)

    def update_factor(self, factor_id: int, body: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            if factor_id not in self.factors:
                return None
            record = pascalize(body, FACTOR_FIELDS)
            record["Id"] = factor_id
            self.factors[factor_id] = record
            return dict(record)
