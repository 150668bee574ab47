"""Treatment data models."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from hemo_visits.utils.naming import resolve_field

ON_DEMAND_TREATMENT = "On-demand"


@dataclass(frozen=True)
class TreatmentRequest:
    """Request to record a treatment given during a visit.

    Attributes:
        patient_id: Treated patient
        treatment_center: Center the treatment was given at
        treatment_type: Treatment regime, "On-demand" for visit treatments
        indication_of_treatment: Free-text indication
        lot: Factor lot number used
        note_date: ISO timestamp of the treatment
        quantity_lot: Units drawn from the lot
    """

    patient_id: int
    treatment_center: str
    treatment_type: str
    indication_of_treatment: str
    lot: str
    note_date: str
    quantity_lot: int

    def to_wire(self) -> dict[str, Any]:
        return {
            "PatientId": self.patient_id,
            "TreatmentCenter": self.treatment_center,
            "TreatmentType": self.treatment_type,
            "IndicationOfTreatment": self.indication_of_treatment,
            "Lot": self.lot,
            "NoteDate": self.note_date,
            "QuantityLot": self.quantity_lot,
        }


@dataclass(frozen=True)
class TreatmentRecord:
    """Treatment as stored by the backend."""

    id: int
    patient_id: int
    treatment_center: Optional[str] = None
    treatment_type: Optional[str] = None
    indication_of_treatment: Optional[str] = None
    lot: Optional[str] = None
    note_date: Optional[str] = None
    quantity_lot: int = 0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "TreatmentRecord":
        """Build a treatment from a backend record in any naming convention."""
        return cls(
            id=resolve_field(raw, "Id", 0),
            patient_id=resolve_field(raw, "PatientId", 0),
            treatment_center=resolve_field(raw, "TreatmentCenter"),
            treatment_type=resolve_field(raw, "TreatmentType"),
            indication_of_treatment=resolve_field(raw, "IndicationOfTreatment"),
            lot=resolve_field(raw, "Lot"),
            note_date=resolve_field(raw, "NoteDate"),
            quantity_lot=int(resolve_field(raw, "QuantityLot", 0)),
        )
