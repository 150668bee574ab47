"""Patient data model.

Patients are read-only here: the list is supplied by the caller as a snapshot.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from hemo_visits.utils.naming import resolve_field


@dataclass(frozen=True)
class Patient:
    """Registered patient as shown in the visit form's patient search.

    Attributes:
        id: Backend identifier
        full_name: Patient's full name
        national_id_number: National identity number
    """

    id: int
    full_name: str
    national_id_number: str

    @property
    def label(self) -> str:
        """Search label, e.g. ``"Amna Hassan - 1198723"``."""
        return f"{self.full_name} - {self.national_id_number}"

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Patient":
        """Build a patient from a backend record in any naming convention."""
        return cls(
            id=resolve_field(raw, "Id", 0),
            full_name=resolve_field(raw, "FullName", ""),
            national_id_number=resolve_field(raw, "NationalIdNumber", ""),
        )
