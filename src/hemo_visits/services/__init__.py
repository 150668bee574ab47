"""Services module.

This module provides the REST clients for visits and their collaborators.
"""

from hemo_visits.services.factors import FactorsClient
from hemo_visits.services.patients import PatientsClient
from hemo_visits.services.treatments import TreatmentsClient
from hemo_visits.services.visits import (
    PatientVisitsClient,
    normalize_visit,
    visit_to_wire,
)

__all__ = [
    "FactorsClient",
    "PatientsClient",
    "PatientVisitsClient",
    "TreatmentsClient",
    "normalize_visit",
    "visit_to_wire",
]
