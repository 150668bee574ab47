"""Patients REST client (read-only)."""

from typing import List

from hemo_visits.models.patient import Patient
from hemo_visits.transport.http_client import ApiClient

PATIENTS_PATH = "/patients"


class PatientsClient:
    """Client for the ``/patients`` resource."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def fetch_all(self) -> List[Patient]:
        data = self.api.get(PATIENTS_PATH)
        if not isinstance(data, list):
            return []
        return [Patient.from_raw(item) for item in data]
