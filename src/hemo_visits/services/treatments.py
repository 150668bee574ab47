"""Treatments REST client."""

import logging

from hemo_visits.models.treatment import TreatmentRecord, TreatmentRequest
from hemo_visits.transport.http_client import ApiClient

logger = logging.getLogger(__name__)

TREATMENTS_PATH = "/treatments"


class TreatmentsClient:
    """Client for the ``/treatments`` resource."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def create(self, treatment: TreatmentRequest) -> TreatmentRecord:
        """Record a treatment.

        Raises:
            requests.HTTPError: If the backend rejects the treatment
        """
        data = self.api.post(TREATMENTS_PATH, treatment.to_wire())
        record = TreatmentRecord.from_raw(data or {})
        logger.info(
            "Created %s treatment %s for patient %s",
            treatment.treatment_type,
            record.id,
            treatment.patient_id,
        )
        return record
