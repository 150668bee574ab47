"""Factor inventory REST client."""

import logging
from typing import List

from hemo_visits.models.factor import Factor, FactorUpdate
from hemo_visits.transport.http_client import ApiClient

logger = logging.getLogger(__name__)

FACTORS_PATH = "/factors"


class FactorsClient:
    """Client for the ``/factors`` resource."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def fetch_all(self) -> List[Factor]:
        data = self.api.get(FACTORS_PATH)
        if not isinstance(data, list):
            return []
        return [Factor.from_raw(item) for item in data]

    def update(self, factor_id: int, factor: FactorUpdate) -> None:
        """Replace all attributes of a factor."""
        self.api.put(f"{FACTORS_PATH}/{factor_id}", factor.to_wire())
        logger.info("Updated factor %s (quantity=%d)", factor_id, factor.quantity)
