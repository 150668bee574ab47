"""Transport module.

This module provides the HTTP client used by the REST service clients.
"""

from hemo_visits.transport.http_client import ApiClient

__all__ = ["ApiClient"]
