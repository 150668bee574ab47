"""HTTP client for the visit records REST backend.

This module provides a thin JSON client over a pooled ``requests`` session.
Each call is a single request/response: no retry, batching or caching.
HTTP error statuses surface as ``requests.HTTPError`` from
``raise_for_status()``; connection and timeout errors propagate unchanged.
"""

import logging
from threading import Lock
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from hemo_visits.config.schema import ApiConfig
from hemo_visits.logging_audit import log_transaction

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONNECTIONS = 10


class ApiClient:
    """JSON REST client bound to a configured base URL.

    The session is created lazily on first use and reused for subsequent
    calls. Retries are disabled on the mounted adapter.

    Attributes:
        config: Backend configuration (base URL, TLS, timeouts)

    Example:
        >>> with ApiClient(ApiConfig(base_url="http://localhost:5080/api")) as api:
        ...     visits = api.get("/patientVisits")
    """

    def __init__(
        self,
        config: ApiConfig,
        session: Optional[requests.Session] = None,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
    ) -> None:
        """Initialize the client.

        Args:
            config: Backend configuration
            session: Pre-built session to use instead of creating one
            max_connections: Connection pool size for a created session
        """
        self.config = config
        self.max_connections = max_connections
        self._session = session
        self._lock = Lock()

        if config.base_url.startswith("http://"):
            logger.warning(
                "SECURITY WARNING: Using HTTP transport (not HTTPS) for %s. "
                "This is only acceptable for local development.",
                config.base_url,
            )
        if not config.verify_tls:
            logger.warning(
                "TLS certificate verification is DISABLED. "
                "This should only be used for development with self-signed certificates."
            )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def timeout(self) -> tuple[int, int]:
        """(connect, read) timeout pair passed to every request."""
        return (self.config.timeout_connect, self.config.timeout_read)

    def get_session(self) -> requests.Session:
        """Get or create the HTTP session.

        Returns:
            Configured requests.Session
        """
        with self._lock:
            if self._session is None:
                self._session = self._create_session()
            return self._session

    def _create_session(self) -> requests.Session:
        adapter = HTTPAdapter(
            pool_connections=self.max_connections,
            pool_maxsize=self.max_connections,
            max_retries=0,
        )

        session = requests.Session()
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.verify = self.config.verify_tls
        session.headers.update({"Accept": "application/json"})

        logger.debug(
            "Created HTTP session for %s with pool_maxsize=%d",
            self.base_url,
            self.max_connections,
        )
        return session

    def url_for(self, path: str) -> str:
        """Join a resource path onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, payload: Optional[Any] = None) -> Any:
        """Send one request and decode the JSON reply.

        Args:
            method: HTTP method
            path: Resource path relative to the base URL
            payload: JSON body, or None

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            requests.HTTPError: If the backend answers with a 4xx/5xx status
            requests.ConnectionError: If the backend is unreachable
            requests.Timeout: If the request exceeds the configured timeout
        """
        url = self.url_for(path)
        logger.debug("%s %s", method, url)

        response = self.get_session().request(
            method,
            url,
            json=payload,
            timeout=self.timeout,
        )

        log_transaction(method, url, payload, response.text, response.status_code)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, payload: Any) -> Any:
        return self.request("POST", path, payload)

    def put(self, path: str, payload: Any) -> Any:
        return self.request("PUT", path, payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        """Close the session and release pooled connections."""
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
                logger.debug("ApiClient session closed")

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
