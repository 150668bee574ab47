"""Integration test fixtures and configuration.

This module provides fixtures that run the REST clients against the Flask
mock backend in-process: a ``requests``-compatible session forwards every
request to the Flask test client, so no port is bound.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import pytest
import requests
from flask.testing import FlaskClient

from hemo_visits.config.schema import ApiConfig, MockServerConfig
from hemo_visits.mock_server import InMemoryStore, create_app
from hemo_visits.transport.http_client import ApiClient

logger = logging.getLogger(__name__)

BASE_URL = "http://mock.test/api"


class FlaskSession:
    """Minimal stand-in for ``requests.Session`` backed by a Flask test client."""

    def __init__(self, client: FlaskClient) -> None:
        self.client = client
        self.requests: list[tuple[str, str, Optional[Any]]] = []
        self.closed = False

    def request(self, method, url, json=None, timeout=None) -> requests.Response:
        path = urlsplit(url).path
        self.requests.append((method, path, json))
        flask_response = self.client.open(path, method=method, json=json)

        response = requests.Response()
        response.status_code = flask_response.status_code
        response._content = flask_response.get_data()
        response.encoding = "utf-8"
        response.url = url
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore.with_sample_data()


@pytest.fixture(params=["pascal", "snake", "camel"])
def response_naming(request) -> str:
    """Run each integration test against every response naming convention."""
    return request.param


@pytest.fixture
def session(store, response_naming) -> FlaskSession:
    app = create_app(MockServerConfig(response_naming=response_naming), store=store)
    app.config["TESTING"] = True
    return FlaskSession(app.test_client())


@pytest.fixture
def api(session) -> ApiClient:
    client = ApiClient(ApiConfig(base_url=BASE_URL), session=session)
    yield client
    client.close()
