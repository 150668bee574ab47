"""Mock server module.

This module provides an in-memory mock of the visit records backend.
"""

from hemo_visits.mock_server.app import create_app, run_server
from hemo_visits.mock_server.store import InMemoryStore

__all__ = ["InMemoryStore", "create_app", "run_server"]
