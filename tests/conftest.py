"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import logging
from datetime import date
from pathlib import Path
from typing import Generator, List
from unittest.mock import MagicMock

import pytest

from hemo_visits.config.schema import ApiConfig
from hemo_visits.logging_audit.logger import (
    COMPONENT_LOGGERS,
    PACKAGE_LOGGER,
    THIRD_PARTY_LOGGERS,
)
from hemo_visits.models.factor import Factor
from hemo_visits.models.patient import Patient
from hemo_visits.models.visit import VisitRecord


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """
    Restore root logger handlers changed by configure_logging().

    CLI tests configure logging against streams that CliRunner closes
    afterwards. Package, component and HTTP stack logger levels are reset too.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    named = [
        logging.getLogger(name)
        for name in (PACKAGE_LOGGER, *COMPONENT_LOGGERS.values(), *THIRD_PARTY_LOGGERS)
    ]
    named_levels = [logger.level for logger in named]
    yield
    for logger, named_level in zip(named, named_levels):
        logger.setLevel(named_level)
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def api_config() -> ApiConfig:
    """Backend configuration pointing at a local test URL."""
    return ApiConfig(base_url="http://backend.test/api", timeout_connect=2, timeout_read=5)


@pytest.fixture
def patients() -> List[Patient]:
    """Patient snapshot used by form tests."""
    return [
        Patient(id=1, full_name="Amna Hassan", national_id_number="1198723"),
        Patient(id=2, full_name="Omar Abdelrahman", national_id_number="2045519"),
        Patient(id=3, full_name="Mohamed Osman", national_id_number="3301276"),
    ]


@pytest.fixture
def factors() -> List[Factor]:
    """Factor inventory snapshot used by form tests."""
    return [
        Factor(
            id=4,
            name="Advate",
            lot_no="L-77",
            quantity=10,
            expiry_date="2027-06-30",
            mg=500,
            drug_type="Factor VIII",
            supplier_name="NMSF",
            company_name="Takeda",
        ),
        Factor(id=5, name="BeneFIX", lot_no="L-90", quantity=2),
    ]


@pytest.fixture
def today() -> date:
    return date(2024, 3, 1)


@pytest.fixture
def treatments_client() -> MagicMock:
    """Treatments collaborator double."""
    client = MagicMock()
    client.create.return_value = MagicMock(id=91)
    return client


@pytest.fixture
def factors_client() -> MagicMock:
    """Factors collaborator double."""
    return MagicMock()


@pytest.fixture
def save() -> MagicMock:
    """Visit save callback double."""
    return MagicMock()


@pytest.fixture
def existing_visit() -> VisitRecord:
    """Visit record as loaded for editing."""
    return VisitRecord(
        id=7,
        patient_id=2,
        visit_date="2024-02-10T00:00:00.000Z",
        center_state="Khartoum",
        center_name="Ibn Sina Hospital",
        visit_type="telephone_consultation",
        diagnosis_type="admission",
        complaint="Epistaxis",
        complaint_details="Two episodes",
        notes="Seen by on-call team",
        entered_by="nurse.a",
    )
