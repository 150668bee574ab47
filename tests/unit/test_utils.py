"""Unit tests for naming, date and error helpers."""

from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from hemo_visits.utils.dates import format_local_date, parse_calendar_date, to_iso_timestamp
from hemo_visits.utils.exceptions import (
    ConfigurationError,
    ErrorCategory,
    SubmissionNotAllowedError,
    ValidationError,
    categorize_error,
    create_error_info,
)
from hemo_visits.utils.naming import (
    convert_keys,
    field_variants,
    resolve_field,
    to_camel,
    to_snake,
)


class TestNaming:
    """Test field-name conventions."""

    @pytest.mark.parametrize(
        "pascal, snake, camel",
        [
            ("PatientId", "patient_id", "patientId"),
            ("HbsagScreenDates", "hbsag_screen_dates", "hbsagScreenDates"),
            ("Id", "id", "id"),
            ("Mg", "mg", "mg"),
        ],
    )
    def test_conversions(self, pascal, snake, camel):
        assert to_snake(pascal) == snake
        assert to_camel(pascal) == camel
        assert field_variants(pascal) == (pascal, snake, camel)

    def test_resolve_field_priority(self):
        raw = {"visit_date": "snake", "visitDate": "camel"}

        assert resolve_field(raw, "VisitDate") == "snake"

    def test_resolve_field_falsy_values_fall_through(self):
        raw = {"Quantity": 0, "quantity": 5}

        assert resolve_field(raw, "Quantity") == 5

    def test_resolve_field_default(self):
        assert resolve_field({}, "Notes", "n/a") == "n/a"
        assert resolve_field({"Notes": ""}, "Notes") is None

    def test_convert_keys(self):
        record = {"PatientId": 1, "CenterName": "Sennar Hospital"}

        assert convert_keys(record, "snake") == {"patient_id": 1, "center_name": "Sennar Hospital"}
        assert convert_keys(record, "camel") == {"patientId": 1, "centerName": "Sennar Hospital"}
        assert convert_keys(record, "pascal") == record

    def test_convert_keys_unknown_convention(self):
        with pytest.raises(ValueError):
            convert_keys({}, "kebab")


class TestDates:
    """Test date conversions."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-03-15", date(2024, 3, 15)),
            ("2024-03-15T00:00:00.000Z", date(2024, 3, 15)),
            ("2024-03-15T22:30:00-05:00", date(2024, 3, 16)),
            ("2024-03-15T10:00:00", date(2024, 3, 15)),
            (" 2024-03-15 ", date(2024, 3, 15)),
        ],
    )
    def test_parse_calendar_date(self, value, expected):
        assert parse_calendar_date(value) == expected

    @pytest.mark.parametrize("value", ["15/03/2024", "2024-02-30", "yesterday", ""])
    def test_parse_calendar_date_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_calendar_date(value)

    def test_to_iso_timestamp(self):
        assert to_iso_timestamp(date(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_format_local_date(self):
        assert format_local_date(date(2024, 3, 5)) == "3/5/2024"
        assert format_local_date(date(2024, 12, 25)) == "12/25/2024"


class TestErrorCategorization:
    """Test error categorization and remediation."""

    def test_connection_error_is_critical(self):
        assert categorize_error(requests.ConnectionError("refused")) is ErrorCategory.CRITICAL

    def test_ssl_error_is_critical(self):
        info = create_error_info(requests.exceptions.SSLError("bad cert"))

        assert info.category is ErrorCategory.CRITICAL
        assert "verify_tls" in info.remediation

    def test_configuration_error_is_critical(self):
        assert categorize_error(ConfigurationError("missing")) is ErrorCategory.CRITICAL

    def test_timeout_is_transient(self):
        info = create_error_info(requests.Timeout("slow"))

        assert info.category is ErrorCategory.TRANSIENT
        assert info.is_retryable is True

    def test_server_error_is_transient(self):
        response = MagicMock(status_code=503)

        info = create_error_info(requests.HTTPError("503", response=response))

        assert info.category is ErrorCategory.TRANSIENT
        assert info.status_code == 503

    def test_client_error_is_permanent(self):
        response = MagicMock(status_code=422)

        info = create_error_info(requests.HTTPError("422", response=response))

        assert info.category is ErrorCategory.PERMANENT
        assert info.is_retryable is False
        assert info.to_dict()["status_code"] == 422

    def test_validation_error_is_permanent(self):
        info = create_error_info(SubmissionNotAllowedError("no patient"))

        assert info.category is ErrorCategory.PERMANENT
        assert info.error_type == "SubmissionNotAllowedError"
        assert info.status_code is None
