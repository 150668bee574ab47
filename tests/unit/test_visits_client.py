"""Unit tests for the visit records client and its wire transforms."""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from hemo_visits.models.visit import DiagnosisType, OtherMedicalTest, VisitRequest, VisitType
from hemo_visits.services.visits import PatientVisitsClient, normalize_visit, visit_to_wire


@pytest.fixture
def api():
    return MagicMock()


@pytest.fixture
def visit_request():
    return VisitRequest(
        patient_id=3,
        visit_date="2024-01-01T00:00:00.000Z",
        diagnosis_type=DiagnosisType.NEW_PATIENT,
        center_state="Kassala",
        center_name="Kassala Teaching Hospital",
        complaint="Hematuria",
        notes="first visit",
        visit_type=VisitType.CENTER_VISIT,
    )


class TestNormalizeVisit:
    """Test normalization of backend records."""

    def test_pascal_case(self):
        # Act
        visit = normalize_visit({"Id": 5, "PatientId": 3, "CenterName": "Sennar Hospital"})

        # Assert
        assert visit.id == 5
        assert visit.patient_id == 3
        assert visit.center_name == "Sennar Hospital"

    def test_snake_case(self):
        # Act
        visit = normalize_visit({"id": 5, "patient_id": 3, "hbsag_screen_dates": ["2024-01-02"]})

        # Assert
        assert visit.id == 5
        assert visit.patient_id == 3
        assert visit.hbsag_screen_dates == ["2024-01-02"]

    def test_camel_case(self):
        # Act
        visit = normalize_visit({"id": 5, "patientId": 3, "visitType": "center_visit"})

        # Assert
        assert visit.patient_id == 3
        assert visit.visit_type == "center_visit"

    def test_pascal_case_wins(self):
        # Act
        visit = normalize_visit({"PatientId": 3, "patient_id": 4, "patientId": 5})

        # Assert
        assert visit.patient_id == 3

    def test_empty_value_falls_through_to_next_convention(self):
        # Act
        visit = normalize_visit({"Notes": "", "notes": "from snake"})

        # Assert
        assert visit.notes == "from snake"

    def test_missing_date_lists_default_to_empty(self):
        # Act
        visit = normalize_visit({"Id": 1})

        # Assert
        assert visit.factor_level_test_dates == []
        assert visit.inhibitor_screening_dates == []
        assert visit.viral_screening_dates == []
        assert visit.other_test_dates == []
        assert visit.hbsag_screen_dates == []
        assert visit.center_state is None


class TestVisitToWire:
    """Test the outbound PascalCase shape."""

    def test_full_request(self, visit_request):
        # Act
        wire = visit_to_wire(visit_request)

        # Assert
        assert wire == {
            "PatientId": 3,
            "VisitDate": "2024-01-01T00:00:00.000Z",
            "DiagnosisType": "new_patient",
            "ContactRelation": "",
            "CenterState": "Kassala",
            "CenterName": "Kassala Teaching Hospital",
            "Complaint": "Hematuria",
            "ComplaintOther": "",
            "ComplaintDetails": "",
            "Notes": "first visit",
            "EnteredBy": "",
            "VisitType": "center_visit",
        }

    def test_visit_type_omitted_when_unset(self):
        # Arrange
        request = VisitRequest(patient_id=3, visit_date="2024-01-01T00:00:00.000Z")

        # Act
        wire = visit_to_wire(request)

        # Assert
        assert "VisitType" not in wire
        assert wire["DiagnosisType"] == "followup"
        assert "OtherMedicalTests" not in wire

    def test_other_medical_tests(self):
        # Arrange
        request = VisitRequest(
            patient_id=3,
            visit_date="2024-01-01T00:00:00.000Z",
            other_medical_tests=[OtherMedicalTest("CBC", "Normal", "2024-01-01")],
        )

        # Act
        wire = visit_to_wire(request)

        # Assert
        assert wire["OtherMedicalTests"] == [
            {"TestName": "CBC", "TestResult": "Normal", "TestDate": "2024-01-01"}
        ]


class TestPatientVisitsClient:
    """Test client operations against a mocked ApiClient."""

    def test_fetch_all(self, api):
        # Arrange
        api.get.return_value = [{"Id": 1, "PatientId": 2}, {"id": 2, "patient_id": 3}]

        # Act
        visits = PatientVisitsClient(api).fetch_all()

        # Assert
        api.get.assert_called_once_with("/patientVisits")
        assert [v.id for v in visits] == [1, 2]
        assert [v.patient_id for v in visits] == [2, 3]

    @pytest.mark.parametrize("data", [None, {"items": []}, "unexpected"])
    def test_fetch_all_non_list_yields_empty(self, api, data):
        # Arrange
        api.get.return_value = data

        # Act & Assert
        assert PatientVisitsClient(api).fetch_all() == []

    def test_fetch_by_id(self, api):
        # Arrange
        api.get.return_value = {"Id": 9, "Notes": "x"}

        # Act
        visit = PatientVisitsClient(api).fetch_by_id(9)

        # Assert
        api.get.assert_called_once_with("/patientVisits/9")
        assert visit.notes == "x"

    @pytest.mark.parametrize("body", [None, [], "ok"])
    def test_fetch_by_id_empty_body_yields_defaults(self, api, body, caplog):
        # Arrange
        api.get.return_value = body

        # Act
        with caplog.at_level(logging.WARNING):
            visit = PatientVisitsClient(api).fetch_by_id(9)

        # Assert
        assert visit.id is None
        assert visit.notes is None
        assert visit.hbsag_screen_dates == []
        assert "using defaults" in caplog.text

    def test_fetch_by_id_not_found_propagates(self, api):
        # Arrange
        api.get.side_effect = requests.HTTPError("404 Client Error")

        # Act & Assert
        with pytest.raises(requests.HTTPError):
            PatientVisitsClient(api).fetch_by_id(404)

    def test_create(self, api, visit_request):
        # Arrange
        api.post.return_value = {"id": 11, "patientId": 3}

        # Act
        created = PatientVisitsClient(api).create(visit_request)

        # Assert
        path, body = api.post.call_args.args
        assert path == "/patientVisits"
        assert body == visit_to_wire(visit_request)
        assert created.id == 11

    @pytest.mark.parametrize("body", [None, ["unexpected"]])
    def test_create_without_object_body(self, api, visit_request, body):
        # Arrange
        api.post.return_value = body

        # Act
        created = PatientVisitsClient(api).create(visit_request)

        # Assert
        assert created.id is None
        assert created.hbsag_screen_dates == []

    def test_update_returns_nothing(self, api, visit_request):
        # Arrange
        api.put.return_value = None

        # Act
        result = PatientVisitsClient(api).update(11, visit_request)

        # Assert
        api.put.assert_called_once_with("/patientVisits/11", visit_to_wire(visit_request))
        assert result is None

    def test_delete(self, api):
        # Act
        PatientVisitsClient(api).delete(11)

        # Assert
        api.delete.assert_called_once_with("/patientVisits/11")

    def test_delete_error_propagates(self, api):
        # Arrange
        api.delete.side_effect = requests.ConnectionError("refused")

        # Act & Assert
        with pytest.raises(requests.ConnectionError):
            PatientVisitsClient(api).delete(11)
