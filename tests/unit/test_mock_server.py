"""Unit tests for the mock visit records backend."""

import pytest

from hemo_visits.config.schema import MockServerConfig
from hemo_visits.mock_server import InMemoryStore, create_app


@pytest.fixture
def store():
    return InMemoryStore.with_sample_data()


@pytest.fixture
def client(store):
    app = create_app(MockServerConfig(), store=store)
    app.config["TESTING"] = True
    return app.test_client()


def _visit_body(**overrides):
    body = {
        "PatientId": 1,
        "VisitDate": "2024-03-01T00:00:00.000Z",
        "DiagnosisType": "followup",
        "CenterState": "Khartoum",
        "CenterName": "Ibn Sina Hospital",
        "VisitType": "center_visit",
    }
    body.update(overrides)
    return body


class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        # Act
        response = client.get("/api/health")

        # Assert
        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert data["response_naming"] == "pascal"


class TestVisitRoutes:
    """Test /patientVisits."""

    def test_create_and_list(self, client):
        # Act
        created = client.post("/api/patientVisits", json=_visit_body())
        listed = client.get("/api/patientVisits")

        # Assert
        assert created.status_code == 201
        record = created.get_json()
        assert record["Id"] == 1
        assert record["PatientId"] == 1
        assert record["HbsagScreenDates"] == []
        assert "CreatedAt" in record
        assert [v["Id"] for v in listed.get_json()] == [1]

    def test_create_accepts_camel_case_body(self, client):
        # Act
        response = client.post(
            "/api/patientVisits",
            json={"patientId": 2, "visitDate": "2024-03-01T00:00:00.000Z"},
        )

        # Assert
        assert response.status_code == 201
        assert response.get_json()["PatientId"] == 2

    def test_create_requires_patient(self, client):
        # Act
        response = client.post("/api/patientVisits", json={"VisitDate": "2024-03-01"})

        # Assert
        assert response.status_code == 400
        assert "PatientId" in response.get_json()["error"]

    def test_create_requires_json_object(self, client):
        assert client.post("/api/patientVisits", json=[1, 2]).status_code == 400

    def test_get_missing_visit(self, client):
        assert client.get("/api/patientVisits/42").status_code == 404

    def test_update_replaces_fields(self, client, store):
        # Arrange
        client.post("/api/patientVisits", json=_visit_body())

        # Act
        response = client.put(
            "/api/patientVisits/1",
            json=_visit_body(VisitType=None, Notes="updated"),
        )

        # Assert
        assert response.status_code == 204
        assert response.data == b""
        assert store.visits[1]["Notes"] == "updated"

    def test_update_without_visit_type_drops_it(self, client, store):
        # Arrange
        client.post("/api/patientVisits", json=_visit_body())
        body = _visit_body()
        del body["VisitType"]

        # Act
        client.put("/api/patientVisits/1", json=body)

        # Assert
        assert "VisitType" not in store.visits[1]

    def test_update_missing_visit(self, client):
        assert client.put("/api/patientVisits/42", json=_visit_body()).status_code == 404

    def test_delete(self, client, store):
        # Arrange
        client.post("/api/patientVisits", json=_visit_body())

        # Act
        response = client.delete("/api/patientVisits/1")

        # Assert
        assert response.status_code == 204
        assert store.visits == {}
        assert client.delete("/api/patientVisits/1").status_code == 404


class TestTreatmentAndFactorRoutes:
    """Test /treatments and /factors."""

    def test_create_treatment(self, client, store):
        # Act
        response = client.post("/api/treatments", json={
            "PatientId": 1,
            "TreatmentType": "On-demand",
            "Lot": "LOT-8A21",
            "QuantityLot": 3,
        })

        # Assert
        assert response.status_code == 201
        assert store.treatments[1]["Lot"] == "LOT-8A21"

    def test_unknown_lot_rejected(self, client):
        # Act
        response = client.post("/api/treatments", json={"PatientId": 1, "Lot": "LOT-NOPE"})

        # Assert
        assert response.status_code == 422

    def test_update_factor_replaces_record(self, client, store):
        # Act
        response = client.put("/api/factors/1", json={
            "Name": "Advate", "LotNo": "LOT-8A21", "Quantity": 37,
        })

        # Assert
        assert response.status_code == 204
        assert store.factors[1] == {"Id": 1, "Name": "Advate", "LotNo": "LOT-8A21", "Quantity": 37}

    def test_update_missing_factor(self, client):
        assert client.put("/api/factors/99", json={"Quantity": 1}).status_code == 404


class TestResponseNaming:
    """Test response field naming conventions."""

    @pytest.mark.parametrize(
        "naming, key",
        [("pascal", "FullName"), ("snake", "full_name"), ("camel", "fullName")],
    )
    def test_patients_naming(self, naming, key):
        # Arrange
        app = create_app(MockServerConfig(response_naming=naming))

        # Act
        patients = app.test_client().get("/api/patients").get_json()

        # Assert
        assert patients[0][key] == "Amna Hassan"

    def test_custom_prefix(self):
        # Arrange
        app = create_app(MockServerConfig(url_prefix=""))

        # Act & Assert
        assert app.test_client().get("/factors").status_code == 200
