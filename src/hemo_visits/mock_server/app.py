"""Flask application for the mock visit records backend.

Serves /patientVisits, /treatments, /factors and /patients from an
in-memory store. Responses use the configured naming convention so clients
can be exercised against PascalCase, snake_case or camelCase backends.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from hemo_visits.config.schema import MockServerConfig
from hemo_visits.mock_server.store import InMemoryStore, pascalize
from hemo_visits.utils.naming import convert_keys

logger = logging.getLogger("hemo_visits.mock_server")

api = Blueprint("mock_api", __name__)


def _store() -> InMemoryStore:
    return current_app.config["STORE"]


def _render(record: Any) -> Any:
    """Rename record keys to the configured response convention."""
    naming = current_app.config["RESPONSE_NAMING"]
    if isinstance(record, list):
        return [convert_keys(item, naming) for item in record]
    return convert_keys(record, naming)


def _error(message: str, status: int):
    logger.warning("Mock error %d: %s", status, message)
    return jsonify({"error": message}), status


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return None
    return body


@api.before_app_request
def log_request() -> None:
    """Log all incoming requests."""
    logger.info(
        f"{request.method} {request.path} "
        f"(Content-Length: {request.content_length or 0})"
    )


@api.route("/health", methods=["GET"])
def health_check():
    store = _store()
    return jsonify({
        "status": "healthy",
        "response_naming": current_app.config["RESPONSE_NAMING"],
        "visits": len(store.visits),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }), 200


@api.route("/patientVisits", methods=["GET"])
def list_visits():
    return jsonify(_render(list(_store().visits.values())))


@api.route("/patientVisits", methods=["POST"])
def create_visit():
    body = _json_body()
    if body is None:
        return _error("Request body must be a JSON object", 400)
    if not pascalize(body, ["PatientId"]).get("PatientId"):
        return _error("PatientId is required", 400)
    return jsonify(_render(_store().create_visit(body))), 201


@api.route("/patientVisits/<int:visit_id>", methods=["GET"])
def get_visit(visit_id: int):
    record = _store().visits.get(visit_id)
    if record is None:
        return _error(f"Visit {visit_id} not found", 404)
    return jsonify(_render(record))


@api.route("/patientVisits/<int:visit_id>", methods=["PUT"])
def update_visit(visit_id: int):
    body = _json_body()
    if body is None:
        return _error("Request body must be a JSON object", 400)
    record = _store().update_visit(visit_id, body)
    if record is None:
        return _error(f"Visit {visit_id} not found", 404)
    return "", 204


@api.route("/patientVisits/<int:visit_id>", methods=["DELETE"])
def delete_visit(visit_id: int):
    if not _store().delete_visit(visit_id):
        return _error(f"Visit {visit_id} not found", 404)
    return "", 204


@api.route("/treatments", methods=["GET"])
def list_treatments():
    return jsonify(_render(list(_store().treatments.values())))


@api.route("/treatments", methods=["POST"])
def create_treatment():
    body = _json_body()
    if body is None:
        return _error("Request body must be a JSON object", 400)
    store = _store()
    lot = pascalize(body, ["Lot"]).get("Lot")
    if lot and not any(f.get("LotNo") == lot for f in store.factors.values()):
        return _error(f"Unknown lot: {lot}", 422)
    return jsonify(_render(store.create_treatment(body))), 201


@api.route("/factors", methods=["GET"])
def list_factors():
    return jsonify(_render(list(_store().factors.values())))


@api.route("/factors/<int:factor_id>", methods=["PUT"])
def update_factor(factor_id: int):
    body = _json_body()
    if body is None:
        return _error("Request body must be a JSON object", 400)
    if _store().update_factor(factor_id, body) is None:
        return _error(f"Factor {factor_id} not found", 404)
    return "", 204


@api.route("/patients", methods=["GET"])
def list_patients():
    return jsonify(_render(list(_store().patients.values())))


def create_app(
    config: Optional[MockServerConfig] = None,
    store: Optional[InMemoryStore] = None,
) -> Flask:
    """Create the mock backend application.

    Args:
        config: Mock server configuration (defaults apply if omitted)
        store: Record store (sample data if omitted)

    Returns:
        Configured Flask application

    Example:
        >>> app = create_app(MockServerConfig(response_naming="snake"))
        >>> client = app.test_client()
        >>> client.get("/api/patients").get_json()[0]["full_name"]
        'Amna Hassan'
    """
    config = config or MockServerConfig()
    app = Flask(__name__)
    app.config["STORE"] = store if store is not None else InMemoryStore.with_sample_data()
    app.config["RESPONSE_NAMING"] = config.response_naming
    app.register_blueprint(api, url_prefix=config.url_prefix or None)
    logger.info(
        "Mock backend initialized (prefix=%r, response_naming=%s)",
        config.url_prefix,
        config.response_naming,
    )
    return app


def run_server(config: Optional[MockServerConfig] = None, debug: bool = False) -> None:
    """Run the mock backend until interrupted.

    Args:
        config: Mock server configuration
        debug: Enable Flask debug mode
    """
    config = config or MockServerConfig()
    app = create_app(config)

    logger.info(f"Starting mock backend on http://{config.host}:{config.port}{config.url_prefix}")
    app.run(
        host=config.host,
        port=config.port,
        debug=debug,
        use_reloader=False,  # Avoid duplicate startup
    )
