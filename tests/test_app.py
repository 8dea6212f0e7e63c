# =============================================================================
# tests/test_app.py - Application Tests
# =============================================================================
# Tests for the app factory: root and health endpoints, the error envelope
# for framework errors, and context wiring.
#
# Run with: pytest tests/test_app.py -v
# =============================================================================

from unittest.mock import patch

import mongomock
from fastapi.testclient import TestClient

from app.context import AppContext
from app.main import create_app, run
from lib.geocoder import MapQuestGeocoder
from lib.mongo_client import USERS


class TestRoot:
    """Tests for the root endpoint."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/api/v1/health"


class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        """Test the liveness check."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "development"
        assert body["version"] == "1.0.0"

    def test_ready(self, client):
        """Test the readiness check pinging the database."""
        response = client.get("/api/v1/health/ready")

        assert response.status_code == 200
        assert response.json()["database"] == "healthy"


class TestErrorEnvelope:
    """Tests that framework errors use the same envelope."""

    def test_unknown_route(self, client):
        response = client.get("/api/v1/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    def test_method_not_allowed(self, client):
        response = client.patch("/api/v1/bootcamps")

        assert response.status_code == 405
        assert response.json()["success"] is False

    def test_malformed_json(self, client, publisher, auth_headers):
        """Test that an unparseable body is a 400."""
        headers = {**auth_headers(publisher), "Content-Type": "application/json"}
        response = client.post("/api/v1/bootcamps", content="{not json", headers=headers)

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestContextWiring:
    """Tests for create_app with an injected context."""

    def test_apps_do_not_share_state(self, context, settings):
        """Test that two apps built from different contexts write to different databases."""
        other_db = mongomock.MongoClient(tz_aware=True)["other"]
        other_context = AppContext(
            settings=settings,
            db=other_db,
            geocoder=context.geocoder,
            mailer=context.mailer,
        )
        payload = {"name": "John Doe", "email": "john@gmail.com", "password": "123456"}

        with TestClient(create_app(context=context)) as first, TestClient(create_app(context=other_context)):
            assert first.post("/api/v1/auth/register", json=payload).status_code == 200

        assert context.db[USERS].count_documents({}) == 1
        assert other_db[USERS].count_documents({}) == 0

    def test_from_settings_wires_geocoder(self, settings):
        """Test that the production context builds MapQuest from the geocoder settings."""
        configured = settings.model_copy(
            update={"GEOCODER_API_KEY": "key", "GEOCODER_URL": "https://geo.test/address", "GEOCODER_TIMEOUT": 3.0}
        )
        db = mongomock.MongoClient(tz_aware=True)["wired"]

        with patch("app.context.MongoClientFactory.connect", return_value=(db.client, db)):
            built = AppContext.from_settings(configured)

        assert isinstance(built.geocoder, MapQuestGeocoder)
        assert built.geocoder.api_key == "key"
        assert built.geocoder.url == "https://geo.test/address"
        assert built.geocoder.timeout == 3.0
        assert built.db is db

    def test_lifespan_keeps_injected_context(self, context):
        """Test that an injected context is used as-is and not closed."""
        app = create_app(context=context)

        with TestClient(app):
            assert app.state.context is context


class TestRun:
    """Tests for the uvicorn entry point."""

    def test_listens_on_configured_host_and_port(self, settings):
        """Test that API_HOST and API_PORT reach uvicorn."""
        configured = settings.model_copy(update={"API_HOST": "127.0.0.1", "API_PORT": 8123})

        with patch("app.main.uvicorn.run") as mock_run:
            run(configured)

        mock_run.assert_called_once_with("app.main:app", host="127.0.0.1", port=8123, reload=True)
