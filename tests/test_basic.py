"""
Basic application tests.

Validates that the FastAPI app starts correctly, the health
endpoint responds as expected and logging levels are applied.
"""

import logging

from fastapi.testclient import TestClient

from sharetrade.main import app
from sharetrade.shared.logging import LEDGER_LOGGER, configure_logging

client = TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self) -> None:
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["ledger_backend"] == "memory"
        assert body["connected"] is False
        assert "version" in body


class TestLoggingConfiguration:
    """Tests for configure_logging."""

    def test_ledger_level_set_independently(self) -> None:
        configure_logging("DEBUG", ledger_level="WARNING")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger(LEDGER_LOGGER).level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_ledger_level_defaults_to_application_level(self) -> None:
        configure_logging("ERROR")
        assert logging.getLogger(LEDGER_LOGGER).level == logging.ERROR
        configure_logging("INFO")
        assert logging.getLogger(LEDGER_LOGGER).level == logging.INFO
