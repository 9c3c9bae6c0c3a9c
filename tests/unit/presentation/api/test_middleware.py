"""Unit tests for the request logging middleware."""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from vela.presentation.api.exception_handlers import setup_exception_handlers
from vela.presentation.api.middleware import register_middleware
from vela_config import Settings

MIDDLEWARE_LOGGER = "vela.presentation.api.middleware"


def _build_app() -> FastAPI:
    settings = Settings(
        jwt_access_secret="access",
        jwt_refresh_secret="refresh",
        environment="production",
        _env_file=None,
    )
    app = FastAPI()
    register_middleware(app)
    setup_exception_handlers(app, settings)

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    @app.get("/crash")
    async def crash():
        msg = "database is gone"
        raise RuntimeError(msg)

    return app


class TestRequestLogging:
    def setup_method(self):
        self.client = TestClient(_build_app(), raise_server_exceptions=False)

    def test_successful_request_is_logged_and_timed(self, caplog):
        # Arrange
        caplog.set_level(logging.INFO, logger=MIDDLEWARE_LOGGER)

        # Act
        response = self.client.get("/ok")

        # Assert
        assert response.status_code == 200
        assert float(response.headers["X-Process-Time"]) >= 0
        messages = [r.getMessage() for r in caplog.records if r.name == MIDDLEWARE_LOGGER]
        assert any(m.startswith("GET /ok -> 200") for m in messages)

    def test_unhandled_error_is_still_logged(self, caplog):
        """A request answered by the 500 handler still gets its log line."""
        # Arrange
        caplog.set_level(logging.INFO, logger=MIDDLEWARE_LOGGER)

        # Act
        response = self.client.get("/crash")

        # Assert
        assert response.status_code == 500
        messages = [r.getMessage() for r in caplog.records if r.name == MIDDLEWARE_LOGGER]
        assert any(m.startswith("GET /crash -> 500") for m in messages)
