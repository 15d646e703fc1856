"""
Unit tests for Task 1.2 - FastAPI application setup.

Tests verify that FastAPI is properly configured with metadata, middleware,
error handlers, basic endpoints and the schedule router.
"""

import pytest
from fastapi import FastAPI, status
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

import main
from src.core.config import settings


class TestFastAPIConfiguration:
    """Test FastAPI application configuration and setup."""

    def test_fastapi_app_exists(self):
        assert hasattr(main, 'app'), "FastAPI app not found in main module"
        assert isinstance(main.app, FastAPI), "app is not a FastAPI instance"

    def test_app_metadata(self):
        app = main.app
        assert app.title == "Departure Timetable Optimizer"
        assert app.version == "1.0.0"
        assert "timetable" in app.description.lower()
        assert app.docs_url == "/api/docs"
        assert app.redoc_url == "/api/redoc"
        assert app.openapi_url == "/api/openapi.json"

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["status"] == "operational"
        assert data["version"] == "1.0.0"
        assert data["schedule"] == "/api/v1/schedule"

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "testing"
        assert data["checks"] == {"api": "operational", "optimizer": "operational"}

    def test_schedule_routes_registered(self):
        paths = {route.path for route in main.app.routes if isinstance(route, APIRoute)}
        assert "/api/v1/schedule" in paths
        assert "/api/v1/schedule/csv" in paths

    def test_cors_headers(self, client):
        response = client.options(
            "/",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "GET"
            }
        )
        assert response.status_code == status.HTTP_200_OK
        assert "access-control-allow-origin" in response.headers

    def test_not_found_error_format(self, client):
        response = client.get("/nonexistent")
        assert response.status_code == status.HTTP_404_NOT_FOUND

        data = response.json()
        assert data["status_code"] == 404
        assert "timestamp" in data
        assert "error" in data

    def test_unhandled_exception_returns_500(self):
        @main.app.get("/_test_failure")
        async def fail():
            raise RuntimeError("boom")

        try:
            client = TestClient(main.app, raise_server_exceptions=False)
            response = client.get("/_test_failure")
        finally:
            main.app.router.routes = [
                r for r in main.app.router.routes if getattr(r, "path", None) != "/_test_failure"
            ]

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

    def test_openapi_schema(self, client):
        response = client.get("/api/openapi.json")
        assert response.status_code == status.HTTP_200_OK
        assert "/api/v1/schedule" in response.json()["paths"]


class TestSettings:
    """Test application settings helpers."""

    def test_cors_origins_parsing(self, monkeypatch):
        monkeypatch.setattr(settings, "cors_origins", "http://a.test, http://b.test,")
        assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]

    def test_environment_helpers(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")
        assert settings.is_production()
        assert not settings.is_development()

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        from src.core.config import Settings
        assert Settings().port == 9090

    def test_upload_limit_default(self):
        from src.core.config import Settings
        assert Settings().max_upload_size_mb == 10
