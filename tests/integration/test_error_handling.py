"""Integration tests for how store failures and unexpected errors are rendered."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from justvibe.config import settings
from justvibe.core.errors import UpstreamError
from justvibe.main import app
from justvibe.services.favorite_service import favorite_service


def failing_count(db, user_id):
    try:
        raise OperationalError("SELECT count(*)", {}, Exception("connection refused"))
    except OperationalError as e:
        raise UpstreamError("Failed to fetch favorites count") from e


def exploding_count(db, user_id):
    raise RuntimeError("secret internals")


class TestUpstreamError:
    def test_detail_is_hidden_outside_development(
        self, client: TestClient, auth_headers, monkeypatch
    ) -> None:
        monkeypatch.setattr(favorite_service, "count_favorites", failing_count)

        response = client.get("/api/favorites/count", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch favorites count"}

    def test_detail_is_shown_in_development(
        self, client: TestClient, auth_headers, monkeypatch
    ) -> None:
        monkeypatch.setattr(favorite_service, "count_favorites", failing_count)
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")

        response = client.get("/api/favorites/count", headers=auth_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch favorites count"
        assert "connection refused" in body["message"]


class TestUnhandledError:
    @pytest.fixture
    def lenient_client(self, client: TestClient) -> TestClient:
        # Shares the dependency overrides installed by the client fixture
        return TestClient(app, raise_server_exceptions=False)

    def test_generic_message(
        self, lenient_client: TestClient, auth_headers, monkeypatch
    ) -> None:
        monkeypatch.setattr(favorite_service, "count_favorites", exploding_count)

        response = lenient_client.get("/api/favorites/count", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!"}

    def test_message_in_development(
        self, lenient_client: TestClient, auth_headers, monkeypatch
    ) -> None:
        monkeypatch.setattr(favorite_service, "count_favorites", exploding_count)
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")

        response = lenient_client.get("/api/favorites/count", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!", "message": "secret internals"}
