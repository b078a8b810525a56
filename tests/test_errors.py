from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import api_dashboard.main as app_main
from api_dashboard.errors import (
    ApiDashboardError,
    AuthenticationFailedError,
    ConflictError,
    ErrorKind,
    StorageError,
    TransportError,
    ValidationError,
)


@pytest.fixture()
def client() -> TestClient:
    app = FastAPI()
    app.add_exception_handler(ApiDashboardError, app_main.api_dashboard_error_handler)

    @app.get("/raise/{kind}")
    def raise_kind(kind: str) -> None:
        raise {
            "validation": ValidationError("Validation failed", errors=["url: URL is required."]),
            "auth": AuthenticationFailedError("Token expired"),
            "conflict": ConflictError("Email is already registered."),
            "transport": TransportError("upstream unreachable"),
            "storage": StorageError("disk I/O error on api_requests"),
        }[kind]

    return TestClient(app)


def test_every_error_kind_has_a_status() -> None:
    assert set(app_main._STATUS_BY_KIND) == set(ErrorKind)


def test_validation_error_lists_messages(client: TestClient) -> None:
    response = client.get("/raise/validation")

    assert response.status_code == 400
    assert response.json() == {"detail": "Validation failed", "errors": ["url: URL is required."]}


def test_auth_error_advertises_bearer_scheme(client: TestClient) -> None:
    response = client.get("/raise/auth")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json() == {"detail": "Token expired"}


def test_conflict_and_transport_statuses(client: TestClient) -> None:
    assert client.get("/raise/conflict").status_code == 409
    assert client.get("/raise/transport").status_code == 502


def test_storage_error_hides_internal_detail(client: TestClient) -> None:
    response = client.get("/raise/storage")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "api_requests" not in response.text
