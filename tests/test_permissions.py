from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from api_dashboard.auth import issue_access_token
from api_dashboard.permissions import extract_bearer_token, get_current_user_id

SECRET = "test-secret-with-at-least-32-bytes-123"


def _auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _build_test_app() -> FastAPI:
    app = FastAPI()

    @app.get("/whoami")
    def whoami(user_id: int = Depends(get_current_user_id)) -> dict[str, int]:
        return {"user_id": user_id}

    return app


def test_extract_bearer_token_accepts_valid_bearer_header() -> None:
    assert extract_bearer_token("Bearer abc123") == "abc123"
    assert extract_bearer_token("bearer abc123") == "abc123"
    assert extract_bearer_token("  Bearer   xyz   ") == "xyz"


def test_extract_bearer_token_rejects_invalid_values() -> None:
    assert extract_bearer_token(None) is None
    assert extract_bearer_token("") is None
    assert extract_bearer_token("Token abc123") is None
    assert extract_bearer_token("Bearer") is None
    assert extract_bearer_token("Bearer ") is None


def test_get_current_user_id_resolves_subject(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_DASHBOARD_JWT_SECRET", SECRET)
    client = TestClient(_build_test_app())

    response = client.get("/whoami", headers=_auth_header(issue_access_token(9, secret=SECRET)))

    assert response.status_code == 200
    assert response.json() == {"user_id": 9}


def test_get_current_user_id_rejects_missing_and_bad_tokens(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_DASHBOARD_JWT_SECRET", SECRET)
    client = TestClient(_build_test_app())

    missing = client.get("/whoami")
    assert missing.status_code == 401
    assert missing.json()["detail"] == "Missing bearer token"
    assert missing.headers["WWW-Authenticate"] == "Bearer"

    malformed = client.get("/whoami", headers=_auth_header("bad-token"))
    assert malformed.status_code == 401
    assert malformed.json()["detail"] == "Malformed bearer token"

    expired = issue_access_token(9, secret=SECRET, ttl_seconds=-1)
    expired_response = client.get("/whoami", headers=_auth_header(expired))
    assert expired_response.status_code == 401
    assert expired_response.json()["detail"] == "Token expired"


def test_get_current_user_id_reports_missing_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("API_DASHBOARD_JWT_SECRET", raising=False)
    client = TestClient(_build_test_app())

    response = client.get("/whoami", headers=_auth_header(issue_access_token(9, secret=SECRET)))

    assert response.status_code == 500
    assert "Missing JWT secret" in response.json()["detail"]
