from __future__ import annotations

from fastapi import Depends, Header, HTTPException

from api_dashboard.auth import (
    AuthConfigurationError,
    TokenExpiredError,
    TokenMalformedError,
    verify_access_token,
)
from api_dashboard.config import Settings, get_settings


def extract_bearer_token(authorization: str | None) -> str | None:
    value = (authorization or "").strip()
    if not value:
        return None

    scheme, _, token = value.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def _bearer_401(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    authorization: str | None = Header(default=None, alias="Authorization"),
    settings: Settings = Depends(get_settings),
) -> int:
    token = extract_bearer_token(authorization)
    if token is None:
        raise _bearer_401("Missing bearer token")

    try:
        return verify_access_token(token, secret=settings.jwt_secret)
    except TokenExpiredError as exc:
        raise _bearer_401("Token expired") from exc
    except TokenMalformedError as exc:
        raise _bearer_401("Malformed bearer token") from exc
    except AuthConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
