from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from api_dashboard.errors import AuthenticationFailedError

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_SECONDS = 86400


class AuthConfigurationError(RuntimeError):
    """Raised when auth configuration is invalid."""


class TokenMalformedError(AuthenticationFailedError):
    """Raised when a token cannot be decoded or validated."""


class TokenExpiredError(AuthenticationFailedError):
    """Raised when a token is expired."""


def _require_secret(secret: str | None) -> str:
    value = (secret or "").strip()
    if not value:
        raise AuthConfigurationError("Missing JWT secret in API_DASHBOARD_JWT_SECRET")
    return value


def _ensure_aware_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def issue_access_token(
    user_id: int,
    *,
    secret: str,
    ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    now: datetime | None = None,
) -> str:
    signing_key = _require_secret(secret)
    issued_at = _ensure_aware_utc(now) if now is not None else datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(seconds=ttl_seconds)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, signing_key, algorithm=JWT_ALGORITHM)


def verify_access_token(token: str, *, secret: str) -> int:
    """Return the user id embedded in ``token``."""
    if not token or not token.strip():
        raise TokenMalformedError("Token is empty")

    signing_key = _require_secret(secret)
    try:
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenMalformedError("Token is malformed or invalid") from exc

    try:
        user_id = int(payload["sub"])
    except (ValueError, KeyError, TypeError) as exc:
        raise TokenMalformedError("Token payload is invalid") from exc
    if user_id <= 0:
        raise TokenMalformedError("Token payload is invalid")
    return user_id
