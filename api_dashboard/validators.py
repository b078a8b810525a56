from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from api_dashboard.errors import ValidationError
from api_dashboard.models import HttpMethod

SUPPORTED_METHODS = tuple(method.value for method in HttpMethod)
_ALLOWED_URL_SCHEMES = {"http", "https"}
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class RequestDescription:
    method: str
    url: str
    headers: dict[str, Any] = field(default_factory=dict)
    body: Any = None


def normalize_method(method: object) -> str:
    if method is None:
        return ""
    return str(method).strip().upper()


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_absolute_url(url: object) -> bool:
    if not isinstance(url, str) or not url.strip():
        return False

    try:
        parsed = urlparse(url.strip())
        # Accessing .port validates the netloc.
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in _ALLOWED_URL_SCHEMES and bool(parsed.hostname)


def _reject_non_finite(constant: str) -> Any:
    raise ValueError(f"{constant} is not valid JSON")


def _invalid_json(field_name: str) -> ValidationError:
    return ValidationError(f"{field_name} must be valid JSON.", errors=[f"{field_name} must be valid JSON."])


def parse_json_input(value: Any, field_name: str) -> Any:
    """Accept already-structured JSON or JSON text; blank input means absent.

    ``NaN`` and ``Infinity`` are not JSON and are rejected in either form.
    """
    if value is None:
        return None

    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return json.loads(value, parse_constant=_reject_non_finite)
        except ValueError as exc:
            raise _invalid_json(field_name) from exc

    if isinstance(value, (dict, list, int, float, bool)):
        try:
            json.dumps(value, allow_nan=False)
        except ValueError as exc:
            raise _invalid_json(field_name) from exc
        return value

    raise ValidationError(
        f"{field_name} must be an object or a JSON string.",
        errors=[f"{field_name} must be an object or a JSON string."],
    )


def validate_request_description(
    *,
    method: object,
    url: object,
    headers: Any = None,
    body: Any = None,
) -> RequestDescription:
    errors: list[str] = []
    normalized_method = normalize_method(method)

    if normalized_method not in SUPPORTED_METHODS:
        errors.append(f"Method must be one of {', '.join(SUPPORTED_METHODS)}.")

    if not isinstance(url, str) or not url.strip():
        errors.append("URL is required.")
    elif not is_absolute_url(url):
        errors.append("URL must be a valid absolute http(s) URL.")

    parsed_headers: Any = None
    parsed_body: Any = None
    for field_name, raw_value in (("headers", headers), ("body", body)):
        try:
            parsed = parse_json_input(raw_value, field_name)
        except ValidationError as exc:
            errors.extend(exc.errors)
            continue
        if field_name == "headers":
            parsed_headers = parsed
        else:
            parsed_body = parsed

    if parsed_headers is not None and not isinstance(parsed_headers, dict):
        errors.append("headers must be a JSON object.")

    if errors:
        raise ValidationError("Validation failed", errors=errors)

    return RequestDescription(
        method=normalized_method,
        url=str(url).strip(),
        headers=dict(parsed_headers or {}),
        body=parsed_body,
    )
