from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api_dashboard import models
from api_dashboard.errors import StorageError, TransportError
from api_dashboard.history import body_for_storage

logger = logging.getLogger("api_dashboard.executor")

DEFAULT_TIMEOUT_SEC = 15.0
TRANSPORT_FAILURE_STATUS = 0
# GET and DELETE bodies are persisted but never transmitted.
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
# Header or body values httpx cannot encode surface as ValueError/TypeError.
REQUEST_FAILURES = (httpx.RequestError, httpx.InvalidURL, ValueError, TypeError)


@dataclass(frozen=True)
class OutboundRequest:
    owner_id: int
    method: str
    url: str
    headers: dict[str, Any] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class ExecutionResult:
    record_id: int
    status_code: int
    response_time_ms: int
    response_data: Any


def _wire_headers(headers: dict[str, Any]) -> dict[str, str]:
    return {
        str(name): value if isinstance(value, str) else json.dumps(value)
        for name, value in headers.items()
    }


def _decode_response(response: httpx.Response) -> Any:
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text


def _elapsed_ms(started: float) -> int:
    return max(0, int(round((time.perf_counter() - started) * 1000)))


class RequestExecutor:
    """Runs a user-described HTTP request and records the outcome."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _build_request(self, outbound: OutboundRequest) -> httpx.Request:
        kwargs: dict[str, Any] = {"headers": _wire_headers(outbound.headers)}
        if outbound.method in BODY_METHODS and outbound.body is not None:
            if isinstance(outbound.body, str):
                kwargs["content"] = outbound.body
            else:
                kwargs["json"] = outbound.body
        return self._client.build_request(outbound.method, outbound.url, **kwargs)

    def _send(self, outbound: OutboundRequest) -> httpx.Response:
        """Build and send the call; any failure to get a response is a TransportError."""
        try:
            # Header and body encoding happen while the request is built.
            return self._client.send(self._build_request(outbound))
        except REQUEST_FAILURES as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

    def execute_and_save(self, db: Session, outbound: OutboundRequest) -> ExecutionResult:
        started = time.perf_counter()
        try:
            response = self._send(outbound)
        except TransportError as exc:
            status_code = TRANSPORT_FAILURE_STATUS
            response_data: Any = {"error": exc.message}
            response_time_ms = _elapsed_ms(started)
            logger.warning(
                "request_transport_failed owner_id=%s method=%s url=%s error=%s duration_ms=%s",
                outbound.owner_id,
                outbound.method,
                outbound.url,
                exc.__cause__.__class__.__name__,
                response_time_ms,
            )
        else:
            status_code = response.status_code
            response_data = _decode_response(response)
            response_time_ms = _elapsed_ms(started)
            logger.info(
                "request_executed owner_id=%s method=%s url=%s status=%s duration_ms=%s",
                outbound.owner_id,
                outbound.method,
                outbound.url,
                status_code,
                response_time_ms,
            )

        record = models.ApiRequest(
            user_id=outbound.owner_id,
            method=outbound.method,
            url=outbound.url,
            headers=dict(outbound.headers or {}),
            body=body_for_storage(outbound.body),
            status_code=status_code,
            response_time_ms=response_time_ms,
        )
        db.add(record)
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise StorageError(f"Failed to record request: {exc.__class__.__name__}") from exc
        db.refresh(record)

        return ExecutionResult(
            record_id=record.id,
            status_code=status_code,
            response_time_ms=response_time_ms,
            response_data=response_data,
        )
