from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    validation = "validation"
    auth = "auth"
    conflict = "conflict"
    not_found = "not_found"
    transport = "transport"
    storage = "storage"


class ApiDashboardError(Exception):
    """Base error carrying the kind the HTTP boundary maps to a status code."""

    kind: ErrorKind = ErrorKind.storage

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        self.message = message
        self.errors = list(errors or [])
        super().__init__(message)


class ValidationError(ApiDashboardError):
    """Raised when client input is missing or malformed."""

    kind = ErrorKind.validation


class AuthenticationFailedError(ApiDashboardError):
    """Raised for bad credentials or an unusable bearer token."""

    kind = ErrorKind.auth


class ConflictError(ApiDashboardError):
    kind = ErrorKind.conflict


class NotFoundError(ApiDashboardError):
    kind = ErrorKind.not_found


class TransportError(ApiDashboardError):
    """Raised when an outbound call produced no HTTP response."""

    kind = ErrorKind.transport


class StorageError(ApiDashboardError):
    kind = ErrorKind.storage
