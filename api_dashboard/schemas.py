from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, field_validator

from api_dashboard.passwords import MAX_PASSWORD_BYTES
from api_dashboard.validators import is_valid_email, normalize_email

MIN_PASSWORD_LENGTH = 6


def _check_email(value: str) -> str:
    normalized = normalize_email(value)
    if not is_valid_email(normalized):
        raise ValueError("A valid email is required.")
    return normalized


def _check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.")
    return value


EmailAddress = Annotated[str, Field(max_length=255), AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(_check_password)]


class RegisterRequest(BaseModel):
    name: str = Field(max_length=100)
    email: EmailAddress
    password: Password

    @field_validator("name")
    @classmethod
    def name_has_two_characters(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters long.")
        return value


class LoginRequest(BaseModel):
    email: EmailAddress
    password: Password


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    token: str
    user: UserRead


class MeResponse(BaseModel):
    user: UserRead


class RequestSend(BaseModel):
    method: str | None = None
    url: str | None = None
    headers: Any = Field(default=None, description="JSON object or JSON text")
    body: Any = Field(default=None, description="Any JSON value or JSON text")


class RequestHistoryUpdate(RequestSend):
    id: int = Field(ge=1)


class RequestHistoryDelete(BaseModel):
    id: int = Field(ge=1)


class RequestSendResponse(BaseModel):
    id: int
    status_code: int
    response_time_ms: int
    response_data: Any = None


class ApiRequestRead(BaseModel):
    id: int
    user_id: int
    method: str
    url: str
    headers: dict[str, Any]
    body: Any = None
    status_code: int
    response_time_ms: int
    created_at: datetime

    model_config = {"from_attributes": True}


class RequestHistoryResponse(BaseModel):
    items: list[ApiRequestRead]


class RequestHistoryUpdateResponse(BaseModel):
    message: str
    item: ApiRequestRead


class MessageResponse(BaseModel):
    message: str
