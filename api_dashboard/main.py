from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api_dashboard import schemas
from api_dashboard.accounts import AccountService
from api_dashboard.auth import AuthConfigurationError
from api_dashboard.api_ui import API_UI_HTML
from api_dashboard.config import Settings, get_settings
from api_dashboard.db import get_session, init_db
from api_dashboard.errors import ApiDashboardError, ErrorKind, NotFoundError
from api_dashboard.executor import OutboundRequest, RequestExecutor
from api_dashboard.history import HistoryStore
from api_dashboard.permissions import get_current_user_id
from api_dashboard.validators import validate_request_description

logger = logging.getLogger("api_dashboard.api")

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.validation: 400,
    ErrorKind.auth: 401,
    ErrorKind.conflict: 409,
    ErrorKind.not_found: 404,
    ErrorKind.transport: 502,
    ErrorKind.storage: 500,
}
_GENERIC_SERVER_ERROR = "Internal server error"


def _validate_runtime_configuration(settings: Settings) -> None:
    safety_errors = settings.production_safety_errors()
    if not safety_errors:
        return

    for error in safety_errors:
        logger.error("unsafe_production_config error=%s", error)
    raise RuntimeError("Unsafe production configuration; see logs for details")


@asynccontextmanager
async def lifespan(app_: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    _validate_runtime_configuration(settings)
    init_db()

    with RequestExecutor(timeout=settings.request_timeout_sec) as executor:
        app_.state.request_executor = executor
        logger.info("API Dashboard startup complete")
        yield


app = FastAPI(
    title="API Dashboard",
    version="0.1.0",
    description=(
        "Build HTTP requests, execute them server-side against external endpoints, "
        "and keep a per-user history of every execution."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().parsed_cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID", "").strip() or uuid.uuid4().hex
    start = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.exception(
            "request_failed method=%s path=%s request_id=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            request_id,
            duration_ms,
        )
        raise

    duration_ms = (time.perf_counter() - start) * 1000.0
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_completed method=%s path=%s status=%s request_id=%s duration_ms=%.2f",
        request.method,
        request.url.path,
        response.status_code,
        request_id,
        duration_ms,
    )
    return response


@app.exception_handler(ApiDashboardError)
async def api_dashboard_error_handler(request: Request, exc: ApiDashboardError) -> JSONResponse:
    status_code = _STATUS_BY_KIND[exc.kind]
    if exc.kind is ErrorKind.storage:
        logger.error("storage_error path=%s error=%s", request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"detail": _GENERIC_SERVER_ERROR})

    content: dict[str, object] = {"detail": exc.message}
    if exc.errors:
        content["errors"] = exc.errors
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.auth else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _format_validation_errors(errors: list[dict]) -> list[str]:
    messages: list[str] = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return messages


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_BY_KIND[ErrorKind.validation],
        content={"detail": "Validation failed", "errors": _format_validation_errors(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("storage_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=_STATUS_BY_KIND[ErrorKind.storage],
        content={"detail": _GENERIC_SERVER_ERROR},
    )


@app.exception_handler(AuthConfigurationError)
async def auth_configuration_error_handler(request: Request, exc: AuthConfigurationError) -> JSONResponse:
    logger.error("auth_configuration_error path=%s error=%s", request.url.path, exc)
    return JSONResponse(
        status_code=_STATUS_BY_KIND[ErrorKind.storage],
        content={"detail": _GENERIC_SERVER_ERROR},
    )


def get_request_executor(request: Request) -> RequestExecutor:
    """The process-wide executor opened in ``lifespan``."""
    return request.app.state.request_executor


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health/live")
def health_live() -> dict[str, str]:
    return {"status": "live"}


@app.get("/health/ready")
def health_ready(db: Session = Depends(get_session)) -> dict[str, str]:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        raise HTTPException(status_code=503, detail="Database not ready")
    return {"status": "ready"}


@app.get("/ui", response_class=HTMLResponse)
def api_ui() -> str:
    return API_UI_HTML


@app.post("/auth/register", response_model=schemas.AuthResponse, status_code=201)
def register(
    payload: schemas.RegisterRequest,
    db: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> schemas.AuthResponse:
    issued = AccountService(db, settings).register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return schemas.AuthResponse(token=issued.token, user=issued.user)


@app.post("/auth/login", response_model=schemas.AuthResponse)
def login(
    payload: schemas.LoginRequest,
    db: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> schemas.AuthResponse:
    issued = AccountService(db, settings).login(email=payload.email, password=payload.password)
    return schemas.AuthResponse(token=issued.token, user=issued.user)


@app.get("/auth/me", response_model=schemas.MeResponse)
def auth_me(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> schemas.MeResponse:
    user = AccountService(db, settings).get_user(user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return schemas.MeResponse(user=user)


@app.post("/request/send", response_model=schemas.RequestSendResponse)
def send_request(
    payload: schemas.RequestSend,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
    executor: RequestExecutor = Depends(get_request_executor),
) -> schemas.RequestSendResponse:
    description = validate_request_description(
        method=payload.method,
        url=payload.url,
        headers=payload.headers,
        body=payload.body,
    )
    result = executor.execute_and_save(
        db,
        OutboundRequest(
            owner_id=user_id,
            method=description.method,
            url=description.url,
            headers=description.headers,
            body=description.body,
        ),
    )
    return schemas.RequestSendResponse(
        id=result.record_id,
        status_code=result.status_code,
        response_time_ms=result.response_time_ms,
        response_data=result.response_data,
    )


@app.get("/request/history", response_model=schemas.RequestHistoryResponse)
def request_history(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
) -> schemas.RequestHistoryResponse:
    return schemas.RequestHistoryResponse(items=HistoryStore(db).list(user_id))


@app.post("/request/history/update", response_model=schemas.RequestHistoryUpdateResponse)
def update_request_history(
    payload: schemas.RequestHistoryUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
) -> schemas.RequestHistoryUpdateResponse:
    description = validate_request_description(
        method=payload.method,
        url=payload.url,
        headers=payload.headers,
        body=payload.body,
    )
    record = HistoryStore(db).update(
        payload.id,
        user_id,
        method=description.method,
        url=description.url,
        headers=description.headers,
        body=description.body,
    )
    if record is None:
        raise NotFoundError("Request not found")
    return schemas.RequestHistoryUpdateResponse(message="Request updated", item=record)


@app.post("/request/history/delete", response_model=schemas.MessageResponse)
def delete_request_history(
    payload: schemas.RequestHistoryDelete,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_session),
) -> schemas.MessageResponse:
    if not HistoryStore(db).delete(payload.id, user_id):
        raise NotFoundError("Request not found")
    return schemas.MessageResponse(message="Request deleted")
