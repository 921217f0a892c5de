"""
FastAPI application and API endpoints.
Layered: API -> service -> repository. DI for connection provider, repositories and services.
"""
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Annotated, List

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.errors import AuthFailure, NotFound, StorageFailure, ValidationFailure
from app.core.health import check_live, check_ready
from app.core.settings import get_settings
from app.db import MySQLConnectionProvider, init_db
from app.deps import get_account_service, get_connection_provider, get_message_service
from app.models import (
    Account,
    AccountCredentials,
    ErrorDetail,
    ErrorResponse,
    Message,
    MessageCreate,
    MessageTextUpdate,
)
from app.services.account_service import AccountService
from app.services.message_service import MessageService
from app.utils.request_logger import log_request

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create database and tables if missing."""
    init_db(MySQLConnectionProvider.from_settings(get_settings()))
    yield


app = FastAPI(
    title="Social Media API",
    description="Account registration/login and message CRUD",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _normalize_detail(detail: object) -> list:
    """Convert FastAPI/HTTPException detail to list of strings for ErrorResponse."""
    if isinstance(detail, str):
        return [detail]
    if isinstance(detail, list):
        out = []
        for d in detail:
            if isinstance(d, str):
                out.append(d)
            elif isinstance(d, dict):
                out.append(d.get("msg", d.get("message", str(d))))
            else:
                out.append(str(d))
        return out if out else ["Error"]
    return [str(detail)]


def _error_response(request: Request, status_code: int, detail: object) -> JSONResponse:
    details = _normalize_detail(detail)
    body = ErrorResponse(
        code=str(status_code),
        message=details[0] if details else "Error",
        details=[ErrorDetail(code=str(status_code), message=d) for d in details],
    )
    payload = body.model_dump()
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        payload["request_id"] = request_id
    response = JSONResponse(status_code=status_code, content=payload)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return structured ErrorResponse for 4xx/5xx. Includes request_id when available."""
    return _error_response(request, exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors (400), same as business rule violations."""
    logger.info("Malformed request on %s: %s", request.url.path, exc.errors())
    return _error_response(request, status.HTTP_400_BAD_REQUEST, list(exc.errors()))


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Set request_id on request.state and add X-Request-ID to response."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    """Add security-related headers to responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    log_request(request, response.status_code, latency_ms)
    return response


def _empty_ok() -> Response:
    """200 with an empty body: how absent messages are reported."""
    return Response(status_code=status.HTTP_200_OK)


# ----- Accounts -----

@app.post("/register", response_model=Account)
def register(
    body: AccountCredentials,
    account_svc: Annotated[AccountService, Depends(get_account_service)],
):
    """Register a new account. 400 if the username is blank or taken, or the password is too short."""
    try:
        return account_svc.register(body)
    except (ValidationFailure, StorageFailure) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@app.post("/login", response_model=Account)
def login(
    body: AccountCredentials,
    account_svc: Annotated[AccountService, Depends(get_account_service)],
):
    """Return the account matching username and password, 401 otherwise."""
    try:
        return account_svc.login(body)
    except (AuthFailure, StorageFailure):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")


# ----- Messages -----

@app.post("/messages", response_model=Message)
def post_message(
    body: MessageCreate,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    try:
        return message_svc.post(body)
    except (ValidationFailure, StorageFailure) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@app.get("/messages", response_model=List[Message])
def list_messages(
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    try:
        return message_svc.get_all()
    except StorageFailure:
        return []


@app.get("/messages/{message_id}", response_model=Message)
def get_message(
    message_id: int,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    """Message JSON, or an empty 200 body when there is no such message."""
    try:
        return message_svc.get_by_id(message_id)
    except (NotFound, StorageFailure):
        return _empty_ok()


@app.delete("/messages/{message_id}", response_model=Message)
def delete_message(
    message_id: int,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    """Deleted message JSON, or an empty 200 body when there was nothing to delete."""
    try:
        return message_svc.delete_by_id(message_id)
    except (NotFound, StorageFailure):
        return _empty_ok()


@app.patch("/messages/{message_id}", response_model=Message)
def update_message(
    message_id: int,
    body: MessageTextUpdate,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    """Replace message_text. 400 if the message does not exist or the text is blank/too long."""
    try:
        return message_svc.update_text_by_id(message_id, body.message_text)
    except (ValidationFailure, StorageFailure) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@app.get("/accounts/{account_id}/messages", response_model=List[Message])
def list_account_messages(
    account_id: int,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    try:
        return message_svc.get_by_account(account_id)
    except StorageFailure:
        return []


# ----- Health -----

@app.get("/health")
def health():
    """Simple health (backward compatible)."""
    return {"status": "ok"}


@app.get("/health/live")
def health_live():
    """Liveness: process is up."""
    return check_live()


@app.get("/health/ready")
def health_ready(
    provider: Annotated[MySQLConnectionProvider, Depends(get_connection_provider)],
):
    """Readiness: DB reachable."""
    return check_ready(provider)
