"""FastAPI application entrypoint."""

from __future__ import annotations

from datetime import timedelta
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters.auth import JwtTokenService
from app.adapters.storage import ObjectStorage, build_object_storage
from app.core.config import Settings, get_settings
from app.core.logging_safety import configure_logging, safe_log_identifier
from app.db.session import create_db_engine, create_session_factory, init_db
from app.errors import ApiError, format_validation_errors
from app.routes import admin_router, articles_router, auth_router, contacts_router, registrations_router
from app.routes.dependencies import get_request_correlation_id
from app.schemas.error import ERROR_STATUS_CODES, ErrorKind, ErrorResponse

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-Id"

_STATUS_ERROR_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.UNPROCESSABLE_ENTITY,
}


def _error_response(status_code: int, kind: ErrorKind, message: str) -> JSONResponse:
    payload = ErrorResponse(code=kind, message=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code >= 500:
        return ErrorKind.INTERNAL_ERROR
    return _STATUS_ERROR_KINDS.get(status_code, ErrorKind.BAD_REQUEST)


def _validation_response(exc: RequestValidationError) -> JSONResponse:
    """Map request validation failures onto the 400/422 split used by the API."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return _error_response(400, ErrorKind.BAD_REQUEST, "invalid body")
    if any(tuple(error.get("loc", ())) == ("body",) for error in errors):
        # The whole body is absent or not an object.
        return _error_response(400, ErrorKind.BAD_REQUEST, "invalid body")
    if any(error.get("loc", ("",))[0] == "path" for error in errors):
        return _error_response(400, ErrorKind.BAD_REQUEST, "invalid id")
    return _error_response(
        ERROR_STATUS_CODES[ErrorKind.UNPROCESSABLE_ENTITY],
        ErrorKind.UNPROCESSABLE_ENTITY,
        format_validation_errors(errors),
    )


def _log_response(request: Request, status_code: int, elapsed_ms: float) -> None:
    principal = getattr(request.state, "auth_principal", None)
    args: tuple = (
        safe_log_identifier(get_request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        status_code,
        round(elapsed_ms, 1),
        safe_log_identifier(principal.identity, prefix="pid") if principal else "-",
        principal.role if principal else "-",
    )
    message = "http.response correlation_id=%s method=%s path=%s status=%s duration_ms=%s principal_id=%s role=%s"
    if status_code >= 500:
        logger.error(message, *args)
    elif status_code >= 400:
        logger.warning(message, *args)
    else:
        logger.info(message, *args)


def create_app(settings: Settings | None = None, *, storage: ObjectStorage | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Darul Abror API", version="1.0.0")

    engine = create_db_engine(settings.database_url)
    init_db(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = JwtTokenService(
        settings.jwt_secret,
        expires_in=timedelta(minutes=settings.jwt_expires_minutes),
    )
    app.state.storage = storage or build_object_storage(settings.public_bucket, project=settings.gcs_project)

    origins = settings.allowed_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["Authorization", "Content-Type", CORRELATION_HEADER],
            expose_headers=[CORRELATION_HEADER],
        )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        correlation_id = get_request_correlation_id(request)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 body is rendered outside this middleware.
            _log_response(request, 500, (time.perf_counter() - started) * 1000)
            raise
        response.headers[CORRELATION_HEADER] = correlation_id
        _log_response(request, response.status_code, (time.perf_counter() - started) * 1000)
        return response

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        return _validation_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "request failed"
        return _error_response(exc.status_code, _kind_for_status(exc.status_code), message.lower())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "http.unhandled_error method=%s path=%s error=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        return _error_response(500, ErrorKind.INTERNAL_ERROR, "internal server error")

    app.include_router(articles_router)
    app.include_router(registrations_router)
    app.include_router(contacts_router)
    app.include_router(auth_router)
    app.include_router(admin_router)

    logger.info(
        "app.started storage_configured=%s auth_configured=%s cors_origins=%s",
        bool(settings.public_bucket) or storage is not None,
        app.state.token_service.configured,
        len(origins),
    )
    return app
