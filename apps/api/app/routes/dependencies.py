"""Dependency wiring for routes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import timedelta
import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Query, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from app.adapters.auth import AuthVerificationError, JwtTokenService
from app.adapters.storage import ObjectStorage
from app.core.config import Settings
from app.core.logging_safety import safe_log_identifier
from app.errors import ApiError
from app.repositories.admins import AdminRepository
from app.repositories.articles import ArticleRepository
from app.repositories.contacts import ContactRepository
from app.repositories.pagination import normalize_page_limit
from app.repositories.registrations import RegistrationRepository
from app.schemas.admin import Role
from app.schemas.auth import AuthPrincipal
from app.schemas.error import ErrorKind
from app.services.admins import AdminService
from app.services.articles import ArticleForm, ArticleService
from app.services.auth import AuthService
from app.services.contacts import ContactService
from app.services.media import ArticleMediaUploader, FilePart, MediaService
from app.services.registrations import RegistrationService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)

PHOTO_HEADER_FILE_FIELD = "photo_header_file"
_ARTICLE_TEXT_FIELDS = ("title", "author", "status", "content", "photo_header")


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_request_correlation_id(request: Request) -> str:
    return _request_correlation_id(request)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> JwtTokenService:
    return request.app.state.token_service


def get_object_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


def get_db_session(request: Request) -> Iterator[Session]:
    session: Session = request.app.state.session_factory()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


async def get_authenticated_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[JwtTokenService, Depends(get_token_service)],
) -> AuthPrincipal:
    """Validate the bearer token and expose the principal to downstream dependencies."""
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials.strip():
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise ApiError(ErrorKind.UNAUTHORIZED, "missing bearer token")

    try:
        principal = verifier.verify_token(credentials.credentials.strip())
    except AuthVerificationError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            exc.reason,
        )
        raise ApiError(ErrorKind.UNAUTHORIZED, exc.public_message) from exc

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.identity, prefix="pid"),
        principal.role,
    )
    # Read back only by the access log.
    request.state.auth_principal = principal
    return principal


def authorize_role(principal: AuthPrincipal | None, allowed_roles: Iterable[Role | str]) -> AuthPrincipal:
    """Pass ``principal`` through when its role is allowed, otherwise raise."""
    if principal is None:
        raise ApiError(ErrorKind.UNAUTHORIZED, "unauthorized")

    allowed = frozenset(role.value if isinstance(role, Role) else role for role in allowed_roles)
    if principal.role not in allowed:
        logger.warning(
            "auth.forbidden principal_id=%s role=%s allowed=%s",
            safe_log_identifier(principal.identity, prefix="pid"),
            principal.role,
            ",".join(sorted(allowed)),
        )
        raise ApiError(ErrorKind.FORBIDDEN, "forbidden")
    return principal


def require_roles(*roles: Role) -> Callable[[AuthPrincipal], AuthPrincipal]:
    """Build a dependency that admits only the given roles; the allow-list is fixed here."""
    allowed = frozenset(roles)

    def dependency(
        principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    ) -> AuthPrincipal:
        return authorize_role(principal, allowed)

    return dependency


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int


def _parse_int(raw: str | None) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def get_page_params(
    page: Annotated[str | None, Query(description="Page number, defaults to 1.")] = None,
    limit: Annotated[str | None, Query(description="Page size, defaults to 10, capped at 100.")] = None,
) -> PageParams:
    """Read pagination; unparsable or out-of-range values fall back to defaults."""
    normalized_page, normalized_limit, _ = normalize_page_limit(_parse_int(page), _parse_int(limit))
    return PageParams(page=normalized_page, limit=normalized_limit)


def _file_part(field_name: str, upload: UploadFile) -> FilePart:
    return FilePart(
        field_name=field_name,
        filename=upload.filename,
        content_type=upload.content_type,
        stream=upload.file,
    )


async def get_article_form(request: Request) -> ArticleForm:
    """Read an article multipart form into an unvalidated ``ArticleForm``."""
    form = await request.form()
    article_form = ArticleForm()
    for field_name, value in form.multi_items():
        if isinstance(value, UploadFile):
            # Browsers send an unnamed empty part for untouched file inputs.
            if not value.filename:
                continue
            if field_name == PHOTO_HEADER_FILE_FIELD:
                if article_form.photo_header_file is None:
                    article_form.photo_header_file = _file_part(field_name, value)
                continue
            article_form.files.append(_file_part(field_name, value))
        elif field_name in _ARTICLE_TEXT_FIELDS and getattr(article_form, field_name) is None:
            setattr(article_form, field_name, value.strip())
    return article_form


def get_article_media_uploader(
    storage: Annotated[ObjectStorage, Depends(get_object_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ArticleMediaUploader:
    return ArticleMediaUploader(storage, timeout=settings.storage_upload_timeout_seconds)


def get_media_service(
    storage: Annotated[ObjectStorage, Depends(get_object_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MediaService:
    return MediaService(storage, ttl=timedelta(minutes=settings.media_url_ttl_minutes))


def get_article_service(
    session: Annotated[Session, Depends(get_db_session)],
    uploader: Annotated[ArticleMediaUploader, Depends(get_article_media_uploader)],
) -> ArticleService:
    return ArticleService(ArticleRepository(session), uploader)


def get_auth_service(
    session: Annotated[Session, Depends(get_db_session)],
    issuer: Annotated[JwtTokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(AdminRepository(session), issuer)


def get_admin_service(session: Annotated[Session, Depends(get_db_session)]) -> AdminService:
    return AdminService(AdminRepository(session))


def get_registration_service(session: Annotated[Session, Depends(get_db_session)]) -> RegistrationService:
    return RegistrationService(RegistrationRepository(session))


def get_contact_service(session: Annotated[Session, Depends(get_db_session)]) -> ContactService:
    return ContactService(ContactRepository(session))
