"""Admin login."""

import logging

from app.adapters.auth import TokenIssuer, verify_password
from app.core.logging_safety import safe_log_identifier
from app.errors import ApiError
from app.repositories.admins import AdminRepository
from app.schemas.admin import AdminOut
from app.schemas.auth import AuthPrincipal, LoginResult
from app.schemas.error import ErrorKind

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repository: AdminRepository, issuer: TokenIssuer) -> None:
        self._repository = repository
        self._issuer = issuer

    def authenticate(self, *, email: str, password: str) -> LoginResult:
        """Check credentials and sign a token; nothing is written."""
        safe_email = safe_log_identifier(email, prefix="email")
        admin = self._repository.get_by_email(email)
        if admin is None or not verify_password(password, admin.password_hash):
            logger.warning("auth.login_rejected email=%s reason=invalid_credentials", safe_email)
            raise ApiError(ErrorKind.INVALID_CREDENTIALS, "invalid credentials")

        if not admin.is_active:
            logger.warning("auth.login_rejected email=%s reason=inactive", safe_email)
            raise ApiError(ErrorKind.ACCOUNT_INACTIVE, "admin is inactive")

        principal = AuthPrincipal(identity=admin.id, role=admin.role)
        try:
            token = self._issuer.issue_token(principal)
        except RuntimeError as exc:
            logger.error("auth.login_failed email=%s reason=%s", safe_email, exc)
            raise ApiError(ErrorKind.INTERNAL_ERROR, "failed to issue token") from exc

        logger.info("auth.login_succeeded admin_id=%s role=%s", admin.id, admin.role)
        return LoginResult(token=token, admin=AdminOut.model_validate(admin, from_attributes=True))
