"""HS256 JWT issuer/verifier backed by PyJWT."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import logging
from typing import Any

import jwt

from app.adapters.auth.base import AuthVerificationError, TokenIssuer, TokenVerifier
from app.schemas.auth import AuthPrincipal

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
INVALID_TOKEN = "invalid token"
INVALID_TOKEN_CLAIMS = "invalid token claims"


class JwtTokenService(TokenIssuer, TokenVerifier):
    """Signs and verifies ``{admin_id, role, iat, exp}`` tokens with a shared secret.

    An empty secret is accepted so route wiring never fails at startup, but then
    every issue/verify call fails deterministically.
    """

    def __init__(self, secret: str, *, expires_in: timedelta) -> None:
        self._secret = secret
        self._expires_in = expires_in
        if not secret:
            logger.warning("auth.config jwt_secret is empty; every bearer token will be rejected")

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def issue_token(self, principal: AuthPrincipal) -> str:
        if not self._secret:
            raise RuntimeError("jwt secret is not configured")

        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "admin_id": principal.identity,
            "role": principal.role,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> AuthPrincipal:
        if not self._secret:
            raise AuthVerificationError(INVALID_TOKEN, reason="secret_not_configured")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthVerificationError(INVALID_TOKEN, reason="expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise AuthVerificationError(INVALID_TOKEN, reason="bad_signature") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthVerificationError(INVALID_TOKEN, reason=type(exc).__name__) from exc

        admin_id = claims.get("admin_id")
        role = claims.get("role")
        # bool is an int subclass; a True/False admin_id is a malformed claim.
        if not isinstance(admin_id, int) or isinstance(admin_id, bool) or admin_id <= 0:
            raise AuthVerificationError(INVALID_TOKEN_CLAIMS, reason="missing_identity")
        if not isinstance(role, str) or not role.strip():
            raise AuthVerificationError(INVALID_TOKEN_CLAIMS, reason="missing_role")

        return AuthPrincipal(identity=admin_id, role=role.strip())


__all__ = ["JWT_ALGORITHM", "JwtTokenService"]
