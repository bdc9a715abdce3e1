"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from app.schemas.auth import AuthPrincipal


class AuthVerificationError(Exception):
    """Raised when a token cannot be verified or normalized.

    ``public_message`` is safe to return to clients; the exception chain carries the cause.
    """

    def __init__(self, public_message: str, *, reason: str) -> None:
        self.public_message = public_message
        self.reason = reason
        super().__init__(f"{public_message} ({reason})")


class TokenVerifier(ABC):
    """Token verification interface used by the request authenticator."""

    @abstractmethod
    def verify_token(self, token: str) -> AuthPrincipal:
        """Verify token and return normalized principal."""


class TokenIssuer(ABC):
    """Signs time-bound tokens for a principal."""

    @abstractmethod
    def issue_token(self, principal: AuthPrincipal) -> str:
        """Return a signed token embedding the principal's identity and role."""


__all__ = ["AuthVerificationError", "TokenIssuer", "TokenVerifier"]
