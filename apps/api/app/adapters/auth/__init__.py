"""Auth adapters."""

from .base import AuthVerificationError, TokenIssuer, TokenVerifier
from .jwt_auth import JwtTokenService
from .passwords import hash_password, verify_password

__all__ = [
    "AuthVerificationError",
    "JwtTokenService",
    "TokenIssuer",
    "TokenVerifier",
    "hash_password",
    "verify_password",
]
