"""bcrypt password hashing."""

import bcrypt

# bcrypt only looks at the first 72 bytes and recent releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password must not be blank")
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


__all__ = ["hash_password", "verify_password"]
