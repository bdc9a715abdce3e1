"""Application exception types."""

from collections.abc import Iterable, Mapping
from typing import Any

from app.schemas.error import ERROR_STATUS_CODES, ErrorKind, ErrorResponse

# Request-level location prefixes that mean nothing to API clients.
_LOCATION_SOURCES = {"body", "query", "path", "header"}


class ApiError(Exception):
    """Structured API error that maps directly to the error envelope."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.status_code = ERROR_STATUS_CODES[kind]
        self.payload = ErrorResponse(code=kind, message=message)
        super().__init__(message)


def not_found(message: str) -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, message)


def conflict(message: str) -> ApiError:
    return ApiError(ErrorKind.CONFLICT, message)


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render pydantic error dicts as ``field: message; ...``."""
    parts = []
    for error in errors:
        loc = [str(item) for item in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_SOURCES:
            loc = loc[1:]
        location = ".".join(loc)
        message = str(error.get("msg", "invalid value"))
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "validation failed"


__all__ = ["ApiError", "conflict", "format_validation_errors", "not_found"]
