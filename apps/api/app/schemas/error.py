"""API error response schemas."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ErrorKind(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    BAD_REQUEST = "BAD_REQUEST"
    UNPROCESSABLE_ENTITY = "UNPROCESSABLE_ENTITY"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORAGE_NOT_CONFIGURED = "STORAGE_NOT_CONFIGURED"
    UPLOAD_TIMEOUT = "UPLOAD_TIMEOUT"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.ACCOUNT_INACTIVE: 403,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNPROCESSABLE_ENTITY: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE_NOT_CONFIGURED: 400,
    ErrorKind.UPLOAD_TIMEOUT: 503,
    ErrorKind.UPLOAD_FAILED: 500,
    ErrorKind.INTERNAL_ERROR: 500,
}


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    code: ErrorKind
    message: str
