"""Object storage interfaces."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import BinaryIO


class StorageError(Exception):
    """Base class for object storage failures."""


class StorageNotConfiguredError(StorageError):
    """Raised for every operation when no bucket/client is configured."""


class StorageTimeoutError(StorageError):
    """Raised when a transfer exceeds its timeout; safe for the client to retry."""


class StorageUploadError(StorageError):
    """Raised when a transfer fails for any other reason."""


class ObjectStorage(ABC):
    """Provider-neutral object storage used for article media."""

    @abstractmethod
    def upload(
        self,
        stream: BinaryIO,
        object_name: str,
        *,
        content_type: str | None = None,
        timeout: float | None = None,
    ) -> str:
        """Store ``stream`` under ``object_name`` and return a public URL or the object name."""

    @abstractmethod
    def sign(self, object_name: str, ttl: timedelta) -> str:
        """Return a time-limited URL for reading ``object_name``."""


__all__ = [
    "ObjectStorage",
    "StorageError",
    "StorageNotConfiguredError",
    "StorageTimeoutError",
    "StorageUploadError",
]
