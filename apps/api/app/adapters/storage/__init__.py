"""Object storage adapters."""

from .base import (
    ObjectStorage,
    StorageError,
    StorageNotConfiguredError,
    StorageTimeoutError,
    StorageUploadError,
)
from .gcs_storage import GcsObjectStorage, build_object_storage

__all__ = [
    "GcsObjectStorage",
    "ObjectStorage",
    "StorageError",
    "StorageNotConfiguredError",
    "StorageTimeoutError",
    "StorageUploadError",
    "build_object_storage",
]
