"""Google Cloud Storage adapter."""

from __future__ import annotations

from datetime import timedelta
import logging
from typing import BinaryIO

from google.api_core import exceptions as google_exceptions
from google.cloud import storage
import requests

from app.adapters.storage.base import (
    ObjectStorage,
    StorageNotConfiguredError,
    StorageTimeoutError,
    StorageUploadError,
)

logger = logging.getLogger(__name__)

PUBLIC_URL_BASE = "https://storage.googleapis.com"


class GcsObjectStorage(ObjectStorage):
    """Stores objects in a single bucket.

    Public buckets return ``https://storage.googleapis.com/<bucket>/<object>`` from
    ``upload``; private buckets return the object name and need ``sign`` for reads.
    """

    def __init__(self, client: storage.Client | None, bucket_name: str | None, *, public: bool = True) -> None:
        self._client = client
        self._bucket_name = bucket_name or ""
        self._public = public

    def _bucket(self) -> storage.Bucket:
        if self._client is None or not self._bucket_name:
            raise StorageNotConfiguredError("gcs storage is not configured")
        return self._client.bucket(self._bucket_name)

    def _public_url(self, object_name: str) -> str:
        return f"{PUBLIC_URL_BASE}/{self._bucket_name}/{object_name}"

    def upload(
        self,
        stream: BinaryIO,
        object_name: str,
        *,
        content_type: str | None = None,
        timeout: float | None = None,
    ) -> str:
        blob = self._bucket().blob(object_name)
        try:
            blob.upload_from_file(stream, content_type=content_type, rewind=True, timeout=timeout)
        except (requests.exceptions.Timeout, google_exceptions.DeadlineExceeded) as exc:
            logger.warning(
                "storage.upload_timeout bucket=%s object=%s timeout=%s",
                self._bucket_name,
                object_name,
                timeout,
            )
            raise StorageTimeoutError(f"upload timed out: {object_name}") from exc
        except (google_exceptions.GoogleAPIError, requests.exceptions.RequestException, OSError) as exc:
            logger.error(
                "storage.upload_failed bucket=%s object=%s error=%s",
                self._bucket_name,
                object_name,
                type(exc).__name__,
            )
            raise StorageUploadError(f"upload failed: {object_name}") from exc

        if self._public:
            url = self._public_url(object_name)
            logger.info("storage.uploaded bucket=%s object=%s visibility=public", self._bucket_name, object_name)
            return url

        logger.info("storage.uploaded bucket=%s object=%s visibility=private", self._bucket_name, object_name)
        return object_name

    def sign(self, object_name: str, ttl: timedelta) -> str:
        bucket = self._bucket()
        if self._public:
            return self._public_url(object_name)

        try:
            return bucket.blob(object_name).generate_signed_url(version="v4", expiration=ttl, method="GET")
        except (google_exceptions.GoogleAPIError, AttributeError, ValueError) as exc:
            # AttributeError/ValueError: credentials without a private key cannot sign.
            logger.error(
                "storage.sign_failed bucket=%s object=%s error=%s",
                self._bucket_name,
                object_name,
                type(exc).__name__,
            )
            raise StorageUploadError(f"signing failed: {object_name}") from exc


def build_object_storage(bucket_name: str | None, *, project: str | None = None) -> GcsObjectStorage:
    """Create the storage adapter; without a bucket every call raises ``StorageNotConfiguredError``."""
    if not bucket_name:
        logger.warning("storage.config public_bucket is empty; article uploads are disabled")
        return GcsObjectStorage(None, None)

    client = storage.Client(project=project) if project else storage.Client()
    logger.info("storage.config bucket=%s", bucket_name)
    return GcsObjectStorage(client, bucket_name, public=True)


__all__ = ["GcsObjectStorage", "build_object_storage"]
