"""Article media uploads and signed reads."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
import logging
from typing import BinaryIO

from app.adapters.storage import (
    ObjectStorage,
    StorageError,
    StorageNotConfiguredError,
    StorageTimeoutError,
)
from app.domain.upload_keys import content_object_name, extract_upload_key, header_object_name
from app.errors import ApiError
from app.schemas.article import MediaUrl
from app.schemas.error import ErrorKind

logger = logging.getLogger(__name__)

STORAGE_NOT_CONFIGURED_MESSAGE = "storage not configured: set DARULABROR_PUBLIC_BUCKET to enable uploads"


@dataclass(frozen=True)
class FilePart:
    """A file field read from a multipart form."""

    field_name: str
    filename: str | None
    content_type: str | None
    stream: BinaryIO


class ArticleMediaUploader:
    """Uploads article attachments sequentially; the first failure aborts the request.

    Objects stored before a failure are left in the bucket.
    """

    def __init__(self, storage: ObjectStorage, *, timeout: float | None) -> None:
        self._storage = storage
        self._timeout = timeout

    def upload_content_files(self, parts: Iterable[FilePart]) -> dict[str, str]:
        """Upload every keyed ``content_files[<key>]`` part and return ``{key: url}``.

        Parts with other field names are skipped, and only the first part for a
        given key is uploaded.
        """
        urls: dict[str, str] = {}
        for part in parts:
            key = extract_upload_key(part.field_name)
            if key is None:
                continue
            if key in urls:
                logger.info("media.duplicate_key_ignored field=%s", part.field_name)
                continue
            urls[key] = self._upload(part, content_object_name(key, part.filename))
        return urls

    def upload_header(self, part: FilePart) -> str:
        return self._upload(part, header_object_name(part.filename))

    def _upload(self, part: FilePart, object_name: str) -> str:
        try:
            return self._storage.upload(
                part.stream,
                object_name,
                content_type=part.content_type,
                timeout=self._timeout,
            )
        except StorageNotConfiguredError as exc:
            logger.warning("media.upload_rejected field=%s reason=storage_not_configured", part.field_name)
            raise ApiError(ErrorKind.STORAGE_NOT_CONFIGURED, STORAGE_NOT_CONFIGURED_MESSAGE) from exc
        except StorageTimeoutError as exc:
            logger.warning("media.upload_timeout field=%s object=%s", part.field_name, object_name)
            raise ApiError(ErrorKind.UPLOAD_TIMEOUT, "upload timed out, please retry") from exc
        except StorageError as exc:
            logger.error(
                "media.upload_failed field=%s object=%s error=%s",
                part.field_name,
                object_name,
                type(exc).__name__,
            )
            raise ApiError(ErrorKind.UPLOAD_FAILED, "failed to upload file") from exc


class MediaService:
    def __init__(self, storage: ObjectStorage, *, ttl: timedelta) -> None:
        self._storage = storage
        self._ttl = ttl

    def signed_url(self, object_name: str) -> MediaUrl:
        object_name = object_name.strip()
        if not object_name:
            raise ApiError(ErrorKind.BAD_REQUEST, "object_name is required")

        try:
            url = self._storage.sign(object_name, self._ttl)
        except StorageNotConfiguredError as exc:
            raise ApiError(ErrorKind.STORAGE_NOT_CONFIGURED, STORAGE_NOT_CONFIGURED_MESSAGE) from exc
        except StorageError as exc:
            logger.error("media.sign_failed object=%s error=%s", object_name, type(exc).__name__)
            raise ApiError(ErrorKind.INTERNAL_ERROR, "failed to sign media url") from exc

        return MediaUrl(object_name=object_name, url=url)
