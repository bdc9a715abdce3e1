"""Article service layer."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from typing import Any

from pydantic import ValidationError

from app.db.models import ArticleRecord
from app.domain.content_injector import inject_uploaded_urls
from app.errors import ApiError, format_validation_errors, not_found
from app.repositories.articles import ArticleRepository
from app.repositories.pagination import normalize_page_limit
from app.schemas.article import ArticleOut, ArticleStatus, ArticleWrite
from app.schemas.envelope import Page, PageMeta
from app.schemas.error import ErrorKind
from app.services.media import ArticleMediaUploader, FilePart

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "missing required fields: title, author, content"
MISSING_HEADER_MESSAGE = "photo_header is required (provide photo_header URL or upload photo_header_file)"
ARTICLE_NOT_FOUND_MESSAGE = "article not found"


@dataclass
class ArticleForm:
    """Raw multipart fields of an article write; nothing is validated yet."""

    title: str | None = None
    author: str | None = None
    status: str | None = None
    content: str | None = None
    photo_header: str | None = None
    photo_header_file: FilePart | None = None
    files: list[FilePart] = field(default_factory=list)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def to_article(record: ArticleRecord) -> ArticleOut:
    return ArticleOut.model_validate(record, from_attributes=True)


class ArticleService:
    def __init__(self, repository: ArticleRepository, uploader: ArticleMediaUploader) -> None:
        self._repository = repository
        self._uploader = uploader

    def list_published(self, *, page: int, limit: int) -> Page[ArticleOut]:
        page, limit, _ = normalize_page_limit(page, limit)
        records, total = self._repository.list_published(page=page, limit=limit)
        return Page[ArticleOut](
            items=[to_article(record) for record in records],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    def list_all(self, *, page: int, limit: int) -> Page[ArticleOut]:
        page, limit, _ = normalize_page_limit(page, limit)
        records, total = self._repository.list_all(page=page, limit=limit)
        return Page[ArticleOut](
            items=[to_article(record) for record in records],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    def get_published(self, article_id: int) -> ArticleOut:
        record = self._repository.get(article_id)
        # Drafts are indistinguishable from missing articles on the public surface.
        if record is None or record.status != ArticleStatus.PUBLISHED.value:
            raise not_found(ARTICLE_NOT_FOUND_MESSAGE)
        return to_article(record)

    def create_article(self, form: ArticleForm) -> ArticleOut:
        payload = self._validate(form, default_status=ArticleStatus.DRAFT)
        content, photo_header = self._upload_media(form, payload)

        record = self._repository.create(
            title=payload.title,
            author=payload.author,
            status=payload.status.value,
            photo_header=photo_header,
            content=content,
        )
        logger.info("article.created article_id=%s status=%s", record.id, record.status)
        return to_article(record)

    def update_article(self, article_id: int, form: ArticleForm) -> ArticleOut:
        record = self._repository.get(article_id)
        if record is None:
            raise not_found(ARTICLE_NOT_FOUND_MESSAGE)

        # A blank status keeps the current one.
        payload = self._validate(form, default_status=ArticleStatus(record.status))
        content, photo_header = self._upload_media(form, payload)

        record.title = payload.title
        record.author = payload.author
        record.status = payload.status.value
        record.photo_header = photo_header
        record.content = content
        self._repository.save(record)
        logger.info("article.updated article_id=%s status=%s", record.id, record.status)
        return to_article(record)

    def delete_article(self, article_id: int) -> None:
        record = self._repository.get(article_id)
        if record is None:
            raise not_found(ARTICLE_NOT_FOUND_MESSAGE)
        self._repository.delete(record)
        logger.info("article.deleted article_id=%s", article_id)

    def _validate(self, form: ArticleForm, *, default_status: ArticleStatus) -> ArticleWrite:
        """Check the raw form before any upload is attempted."""
        if not form.title or not form.author or not form.content:
            raise ApiError(ErrorKind.BAD_REQUEST, MISSING_FIELDS_MESSAGE)

        try:
            content = json.loads(form.content, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ApiError(ErrorKind.BAD_REQUEST, "content must be valid JSON") from exc

        photo_header = (form.photo_header or "").strip() or None
        if photo_header is None and form.photo_header_file is None:
            raise ApiError(ErrorKind.BAD_REQUEST, MISSING_HEADER_MESSAGE)

        fields: dict[str, Any] = {
            "title": form.title,
            "author": form.author,
            "status": (form.status or "").strip() or default_status,
            "photo_header": photo_header,
            "content": content,
        }
        try:
            return ArticleWrite.model_validate(fields)
        except ValidationError as exc:
            raise ApiError(ErrorKind.UNPROCESSABLE_ENTITY, format_validation_errors(exc.errors())) from exc

    def _upload_media(self, form: ArticleForm, payload: ArticleWrite) -> tuple[Any, str]:
        urls = self._uploader.upload_content_files(form.files)
        content = inject_uploaded_urls(payload.content, urls)

        photo_header = payload.photo_header
        if form.photo_header_file is not None:
            photo_header = self._uploader.upload_header(form.photo_header_file)
        if not photo_header:
            raise ApiError(ErrorKind.BAD_REQUEST, MISSING_HEADER_MESSAGE)
        return content, photo_header
