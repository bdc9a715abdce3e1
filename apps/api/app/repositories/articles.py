"""Article repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import ArticleRecord
from app.repositories.pagination import paginate

PUBLISHED = "published"


class ArticleRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, *, title: str, author: str, status: str, photo_header: str, content: Any) -> ArticleRecord:
        record = ArticleRecord(
            title=title,
            author=author,
            status=status,
            photo_header=photo_header,
            content=content,
        )
        self._session.add(record)
        self._session.commit()
        return record

    def list_all(self, *, page: int, limit: int) -> tuple[list[ArticleRecord], int]:
        stmt = select(ArticleRecord).order_by(ArticleRecord.id.desc())
        return paginate(self._session, stmt, page=page, limit=limit)

    def list_published(self, *, page: int, limit: int) -> tuple[list[ArticleRecord], int]:
        stmt = select(ArticleRecord).where(ArticleRecord.status == PUBLISHED).order_by(ArticleRecord.id.desc())
        return paginate(self._session, stmt, page=page, limit=limit)

    def get(self, article_id: int) -> ArticleRecord | None:
        return self._session.get(ArticleRecord, article_id)

    def save(self, record: ArticleRecord) -> ArticleRecord:
        self._session.add(record)
        self._session.commit()
        return record

    def delete(self, record: ArticleRecord) -> None:
        self._session.delete(record)
        self._session.commit()
