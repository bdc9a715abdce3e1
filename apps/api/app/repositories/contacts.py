"""Contact message repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import ContactRecord
from app.repositories.pagination import paginate


class ContactRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, *, email: str, subject: str, message: str) -> ContactRecord:
        record = ContactRecord(email=email, subject=subject, message=message)
        self._session.add(record)
        self._session.commit()
        return record

    def list_page(self, *, page: int, limit: int) -> tuple[list[ContactRecord], int]:
        stmt = select(ContactRecord).order_by(ContactRecord.id.desc())
        return paginate(self._session, stmt, page=page, limit=limit)

    def get(self, contact_id: int) -> ContactRecord | None:
        return self._session.get(ContactRecord, contact_id)

    def save(self, record: ContactRecord) -> ContactRecord:
        self._session.add(record)
        self._session.commit()
        return record

    def delete(self, record: ContactRecord) -> None:
        self._session.delete(record)
        self._session.commit()
