"""Admission registration repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from app.db.models import RegistrationRecord
from app.repositories.pagination import paginate


class RegistrationRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, **fields: Any) -> RegistrationRecord:
        record = RegistrationRecord(**fields)
        self._session.add(record)
        self._session.commit()
        return record

    def list_page(self, *, page: int, limit: int) -> tuple[list[RegistrationRecord], int]:
        stmt = select(RegistrationRecord).order_by(RegistrationRecord.id.desc())
        return paginate(self._session, stmt, page=page, limit=limit)

    def get(self, registration_id: int) -> RegistrationRecord | None:
        return self._session.get(RegistrationRecord, registration_id)

    def exists_by_email(self, email: str) -> bool:
        return bool(self._session.scalar(select(exists().where(RegistrationRecord.email == email))))

    def exists_by_nisn(self, nisn: str) -> bool:
        return bool(self._session.scalar(select(exists().where(RegistrationRecord.nisn == nisn))))

    def delete(self, record: RegistrationRecord) -> None:
        self._session.delete(record)
        self._session.commit()
