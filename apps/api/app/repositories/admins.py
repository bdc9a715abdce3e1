"""Administrator account repository."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.db.models import AdminRecord
from app.repositories.pagination import paginate


class AdminRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, *, username: str, email: str, password_hash: str, role: str, is_active: bool) -> AdminRecord:
        record = AdminRecord(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=is_active,
        )
        self._session.add(record)
        self._session.commit()
        return record

    def list_page(self, *, page: int, limit: int) -> tuple[list[AdminRecord], int]:
        stmt = select(AdminRecord).order_by(AdminRecord.id.desc())
        return paginate(self._session, stmt, page=page, limit=limit)

    def get(self, admin_id: int) -> AdminRecord | None:
        return self._session.get(AdminRecord, admin_id)

    def get_by_email(self, email: str) -> AdminRecord | None:
        return self._session.scalar(select(AdminRecord).where(AdminRecord.email == email))

    def find_conflicting(self, *, username: str, email: str, exclude_id: int | None = None) -> AdminRecord | None:
        stmt = select(AdminRecord).where(or_(AdminRecord.username == username, AdminRecord.email == email))
        if exclude_id is not None:
            stmt = stmt.where(AdminRecord.id != exclude_id)
        return self._session.scalars(stmt.limit(1)).first()

    def save(self, record: AdminRecord) -> AdminRecord:
        self._session.add(record)
        self._session.commit()
        return record

    def delete(self, record: AdminRecord) -> None:
        self._session.delete(record)
        self._session.commit()
