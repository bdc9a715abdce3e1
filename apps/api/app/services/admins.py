"""Administrator account management."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from app.adapters.auth import hash_password
from app.core.logging_safety import safe_log_identifier
from app.db.models import AdminRecord
from app.errors import conflict, not_found
from app.repositories.admins import AdminRepository
from app.repositories.pagination import normalize_page_limit
from app.schemas.admin import AdminCreateRequest, AdminOut, AdminUpdateRequest
from app.schemas.envelope import Page, PageMeta

logger = logging.getLogger(__name__)

ADMIN_CONFLICT_MESSAGE = "admin with the same username or email already exists"
ADMIN_NOT_FOUND_MESSAGE = "admin not found"


def to_admin(record: AdminRecord) -> AdminOut:
    return AdminOut.model_validate(record, from_attributes=True)


class AdminService:
    def __init__(self, repository: AdminRepository) -> None:
        self._repository = repository

    def create_admin(self, request: AdminCreateRequest) -> AdminOut:
        email = str(request.email)
        if self._repository.find_conflicting(username=request.username, email=email) is not None:
            raise conflict(ADMIN_CONFLICT_MESSAGE)

        try:
            record = self._repository.create(
                username=request.username,
                email=email,
                password_hash=hash_password(request.password),
                role=request.role.value,
                is_active=request.is_active,
            )
        except IntegrityError as exc:
            # Lost a race against a concurrent insert.
            raise conflict(ADMIN_CONFLICT_MESSAGE) from exc

        logger.info(
            "admin.created admin_id=%s email=%s role=%s",
            record.id,
            safe_log_identifier(email, prefix="email"),
            record.role,
        )
        return to_admin(record)

    def list_admins(self, *, page: int, limit: int) -> Page[AdminOut]:
        page, limit, _ = normalize_page_limit(page, limit)
        records, total = self._repository.list_page(page=page, limit=limit)
        return Page[AdminOut](
            items=[to_admin(record) for record in records],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    def get_admin(self, admin_id: int) -> AdminOut:
        record = self._repository.get(admin_id)
        if record is None:
            raise not_found(ADMIN_NOT_FOUND_MESSAGE)
        return to_admin(record)

    def update_admin(self, admin_id: int, request: AdminUpdateRequest) -> AdminOut:
        record = self._repository.get(admin_id)
        if record is None:
            raise not_found(ADMIN_NOT_FOUND_MESSAGE)

        email = str(request.email)
        if self._repository.find_conflicting(username=request.username, email=email, exclude_id=admin_id) is not None:
            raise conflict(ADMIN_CONFLICT_MESSAGE)

        record.username = request.username
        record.email = email
        record.role = request.role.value
        if request.is_active is not None:
            record.is_active = request.is_active
        if request.password:
            record.password_hash = hash_password(request.password)

        try:
            self._repository.save(record)
        except IntegrityError as exc:
            raise conflict(ADMIN_CONFLICT_MESSAGE) from exc

        logger.info("admin.updated admin_id=%s role=%s active=%s", record.id, record.role, record.is_active)
        return to_admin(record)

    def delete_admin(self, admin_id: int) -> None:
        record = self._repository.get(admin_id)
        if record is None:
            raise not_found(ADMIN_NOT_FOUND_MESSAGE)
        self._repository.delete(record)
        logger.info("admin.deleted admin_id=%s", admin_id)
