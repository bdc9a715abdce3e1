"""Admission registration service layer."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from app.core.logging_safety import safe_log_identifier
from app.db.models import RegistrationRecord
from app.errors import conflict, not_found
from app.repositories.pagination import normalize_page_limit
from app.repositories.registrations import RegistrationRepository
from app.schemas.envelope import Page, PageMeta
from app.schemas.registration import RegistrationCreateRequest, RegistrationOut

logger = logging.getLogger(__name__)

REGISTRATION_NOT_FOUND_MESSAGE = "registration not found"


def to_registration(record: RegistrationRecord) -> RegistrationOut:
    return RegistrationOut.model_validate(record, from_attributes=True)


class RegistrationService:
    def __init__(self, repository: RegistrationRepository) -> None:
        self._repository = repository

    def create_registration(self, request: RegistrationCreateRequest) -> RegistrationOut:
        fields = request.model_dump(mode="python")
        fields["email"] = str(request.email)
        fields["student_type"] = request.student_type.value
        fields["gender"] = request.gender.value

        if self._repository.exists_by_email(fields["email"]):
            raise conflict("registration with this email already exists")
        if self._repository.exists_by_nisn(request.nisn):
            raise conflict("registration with this nisn already exists")

        try:
            record = self._repository.create(**fields)
        except IntegrityError as exc:
            raise conflict("registration with this email or nisn already exists") from exc

        logger.info(
            "registration.created registration_id=%s email=%s student_type=%s",
            record.id,
            safe_log_identifier(record.email, prefix="email"),
            record.student_type,
        )
        return to_registration(record)

    def list_registrations(self, *, page: int, limit: int) -> Page[RegistrationOut]:
        page, limit, _ = normalize_page_limit(page, limit)
        records, total = self._repository.list_page(page=page, limit=limit)
        return Page[RegistrationOut](
            items=[to_registration(record) for record in records],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    def get_registration(self, registration_id: int) -> RegistrationOut:
        record = self._repository.get(registration_id)
        if record is None:
            raise not_found(REGISTRATION_NOT_FOUND_MESSAGE)
        return to_registration(record)

    def delete_registration(self, registration_id: int) -> None:
        record = self._repository.get(registration_id)
        if record is None:
            raise not_found(REGISTRATION_NOT_FOUND_MESSAGE)
        self._repository.delete(record)
        logger.info("registration.deleted registration_id=%s", registration_id)
