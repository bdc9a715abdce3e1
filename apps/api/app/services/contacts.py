"""Contact message service layer."""

import logging

from app.core.logging_safety import safe_log_identifier
from app.db.models import ContactRecord
from app.errors import not_found
from app.repositories.contacts import ContactRepository
from app.repositories.pagination import normalize_page_limit
from app.schemas.contact import ContactOut, ContactRequest
from app.schemas.envelope import Page, PageMeta

logger = logging.getLogger(__name__)

CONTACT_NOT_FOUND_MESSAGE = "contact not found"


def to_contact(record: ContactRecord) -> ContactOut:
    return ContactOut.model_validate(record, from_attributes=True)


class ContactService:
    def __init__(self, repository: ContactRepository) -> None:
        self._repository = repository

    def create_contact(self, request: ContactRequest) -> ContactOut:
        record = self._repository.create(
            email=str(request.email),
            subject=request.subject,
            message=request.message,
        )
        logger.info(
            "contact.created contact_id=%s email=%s",
            record.id,
            safe_log_identifier(record.email, prefix="email"),
        )
        return to_contact(record)

    def list_contacts(self, *, page: int, limit: int) -> Page[ContactOut]:
        page, limit, _ = normalize_page_limit(page, limit)
        records, total = self._repository.list_page(page=page, limit=limit)
        return Page[ContactOut](
            items=[to_contact(record) for record in records],
            meta=PageMeta(page=page, limit=limit, total=total),
        )

    def get_contact(self, contact_id: int) -> ContactOut:
        record = self._repository.get(contact_id)
        if record is None:
            raise not_found(CONTACT_NOT_FOUND_MESSAGE)
        return to_contact(record)

    def update_contact(self, contact_id: int, request: ContactRequest) -> ContactOut:
        record = self._repository.get(contact_id)
        if record is None:
            raise not_found(CONTACT_NOT_FOUND_MESSAGE)

        record.email = str(request.email)
        record.subject = request.subject
        record.message = request.message
        self._repository.save(record)
        logger.info("contact.updated contact_id=%s", record.id)
        return to_contact(record)

    def delete_contact(self, contact_id: int) -> None:
        record = self._repository.get(contact_id)
        if record is None:
            raise not_found(CONTACT_NOT_FOUND_MESSAGE)
        self._repository.delete(record)
        logger.info("contact.deleted contact_id=%s", contact_id)
