"""Contact message routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.routes.dependencies import PageParams, get_contact_service, get_page_params
from app.schemas.contact import ContactOut, ContactRequest
from app.schemas.envelope import MessageResponse, Page, SuccessResponse
from app.schemas.error import ErrorResponse
from app.services.contacts import ContactService

router = APIRouter(tags=["Contacts"])
admin_router = APIRouter(tags=["Contacts (Admin)"])

ContactId = Annotated[int, Path(alias="id", gt=0)]


@router.post(
    "/contacts",
    response_model=SuccessResponse[ContactOut],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_contact(
    body: ContactRequest,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> SuccessResponse[ContactOut]:
    return SuccessResponse[ContactOut](message="message sent", data=service.create_contact(body))


@admin_router.get("/contacts", response_model=SuccessResponse[Page[ContactOut]])
def list_contacts(
    pagination: Annotated[PageParams, Depends(get_page_params)],
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> SuccessResponse[Page[ContactOut]]:
    contacts = service.list_contacts(page=pagination.page, limit=pagination.limit)
    return SuccessResponse[Page[ContactOut]](message="contacts retrieved", data=contacts)


@admin_router.get(
    "/contacts/{id}",
    response_model=SuccessResponse[ContactOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_contact(
    contact_id: ContactId,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> SuccessResponse[ContactOut]:
    return SuccessResponse[ContactOut](message="contact retrieved", data=service.get_contact(contact_id))


@admin_router.put(
    "/contacts/{id}",
    response_model=SuccessResponse[ContactOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def update_contact(
    contact_id: ContactId,
    body: ContactRequest,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> SuccessResponse[ContactOut]:
    return SuccessResponse[ContactOut](message="contact updated", data=service.update_contact(contact_id, body))


@admin_router.delete(
    "/contacts/{id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_contact(
    contact_id: ContactId,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> MessageResponse:
    service.delete_contact(contact_id)
    return MessageResponse(message="contact deleted")
