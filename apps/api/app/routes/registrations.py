"""Admission registration routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.routes.dependencies import PageParams, get_page_params, get_registration_service
from app.schemas.envelope import MessageResponse, Page, SuccessResponse
from app.schemas.error import ErrorResponse
from app.schemas.registration import RegistrationCreateRequest, RegistrationOut
from app.services.registrations import RegistrationService

router = APIRouter(tags=["Registrations"])
admin_router = APIRouter(tags=["Registrations (Admin)"])

RegistrationId = Annotated[int, Path(alias="id", gt=0)]


@router.post(
    "/registrations",
    response_model=SuccessResponse[RegistrationOut],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_registration(
    body: RegistrationCreateRequest,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> SuccessResponse[RegistrationOut]:
    return SuccessResponse[RegistrationOut](message="registration submitted", data=service.create_registration(body))


@admin_router.get("/registrations", response_model=SuccessResponse[Page[RegistrationOut]])
def list_registrations(
    pagination: Annotated[PageParams, Depends(get_page_params)],
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> SuccessResponse[Page[RegistrationOut]]:
    registrations = service.list_registrations(page=pagination.page, limit=pagination.limit)
    return SuccessResponse[Page[RegistrationOut]](message="registrations retrieved", data=registrations)


@admin_router.get(
    "/registrations/{id}",
    response_model=SuccessResponse[RegistrationOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_registration(
    registration_id: RegistrationId,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> SuccessResponse[RegistrationOut]:
    return SuccessResponse[RegistrationOut](
        message="registration retrieved",
        data=service.get_registration(registration_id),
    )


@admin_router.delete(
    "/registrations/{id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_registration(
    registration_id: RegistrationId,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> MessageResponse:
    service.delete_registration(registration_id)
    return MessageResponse(message="registration deleted")
