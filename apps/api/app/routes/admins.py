"""Administrator account routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.routes.dependencies import (
    PageParams,
    get_admin_service,
    get_authenticated_principal,
    get_page_params,
    require_roles,
)
from app.schemas.admin import AdminCreateRequest, AdminOut, AdminUpdateRequest, Role
from app.schemas.auth import AuthPrincipal
from app.schemas.envelope import MessageResponse, Page, SuccessResponse
from app.schemas.error import ErrorResponse
from app.services.admins import AdminService

profile_router = APIRouter(tags=["Admin"])
router = APIRouter(
    tags=["Admins (Superadmin)"],
    dependencies=[Depends(require_roles(Role.SUPERADMIN))],
    responses={403: {"model": ErrorResponse}},
)

AdminId = Annotated[int, Path(alias="id", gt=0)]


@profile_router.get(
    "/profile",
    response_model=SuccessResponse[AdminOut],
    responses={404: {"model": ErrorResponse}},
)
def get_profile(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> SuccessResponse[AdminOut]:
    return SuccessResponse[AdminOut](message="profile retrieved", data=service.get_admin(principal.identity))


@router.post(
    "/admins",
    response_model=SuccessResponse[AdminOut],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_admin(
    body: AdminCreateRequest,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> SuccessResponse[AdminOut]:
    return SuccessResponse[AdminOut](message="admin created", data=service.create_admin(body))


@router.get("/admins", response_model=SuccessResponse[Page[AdminOut]])
def list_admins(
    pagination: Annotated[PageParams, Depends(get_page_params)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> SuccessResponse[Page[AdminOut]]:
    admins = service.list_admins(page=pagination.page, limit=pagination.limit)
    return SuccessResponse[Page[AdminOut]](message="admins retrieved", data=admins)


@router.put(
    "/admins/{id}",
    response_model=SuccessResponse[AdminOut],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def update_admin(
    admin_id: AdminId,
    body: AdminUpdateRequest,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> SuccessResponse[AdminOut]:
    return SuccessResponse[AdminOut](message="admin updated", data=service.update_admin(admin_id, body))


@router.delete(
    "/admins/{id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_admin(
    admin_id: AdminId,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> MessageResponse:
    service.delete_admin(admin_id)
    return MessageResponse(message="admin deleted")
