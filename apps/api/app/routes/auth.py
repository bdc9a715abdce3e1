"""Login route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.routes.dependencies import get_auth_service
from app.schemas.auth import LoginRequest, LoginResult
from app.schemas.envelope import SuccessResponse
from app.schemas.error import ErrorResponse
from app.services.auth import AuthService

router = APIRouter(tags=["Auth"])


@router.post(
    "/auth/login",
    response_model=SuccessResponse[LoginResult],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> SuccessResponse[LoginResult]:
    result = service.authenticate(email=str(body.email), password=body.password)
    return SuccessResponse[LoginResult](message="login successful", data=result)
