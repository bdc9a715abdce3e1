"""The ``/admin`` route group; every route behind it needs an admin or superadmin token."""

from fastapi import APIRouter, Depends

from app.routes.admins import profile_router
from app.routes.admins import router as admins_router
from app.routes.articles import admin_router as articles_admin_router
from app.routes.contacts import admin_router as contacts_admin_router
from app.routes.dependencies import require_roles
from app.routes.registrations import admin_router as registrations_admin_router
from app.schemas.admin import Role
from app.schemas.error import ErrorResponse

router = APIRouter(
    prefix="/admin",
    dependencies=[Depends(require_roles(Role.ADMIN, Role.SUPERADMIN))],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
router.include_router(profile_router)
router.include_router(articles_admin_router)
router.include_router(registrations_admin_router)
router.include_router(contacts_admin_router)
# Superadmin check runs after the group check above.
router.include_router(admins_router)
