from fastapi import APIRouter

from directory_admin.api.routers import (
    admin_users,
    analytics,
    auth,
    clinics,
    doctors,
    super_admins,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(admin_users.router)
api_router.include_router(super_admins.router)
api_router.include_router(doctors.router)
api_router.include_router(clinics.router)
api_router.include_router(users.router)
api_router.include_router(analytics.router)
