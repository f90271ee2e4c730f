# portal/api/v1/router.py
from fastapi import APIRouter

from .endpoints import admin, auth_pages, customer, health, operator
from .endpoints.profile import profile_router

# === Portal pages ===
api_router = APIRouter()

# system health
api_router.include_router(health.router, prefix="/health", tags=["health"])

# landing, login, signup, password reset, logout
api_router.include_router(auth_pages.router)

# guarded sections, each with its own profile page
api_router.include_router(admin.router, prefix="/admin")
api_router.include_router(profile_router("admin"), prefix="/admin")

api_router.include_router(operator.router, prefix="/operator")
api_router.include_router(profile_router("operator"), prefix="/operator")

api_router.include_router(customer.router, prefix="/customer")
api_router.include_router(profile_router("customer"), prefix="/customer")
