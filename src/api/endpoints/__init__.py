"""
API endpoints package.

Combines the public waitlist routes and the admin routes into one router,
mounted under /api by the application.
"""

from fastapi import APIRouter

from src.api.endpoints.admin import router as admin_router
from src.api.endpoints.waitlist import router as waitlist_router

router = APIRouter()
router.include_router(waitlist_router)
router.include_router(admin_router)

__all__ = ["router"]
