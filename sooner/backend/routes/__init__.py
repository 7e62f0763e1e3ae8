"""Sooner API Routes Package

This module aggregates all route handlers into a single router
that can be included in the main FastAPI application.
"""

from fastapi import APIRouter

from .admin import router as admin_router
from .assistant import router as assistant_router
from .auth import router as auth_router
from .tasks import router as tasks_router
from .users import router as users_router


# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router, prefix="/user", tags=["user"])
api_router.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
api_router.include_router(assistant_router, prefix="/assistant", tags=["assistant"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])

__all__ = ["api_router"]
