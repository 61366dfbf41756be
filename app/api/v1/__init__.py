"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, health, theories

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(theories.router, prefix="/theories", tags=["theories"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
