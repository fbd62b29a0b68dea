"""API routes for the layout service."""

from fastapi import APIRouter

from freeform.api.routes.health import router as health_router
from freeform.api.routes.layout import router as layout_router

# Main API router
api_router = APIRouter()

api_router.include_router(layout_router, prefix="/layout", tags=["Layout"])

__all__ = ["api_router", "health_router"]
