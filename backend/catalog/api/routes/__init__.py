"""Router aggregations for public API endpoints."""

from fastapi import APIRouter

from catalog.api.routes import categories, health, products
from catalog.core.config import settings

# Health router (no prefix)
root_router = APIRouter()
root_router.include_router(health.router, tags=["health"])

# Versioned API routers
api_router = APIRouter(prefix=settings.api_v1_prefix)
api_router.include_router(products.router)
api_router.include_router(categories.router)

__all__ = ["api_router", "root_router"]
