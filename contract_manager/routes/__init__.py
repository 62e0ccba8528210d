"""
API routers, mounted under the configured prefix.
"""

from fastapi import APIRouter

from .blueprints import router as blueprints_router
from .contracts import router as contracts_router
from .health import router as health_router

api_router = APIRouter()
api_router.include_router(blueprints_router)
api_router.include_router(contracts_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
