"""
Health and version endpoints.
"""

import importlib.metadata
from typing import Any, Dict

from fastapi import APIRouter

from ..primitives import utc_now
from ..responses import success

router = APIRouter(tags=["system"])


@router.get("/health")
async def health() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return success({"status": "ok", "timestamp": utc_now().isoformat()})


@router.get("/version")
def version() -> Dict[str, Any]:
    """Return the version of the application."""
    return success({"version": importlib.metadata.version("contract-manager")})
