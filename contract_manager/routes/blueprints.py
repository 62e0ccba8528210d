"""
Blueprint API routes.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.base import get_db
from ..responses import success
from ..schemas.blueprint import BlueprintCreate, BlueprintUpdate
from ..services.blueprints import BlueprintService

router = APIRouter(prefix="/blueprints", tags=["blueprints"])


@router.get("")
async def list_blueprints(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """List Blueprints with their fields and contract counts."""
    service = BlueprintService(db)
    blueprints = service.list(limit=limit, offset=offset)
    return success(
        [b.to_dict(contract_count=service.contract_count(b.id)) for b in blueprints]
    )


@router.get("/{blueprint_id}")
async def get_blueprint(
    blueprint_id: str,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Get a Blueprint by ID."""
    service = BlueprintService(db)
    blueprint = service.require(blueprint_id)
    return success(blueprint.to_dict(contract_count=service.contract_count(blueprint.id)))


@router.post("", status_code=201)
async def create_blueprint(
    blueprint: BlueprintCreate,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Create a new Blueprint with at least one field."""
    db_blueprint = BlueprintService(db).create(blueprint)
    return success(db_blueprint.to_dict(contract_count=0))


@router.put("/{blueprint_id}")
async def update_blueprint(
    blueprint_id: str,
    blueprint: BlueprintUpdate,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Update a Blueprint.

    Fields can only be replaced while no contract uses the blueprint.
    """
    service = BlueprintService(db)
    db_blueprint = service.update(blueprint_id, blueprint)
    return success(
        db_blueprint.to_dict(contract_count=service.contract_count(db_blueprint.id))
    )


@router.delete("/{blueprint_id}")
async def delete_blueprint(
    blueprint_id: str,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Delete a Blueprint that has no contracts."""
    BlueprintService(db).delete(blueprint_id)
    return success({"success": True})
