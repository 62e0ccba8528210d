"""
Blueprint service.

A blueprint's fields are frozen as soon as one contract references it; from
then on only its name and description may change, and it cannot be deleted.
"""

from typing import Iterable, List, Optional

import structlog
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from ..db.models import BlueprintFieldModel, BlueprintModel, ContractModel
from ..primitives import generate_ulid, utc_now
from ..schemas.blueprint import BlueprintCreate, BlueprintFieldCreate, BlueprintUpdate
from .errors import NotFoundError, ValidationError

logger = structlog.get_logger()


def _build_fields(
    fields: Iterable[BlueprintFieldCreate],
) -> List[BlueprintFieldModel]:
    now = utc_now()
    return [
        BlueprintFieldModel(
            id=generate_ulid(),
            type=field.type.value,
            label=field.label,
            position_x=field.position_x,
            position_y=field.position_y,
            required=field.required,
            order_index=index,
            created_at=now,
        )
        for index, field in enumerate(fields)
    ]


class BlueprintService:
    """Service for managing Blueprints and their fields."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, blueprint_id: str) -> Optional[BlueprintModel]:
        """Get a Blueprint by ID."""
        return (
            self.db.query(BlueprintModel)
            .filter(BlueprintModel.id == blueprint_id)
            .first()
        )

    def require(self, blueprint_id: str) -> BlueprintModel:
        """Get a Blueprint by ID or raise NotFoundError."""
        blueprint = self.get(blueprint_id)
        if blueprint is None:
            raise NotFoundError("Blueprint", blueprint_id)
        return blueprint

    def list(self, limit: int = 100, offset: int = 0) -> List[BlueprintModel]:
        """List Blueprints, newest first."""
        return (
            self.db.query(BlueprintModel)
            .order_by(desc(BlueprintModel.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def contract_count(self, blueprint_id: str) -> int:
        """Number of contracts instantiated from a blueprint."""
        return (
            self.db.query(func.count(ContractModel.id))
            .filter(ContractModel.blueprint_id == blueprint_id)
            .scalar()
        )

    def create(self, data: BlueprintCreate) -> BlueprintModel:
        """Create a Blueprint together with its fields."""
        if not data.fields:
            raise ValidationError("At least one field is required")

        now = utc_now()
        blueprint = BlueprintModel(
            id=generate_ulid(),
            name=data.name,
            description=data.description,
            created_at=now,
            updated_at=now,
        )
        blueprint.fields = _build_fields(data.fields)

        try:
            self.db.add(blueprint)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(blueprint)

        logger.info(
            "blueprint_created",
            blueprint_id=blueprint.id,
            fields=len(blueprint.fields),
        )
        return blueprint

    def update(self, blueprint_id: str, data: BlueprintUpdate) -> BlueprintModel:
        """Update a Blueprint.

        Only keys present in the request are applied. A supplied field list
        replaces every existing field (identities are not preserved), which is
        only allowed while no contract uses the blueprint.
        """
        blueprint = self.require(blueprint_id)
        changes = data.model_dump(exclude_unset=True)

        if "fields" in changes and data.fields is not None:
            if self.contract_count(blueprint_id) > 0:
                raise ValidationError(
                    "Cannot modify fields on a blueprint that has contracts. "
                    "Create a new blueprint instead."
                )

        if "name" in changes and data.name is None:
            raise ValidationError("Name cannot be empty")

        try:
            if "name" in changes:
                blueprint.name = data.name
            if "description" in changes:
                blueprint.description = data.description
            if data.fields is not None:
                blueprint.fields = _build_fields(data.fields)
            blueprint.updated_at = utc_now()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(blueprint)

        logger.info(
            "blueprint_updated",
            blueprint_id=blueprint.id,
            fields_replaced=data.fields is not None,
        )
        return blueprint

    def delete(self, blueprint_id: str) -> None:
        """Hard-delete a Blueprint that no contract references."""
        blueprint = self.require(blueprint_id)

        if self.contract_count(blueprint_id) > 0:
            raise ValidationError("Cannot delete a blueprint that has contracts.")

        try:
            self.db.delete(blueprint)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("blueprint_deleted", blueprint_id=blueprint_id)
