"""
SQLAlchemy models for Contract Manager.

Blueprints own an ordered list of fields. Contracts are instantiated from
exactly one blueprint and hold at most one value per blueprint field.
"""

from typing import Any, Dict, Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    false,
    func,
)
from sqlalchemy.orm import relationship

from ..enums import ContractStatus, FieldType
from ..primitives import generate_ulid, isoformat, utc_now
from .base import Base

# Stored as VARCHAR + CHECK. Each column gets its own type instance so the
# generated CHECK constraints never share a name.
def field_type_enum() -> Enum:
    return Enum(*[t.value for t in FieldType], native_enum=False, create_constraint=True)


def contract_status_enum() -> Enum:
    return Enum(
        *[s.value for s in ContractStatus], native_enum=False, create_constraint=True
    )


class BlueprintModel(Base):
    """A reusable document template."""

    __tablename__ = "blueprints"

    id = Column(String(36), primary_key=True, default=generate_ulid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    fields = relationship(
        "BlueprintFieldModel",
        back_populates="blueprint",
        cascade="all, delete-orphan",
        order_by="BlueprintFieldModel.order_index",
    )
    contracts = relationship("ContractModel", back_populates="blueprint")

    __table_args__ = (Index("ix_blueprints_created_at", "created_at"),)

    def summary(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    def to_dict(self, contract_count: Optional[int] = None) -> Dict[str, Any]:
        """Convert model to dictionary."""
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
        if contract_count is not None:
            data["contract_count"] = contract_count
        return data


class BlueprintFieldModel(Base):
    """A typed, labelled slot within a blueprint."""

    __tablename__ = "blueprint_fields"

    id = Column(String(36), primary_key=True, default=generate_ulid)
    blueprint_id = Column(
        String(36),
        ForeignKey("blueprints.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(field_type_enum(), nullable=False)
    label = Column(String(255), nullable=False)
    # Layout only, not validated
    position_x = Column(Float, nullable=False, default=0, server_default="0")
    position_y = Column(Float, nullable=False, default=0, server_default="0")
    required = Column(Boolean, nullable=False, default=False, server_default=false())
    order_index = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    blueprint = relationship("BlueprintModel", back_populates="fields")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "blueprint_id": self.blueprint_id,
            "type": self.type,
            "label": self.label,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "required": self.required,
            "created_at": isoformat(self.created_at),
        }


class ContractModel(Base):
    """An instantiation of a blueprint moving through the lifecycle."""

    __tablename__ = "contracts"

    id = Column(String(36), primary_key=True, default=generate_ulid)
    name = Column(String(255), nullable=False)
    # Immutable after creation
    blueprint_id = Column(
        String(36), ForeignKey("blueprints.id"), nullable=False, index=True
    )
    status = Column(
        contract_status_enum(),
        nullable=False,
        default=ContractStatus.CREATED.value,
        server_default=ContractStatus.CREATED.value,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    blueprint = relationship("BlueprintModel", back_populates="contracts")
    values = relationship(
        "ContractValueModel",
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="ContractValueModel.created_at",
    )

    __table_args__ = (
        Index("ix_contracts_blueprint_status", "blueprint_id", "status"),
        Index("ix_contracts_created_at", "created_at"),
    )

    def to_dict(self, include_fields: bool = False) -> Dict[str, Any]:
        """Convert model to dictionary.

        ``include_fields`` embeds the blueprint's field definitions, which
        the detail view needs to render the form.
        """
        if include_fields:
            blueprint = self.blueprint.to_dict()
        else:
            blueprint = self.blueprint.summary()
        return {
            "id": self.id,
            "name": self.name,
            "blueprint_id": self.blueprint_id,
            "status": self.status,
            "blueprint": blueprint,
            "values": [v.to_dict() for v in self.values],
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


class ContractValueModel(Base):
    """The value a contract holds for one blueprint field."""

    __tablename__ = "contract_values"

    id = Column(String(36), primary_key=True, default=generate_ulid)
    contract_id = Column(
        String(36),
        ForeignKey("contracts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_id = Column(
        String(36), ForeignKey("blueprint_fields.id"), nullable=False, index=True
    )
    value = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    contract = relationship("ContractModel", back_populates="values")
    field = relationship("BlueprintFieldModel")

    __table_args__ = (
        UniqueConstraint(
            "contract_id", "field_id", name="uq_contract_values_contract_field"
        ),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "field_id": self.field_id,
            "value": self.value,
        }


class ContractAuditLogModel(Base):
    """Append-only record of one accepted status transition.

    ``contract_id`` carries no foreign key so the trail survives the deletion
    of its contract. The integer id increases monotonically and breaks ties
    between entries written within the same timestamp.
    """

    __tablename__ = "contract_audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(String(36), nullable=False, index=True)
    from_status = Column(contract_status_enum(), nullable=False)
    to_status = Column(contract_status_enum(), nullable=False)
    reason = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        index=True,
    )

    __table_args__ = (
        Index("ix_contract_audit_logs_contract_ts", "contract_id", "created_at"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "contract_id": self.contract_id,
            "from_status": self.from_status,
            "to_status": self.to_status,
            "reason": self.reason,
            "created_at": isoformat(self.created_at),
        }
