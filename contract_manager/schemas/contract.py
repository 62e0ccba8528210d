"""
Contract request schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from ..enums import ContractStatus


class ContractValueInput(BaseModel):
    """A value for one blueprint field."""

    model_config = ConfigDict(extra="forbid")

    field_id: constr(min_length=1, max_length=36)
    value: Optional[str] = None


class ContractCreate(BaseModel):
    """Schema for creating a new Contract."""

    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    blueprint_id: constr(min_length=1, max_length=36)
    values: List[ContractValueInput] = Field(default_factory=list)


class ContractStatusUpdate(BaseModel):
    """Schema for requesting a status transition."""

    model_config = ConfigDict(extra="forbid")

    status: ContractStatus
    reason: Optional[constr(max_length=4000)] = None


class ContractValuesUpdate(BaseModel):
    """Schema for upserting contract values."""

    model_config = ConfigDict(extra="forbid")

    values: List[ContractValueInput]
