"""
Blueprint request schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, conlist, constr

from ..enums import FieldType


class BlueprintFieldCreate(BaseModel):
    """A field definition submitted with a blueprint."""

    model_config = ConfigDict(extra="forbid")

    type: FieldType = Field(..., description="Field type")
    label: constr(strip_whitespace=True, min_length=1, max_length=255) = Field(
        ..., description="Label shown next to the field"
    )
    position_x: float = Field(0, description="Horizontal layout position")
    position_y: float = Field(0, description="Vertical layout position")
    required: bool = Field(False, description="Whether contracts must fill it")


class BlueprintCreate(BaseModel):
    """Schema for creating a new Blueprint."""

    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    description: Optional[constr(max_length=16000)] = None
    fields: List[BlueprintFieldCreate] = Field(..., min_length=1)


class BlueprintUpdate(BaseModel):
    """Schema for updating a Blueprint.

    Only keys present in the request are applied. ``fields`` replaces the
    whole field list and is rejected once any contract uses the blueprint.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = None
    description: Optional[constr(max_length=16000)] = None
    fields: Optional[conlist(BlueprintFieldCreate, min_length=1)] = None
