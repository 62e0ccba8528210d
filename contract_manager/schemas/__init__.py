"""
Request schemas for the Contract Manager API.
"""

from .blueprint import BlueprintCreate, BlueprintFieldCreate, BlueprintUpdate
from .contract import (
    ContractCreate,
    ContractStatusUpdate,
    ContractValueInput,
    ContractValuesUpdate,
)

__all__ = [
    "BlueprintCreate",
    "BlueprintFieldCreate",
    "BlueprintUpdate",
    "ContractCreate",
    "ContractStatusUpdate",
    "ContractValueInput",
    "ContractValuesUpdate",
]
