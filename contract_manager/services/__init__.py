"""
Service layer: business rules over the database models.
"""

from .blueprints import BlueprintService
from .contracts import ContractService
from .errors import ConflictError, NotFoundError, ServiceError, ValidationError

__all__ = [
    "BlueprintService",
    "ContractService",
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
]
