"""
Service-layer errors.

Each error carries a stable code for programmatic handling and the HTTP
status the API layer responds with.
"""

from typing import Any, Dict


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        code: Stable error code for programmatic handling
        message: Human-readable error description
        status_code: HTTP status the API layer maps this error to
    """

    code = "SERVICE_ERROR"
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {"message": self.message, "code": self.code}


class NotFoundError(ServiceError):
    """Raised when an entity id does not resolve."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: str = ""):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ValidationError(ServiceError):
    """Raised when an operation would break an invariant.

    A rejected operation performs no writes.
    """

    code = "VALIDATION_ERROR"
    status_code = 400


class ConflictError(ServiceError):
    """Raised when a concurrent write changed the row being transitioned."""

    code = "CONFLICT"
    status_code = 409
