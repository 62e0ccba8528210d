"""
Database package for Contract Manager.
"""

from .audit_service import ContractAuditService
from .base import Base, get_db, get_engine, get_session_local, init_database
from .models import (
    BlueprintFieldModel,
    BlueprintModel,
    ContractAuditLogModel,
    ContractModel,
    ContractValueModel,
)

__all__ = [
    "Base",
    "get_db",
    "get_engine",
    "get_session_local",
    "init_database",
    "BlueprintModel",
    "BlueprintFieldModel",
    "ContractModel",
    "ContractValueModel",
    "ContractAuditLogModel",
    "ContractAuditService",
]
