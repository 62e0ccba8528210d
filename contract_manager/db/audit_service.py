"""
Contract Audit Log Service.

Records one entry per accepted contract status transition. Entries are
append-only: this service offers no way to change or remove them.
"""

from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..enums import ContractStatus
from ..primitives import utc_now
from .models import ContractAuditLogModel


def _status_value(status: "ContractStatus | str") -> str:
    return status.value if isinstance(status, ContractStatus) else str(status)


class ContractAuditService:
    """Service for managing contract audit log entries.

    Writes are staged on the caller's session and are NOT committed here, so
    the audit entry commits atomically with the status change it describes.

    Usage:
        audit = ContractAuditService(db_session)
        audit.log_status_change(contract.id, "CREATED", "APPROVED", reason="ok")
        db_session.commit()
    """

    def __init__(self, db: Session):
        self.db = db

    def log_status_change(
        self,
        contract_id: str,
        from_status: "ContractStatus | str",
        to_status: "ContractStatus | str",
        reason: Optional[str] = None,
    ) -> ContractAuditLogModel:
        """Stage an audit entry for a status transition.

        Args:
            contract_id: ID of the contract that changed
            from_status: Status held before the transition
            to_status: Status held after the transition
            reason: Optional free-text justification

        Returns:
            The pending ContractAuditLogModel
        """
        entry = ContractAuditLogModel(
            contract_id=contract_id,
            from_status=_status_value(from_status),
            to_status=_status_value(to_status),
            reason=reason,
            created_at=utc_now(),
        )
        self.db.add(entry)
        return entry

    # Query methods

    def query_by_contract(
        self,
        contract_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ContractAuditLogModel]:
        """Get the audit history for a contract, newest first."""
        return (
            self.db.query(ContractAuditLogModel)
            .filter(ContractAuditLogModel.contract_id == contract_id)
            .order_by(
                desc(ContractAuditLogModel.created_at),
                desc(ContractAuditLogModel.id),
            )
            .offset(offset)
            .limit(limit)
            .all()
        )

    def query_recent(self, limit: int = 50) -> List[ContractAuditLogModel]:
        """Get the most recent audit entries across all contracts."""
        return (
            self.db.query(ContractAuditLogModel)
            .order_by(
                desc(ContractAuditLogModel.created_at),
                desc(ContractAuditLogModel.id),
            )
            .limit(limit)
            .all()
        )
