"""
Contract service.

Orchestrates contract creation, value upserts and status transitions. Every
operation validates first and writes second: a rejected call leaves the
database untouched, and each accepted call commits its rows in a single
transaction.
"""

from typing import List, Optional

import structlog
from sqlalchemy import desc, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db.audit_service import ContractAuditService
from ..db.models import (
    BlueprintModel,
    ContractAuditLogModel,
    ContractModel,
    ContractValueModel,
)
from ..enums import ContractStatus
from ..lifecycle import allowed_next_statuses, is_terminal, is_valid_transition
from ..primitives import generate_ulid, utc_now
from ..schemas.contract import ContractCreate, ContractStatusUpdate, ContractValuesUpdate
from .errors import ConflictError, NotFoundError, ValidationError
from .validation import check_values, collapse_values

logger = structlog.get_logger()


class ContractService:
    """Service for managing contracts and their values."""

    def __init__(self, db: Session, audit: Optional[ContractAuditService] = None):
        self.db = db
        self.audit = audit or ContractAuditService(db)

    def get(self, contract_id: str) -> Optional[ContractModel]:
        """Get a Contract by ID."""
        return self.db.query(ContractModel).filter(ContractModel.id == contract_id).first()

    def require(self, contract_id: str) -> ContractModel:
        """Get a Contract by ID or raise NotFoundError."""
        contract = self.get(contract_id)
        if contract is None:
            raise NotFoundError("Contract", contract_id)
        return contract

    def list(
        self,
        status: Optional[str] = None,
        blueprint_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ContractModel]:
        """List Contracts with optional filtering, newest first."""
        query = self.db.query(ContractModel)

        if status:
            query = query.filter(ContractModel.status == status)
        if blueprint_id:
            query = query.filter(ContractModel.blueprint_id == blueprint_id)

        return (
            query.order_by(desc(ContractModel.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def create(self, data: ContractCreate) -> ContractModel:
        """Create a Contract from a blueprint in status CREATED.

        Raises:
            NotFoundError: the blueprint does not exist
            ValidationError: a value names a field outside the blueprint, or a
                required field has no non-blank value
        """
        blueprint = self.db.get(BlueprintModel, data.blueprint_id)
        if blueprint is None:
            raise NotFoundError("Blueprint", data.blueprint_id)

        supplied = collapse_values(data.values)
        check_values(blueprint.fields, supplied)

        now = utc_now()
        contract = ContractModel(
            id=generate_ulid(),
            name=data.name,
            blueprint_id=blueprint.id,
            status=ContractStatus.CREATED.value,
            created_at=now,
            updated_at=now,
        )
        contract.values = [
            ContractValueModel(
                id=generate_ulid(),
                field_id=field_id,
                value=value,
                created_at=now,
                updated_at=now,
            )
            for field_id, value in supplied.items()
        ]

        try:
            self.db.add(contract)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(contract)

        logger.info(
            "contract_created",
            contract_id=contract.id,
            blueprint_id=blueprint.id,
            values=len(supplied),
        )
        return contract

    def update_values(self, contract_id: str, data: ContractValuesUpdate) -> ContractModel:
        """Upsert values keyed by (contract, field) as one batch.

        Required fields are checked against the stored values overlaid with
        the supplied ones, so a previously filled required field may be
        omitted but not blanked.

        Raises:
            NotFoundError: the contract does not exist
            ValidationError: the contract is terminal, or a value fails the
                field checks
            ConflictError: a concurrent write inserted one of the rows; no
                supplied value is applied
        """
        contract = self.require(contract_id)

        if is_terminal(contract.status):
            raise ValidationError(
                "Cannot modify values of a locked or revoked contract "
                f"(status: {contract.status})"
            )

        supplied = collapse_values(data.values)
        stored = {row.field_id: row for row in contract.values}
        effective = {field_id: row.value for field_id, row in stored.items()}
        effective.update(supplied)
        check_values(contract.blueprint.fields, supplied, effective)

        now = utc_now()
        try:
            for field_id, value in supplied.items():
                row = stored.get(field_id)
                if row is None:
                    contract.values.append(
                        ContractValueModel(
                            id=generate_ulid(),
                            field_id=field_id,
                            value=value,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                else:
                    row.value = value
                    row.updated_at = now
            contract.updated_at = now
            self.db.commit()
        except IntegrityError as exc:
            # Another writer inserted one of these (contract, field) rows first
            self.db.rollback()
            raise ConflictError(
                "Contract values changed concurrently; reload and retry"
            ) from exc
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(contract)

        logger.info(
            "contract_values_updated",
            contract_id=contract.id,
            values=len(supplied),
        )
        return contract

    def update_status(self, contract_id: str, data: ContractStatusUpdate) -> ContractModel:
        """Apply a lifecycle transition and record it in the audit log.

        The status write only matches if the row still holds the status read
        here, so two racing transitions cannot both succeed.

        Raises:
            NotFoundError: the contract does not exist
            ValidationError: the contract is terminal or the transition is
                not in the lifecycle table
            ConflictError: the status changed concurrently
        """
        contract = self.require(contract_id)
        prior = ContractStatus(contract.status)
        requested = data.status

        if is_terminal(prior):
            raise ValidationError(
                f"Cannot transition from terminal status: {prior.value}"
            )

        if not is_valid_transition(prior, requested):
            allowed = ", ".join(s.value for s in allowed_next_statuses(prior))
            raise ValidationError(
                f"Invalid transition from {prior.value} to {requested.value}. "
                f"Allowed transitions: {allowed}"
            )

        try:
            result = self.db.execute(
                update(ContractModel)
                .where(
                    ContractModel.id == contract_id,
                    ContractModel.status == prior.value,
                )
                .values(status=requested.value, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise ConflictError(
                    f"Contract status changed concurrently; expected {prior.value}"
                )
            self.audit.log_status_change(
                contract_id=contract_id,
                from_status=prior,
                to_status=requested,
                reason=data.reason,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(contract)

        logger.info(
            "contract_status_changed",
            contract_id=contract_id,
            from_status=prior.value,
            to_status=requested.value,
        )
        return contract

    def delete(self, contract_id: str) -> None:
        """Hard-delete a non-terminal contract and its values."""
        contract = self.require(contract_id)

        if is_terminal(contract.status):
            raise ValidationError(
                f"Cannot delete a locked or revoked contract (status: {contract.status})"
            )

        try:
            self.db.delete(contract)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("contract_deleted", contract_id=contract_id)

    def get_audit_logs(self, contract_id: str) -> List[ContractAuditLogModel]:
        """Audit entries for a contract, newest first. Unknown ids yield []."""
        return self.audit.query_by_contract(contract_id)
