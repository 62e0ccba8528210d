"""
Contract API routes.

Single-contract responses carry ``allowed_actions`` and ``is_terminal`` so
clients can enable only the transitions the lifecycle permits.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.base import get_db
from ..db.models import ContractModel
from ..enums import ContractStatus
from ..lifecycle import (
    TERMINAL_STATUSES,
    allowed_next_statuses,
    is_terminal,
    transition_table,
)
from ..responses import success
from ..schemas.contract import ContractCreate, ContractStatusUpdate, ContractValuesUpdate
from ..services.contracts import ContractService

router = APIRouter(prefix="/contracts", tags=["contracts"])


def _with_actions(contract: ContractModel) -> Dict[str, Any]:
    data = contract.to_dict(include_fields=True)
    data["allowed_actions"] = [s.value for s in allowed_next_statuses(contract.status)]
    data["is_terminal"] = is_terminal(contract.status)
    return data


@router.get("")
async def list_contracts(
    status: Optional[ContractStatus] = None,
    blueprint_id: Optional[str] = None,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """List Contracts, optionally filtered by status and blueprint."""
    contracts = ContractService(db).list(
        status=status.value if status else None,
        blueprint_id=blueprint_id,
        limit=limit,
        offset=offset,
    )
    return success([c.to_dict() for c in contracts])


@router.get("/transitions")
async def get_transitions() -> Dict[str, Any]:
    """The lifecycle transition table and its terminal statuses."""
    return success(
        {
            "transitions": transition_table(),
            "terminal": sorted(s.value for s in TERMINAL_STATUSES),
        }
    )


@router.get("/{contract_id}")
async def get_contract(
    contract_id: str,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Get a Contract with its blueprint fields and allowed actions."""
    contract = ContractService(db).require(contract_id)
    return success(_with_actions(contract))


@router.post("", status_code=201)
async def create_contract(
    contract: ContractCreate,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Create a new Contract from a Blueprint."""
    db_contract = ContractService(db).create(contract)
    return success(db_contract.to_dict())


@router.patch("/{contract_id}/status")
async def update_contract_status(
    contract_id: str,
    update: ContractStatusUpdate,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Move a Contract to the next lifecycle status."""
    contract = ContractService(db).update_status(contract_id, update)
    return success(_with_actions(contract))


@router.patch("/{contract_id}/values")
async def update_contract_values(
    contract_id: str,
    update: ContractValuesUpdate,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Upsert field values on a non-terminal Contract."""
    contract = ContractService(db).update_values(contract_id, update)
    return success(_with_actions(contract))


@router.delete("/{contract_id}")
async def delete_contract(
    contract_id: str,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Delete a non-terminal Contract."""
    ContractService(db).delete(contract_id)
    return success({"success": True})


@router.get("/{contract_id}/audit-logs")
async def get_contract_audit_logs(
    contract_id: str,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Status-change history of a Contract, newest first."""
    service = ContractService(db)
    service.require(contract_id)
    return success([entry.to_dict() for entry in service.get_audit_logs(contract_id)])
