"""
Contract lifecycle state machine.

A pure, stateless module answering questions about status transitions. It has
no DB access and never raises: unknown statuses simply have no successors.
Callers decide how to signal a rejected transition.

Transition table (directed, acyclic):

    CREATED  -> APPROVED, REVOKED
    APPROVED -> SENT, REVOKED
    SENT     -> SIGNED, REVOKED
    SIGNED   -> LOCKED
    LOCKED   -> (terminal)
    REVOKED  -> (terminal)
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple, Union

from .enums import ContractStatus

StatusLike = Union[ContractStatus, str]

# Successors are kept as tuples so the order reported to clients is stable.
TRANSITIONS: Mapping[ContractStatus, Tuple[ContractStatus, ...]] = {
    ContractStatus.CREATED: (ContractStatus.APPROVED, ContractStatus.REVOKED),
    ContractStatus.APPROVED: (ContractStatus.SENT, ContractStatus.REVOKED),
    ContractStatus.SENT: (ContractStatus.SIGNED, ContractStatus.REVOKED),
    ContractStatus.SIGNED: (ContractStatus.LOCKED,),
    ContractStatus.LOCKED: (),
    ContractStatus.REVOKED: (),
}

TERMINAL_STATUSES = frozenset({ContractStatus.LOCKED, ContractStatus.REVOKED})


def _coerce(status: StatusLike) -> Optional[ContractStatus]:
    """Map a status or its string value to the enum, or None if unknown."""
    if isinstance(status, ContractStatus):
        return status
    try:
        return ContractStatus(status)
    except ValueError:
        return None


def allowed_next_statuses(status: StatusLike) -> List[ContractStatus]:
    """Return the statuses reachable in one step from ``status``."""
    current = _coerce(status)
    if current is None:
        return []
    return list(TRANSITIONS.get(current, ()))


def is_valid_transition(current: StatusLike, requested: StatusLike) -> bool:
    """Return True if ``current -> requested`` is in the transition table."""
    target = _coerce(requested)
    if target is None:
        return False
    return target in allowed_next_statuses(current)


def is_terminal(status: StatusLike) -> bool:
    """Return True for LOCKED and REVOKED."""
    return _coerce(status) in TERMINAL_STATUSES


def transition_table() -> Dict[str, List[str]]:
    """Serializable view of the transition table."""
    return {
        status.value: [nxt.value for nxt in successors]
        for status, successors in TRANSITIONS.items()
    }
