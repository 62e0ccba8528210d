"""
Contract Manager

Reusable document blueprints, contracts instantiated from them, and the
approval lifecycle those contracts move through.
"""

import importlib.metadata

__version__ = importlib.metadata.version("contract-manager")

from .enums import ContractStatus, FieldType
from .lifecycle import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    allowed_next_statuses,
    is_terminal,
    is_valid_transition,
)

__all__ = [
    "ContractStatus",
    "FieldType",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "allowed_next_statuses",
    "is_terminal",
    "is_valid_transition",
]
