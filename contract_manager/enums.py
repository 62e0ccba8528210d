"""
Canonical enums for blueprints and contracts.

The string values are the wire and storage representation.
"""

from enum import Enum


class FieldType(str, Enum):
    """Kinds of slots a blueprint field can define."""

    TEXT = "TEXT"
    DATE = "DATE"
    SIGNATURE = "SIGNATURE"
    CHECKBOX = "CHECKBOX"


class ContractStatus(str, Enum):
    """Lifecycle status of a contract."""

    CREATED = "CREATED"
    APPROVED = "APPROVED"
    SENT = "SENT"
    SIGNED = "SIGNED"
    LOCKED = "LOCKED"
    REVOKED = "REVOKED"
