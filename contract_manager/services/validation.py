"""
Checks tying contract values to their blueprint's field definitions.

These are pure functions over already-loaded rows: they never touch the
session and never mutate the blueprint they inspect.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..db.models import BlueprintFieldModel
from ..schemas.contract import ContractValueInput
from .errors import ValidationError


def is_blank(value: Optional[str]) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or value.strip() == ""


def collapse_values(values: Iterable[ContractValueInput]) -> Dict[str, Optional[str]]:
    """Map field id to value, keeping the last entry for a repeated field id."""
    collapsed: Dict[str, Optional[str]] = {}
    for entry in values:
        collapsed[entry.field_id] = entry.value
    return collapsed


def find_invalid_field_ids(
    fields: Sequence[BlueprintFieldModel], field_ids: Iterable[str]
) -> List[str]:
    """Return the supplied field ids that do not belong to ``fields``."""
    known = {f.id for f in fields}
    return [field_id for field_id in field_ids if field_id not in known]


def find_missing_required(
    fields: Sequence[BlueprintFieldModel], values: Mapping[str, Optional[str]]
) -> List[BlueprintFieldModel]:
    """Return the required fields with no non-blank value in ``values``."""
    return [f for f in fields if f.required and is_blank(values.get(f.id))]


def check_values(
    fields: Sequence[BlueprintFieldModel],
    supplied: Mapping[str, Optional[str]],
    effective: Optional[Mapping[str, Optional[str]]] = None,
) -> None:
    """Validate supplied values against a blueprint's fields.

    Args:
        fields: The blueprint's complete field list
        supplied: Values in the current request, keyed by field id
        effective: Values the contract ends up with after the write. Defaults
            to ``supplied``; updates pass stored values overlaid with the
            supplied ones.

    Raises:
        ValidationError: listing every unknown field id, or else every
            required field left blank (by label)
    """
    invalid = find_invalid_field_ids(fields, supplied.keys())
    if invalid:
        raise ValidationError(f"Invalid field IDs: {', '.join(invalid)}")

    missing = find_missing_required(fields, supplied if effective is None else effective)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(f.label for f in missing)}"
        )
