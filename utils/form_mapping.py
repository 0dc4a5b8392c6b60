"""Moves the address between its two shapes.

Forms and storage both carry the address as four flat values
(``streetAddress``, ``city``, ``state``, ``zipCode``); validation works on a
single nested ``address`` object. Everything else passes through unchanged.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from models.onboarding_config import FieldIdentifier
from models.onboarding_fields import ADDRESS_PARTS


def assemble_step_input(fields: Iterable[FieldIdentifier], form: Mapping[str, Any]) -> Dict[str, Any]:
    """Gather raw form values into the nested shape the step schema expects."""
    candidate = {}
    for field in fields:
        field = FieldIdentifier(field)
        if field is FieldIdentifier.ADDRESS:
            nested = form.get(field.value)
            source = nested if isinstance(nested, Mapping) else form
            candidate[field.value] = {part: source.get(part) for part in ADDRESS_PARTS}
        else:
            candidate[field.value] = form.get(field.value)
    return candidate


def flatten_step_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Turn validated step values into flat user attributes."""
    flat = {}
    for key, value in values.items():
        if value is None:
            continue
        if key == FieldIdentifier.ADDRESS.value:
            address = value if isinstance(value, Mapping) else value.model_dump()
            for part in ADDRESS_PARTS:
                flat[part] = address[part]
        else:
            flat[key] = value
    return flat


def address_from_record(record: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Rebuild the nested address from a stored user, or None if none was saved."""
    address = {part: record.get(part) for part in ADDRESS_PARTS}
    if not any(address.values()):
        return None
    return address


def format_address(record: Mapping[str, Any]) -> str:
    address = address_from_record(record) or {}
    parts = [value for value in address.values() if value]
    if not parts:
        return "N/A"
    return ", ".join(parts)
