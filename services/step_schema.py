from typing import Any, Dict, Iterable, List, Type

from pydantic import BaseModel, ValidationError, create_model

from models.onboarding_config import FieldIdentifier
from models.onboarding_fields import rule_for


def build_step_schema(step_fields: Iterable[FieldIdentifier]) -> Type[BaseModel]:
    """
    Build a validation model holding only the rules for ``step_fields``.

    Fields outside ``step_fields`` are not part of the model, so any value
    submitted for them is ignored. A new model is built on every call.

    Args:
    - step_fields: Field identifiers shown on the current step, in any order.

    Returns:
    - A pydantic model class keyed by field identifier.
    """
    definitions = {}
    for field in step_fields:
        field = FieldIdentifier(field)
        definitions[field.value] = (rule_for(field), ...)
    return create_model("StepSchema", **definitions)


def collect_field_errors(error: ValidationError) -> Dict[str, Any]:
    """
    Group validation messages by field.

    Top-level fields map to a list of messages. Nested address errors map to
    ``{"address": {"zipCode": [...], ...}}`` so each sub-field can be shown
    next to its own input.
    """
    field_errors: Dict[str, Any] = {}
    for err in error.errors():
        field, *rest = [str(part) for part in err["loc"]] or ["_form"]
        if rest:
            field_errors.setdefault(field, {}).setdefault(rest[0], []).append(err["msg"])
        else:
            field_errors.setdefault(field, []).append(err["msg"])
    return field_errors


def validate_step(step_fields: List[FieldIdentifier], candidate: Dict[str, Any]) -> Dict[str, Any]:
    """Validate ``candidate`` against the step schema; raises ValidationError."""
    schema = build_step_schema(step_fields)
    return schema.model_validate(candidate).model_dump()
