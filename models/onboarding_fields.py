from datetime import date, datetime, time, timezone
from typing import Annotated, Any, Dict, Tuple

from pydantic import AfterValidator, BaseModel, BeforeValidator
from pydantic_core import PydanticCustomError

from models.onboarding_config import FieldIdentifier

ABOUT_ME_MIN_LENGTH = 10
ZIP_CODE_MIN_LENGTH = 4
ZIP_CODE_MAX_LENGTH = 10


def _about_me(value: Any) -> Any:
    if value is None:
        raise PydanticCustomError("about_me_missing", "Please tell us a bit about yourself.")
    if isinstance(value, str) and len(value) < ABOUT_ME_MIN_LENGTH:
        raise PydanticCustomError(
            "about_me_too_short",
            "Please tell us a bit more (at least {min_length} characters).",
            {"min_length": ABOUT_ME_MIN_LENGTH},
        )
    return value


def _required_text(message: str):
    def check(value: Any) -> Any:
        if value is None or value == "":
            raise PydanticCustomError("text_required", message)
        return value
    return check


def _zip_code(value: Any) -> Any:
    if value is None or value == "":
        raise PydanticCustomError("zip_code_required", "Zip code is required.")
    # Non-text values are left to the string type check
    if not isinstance(value, str):
        return value
    if len(value) < ZIP_CODE_MIN_LENGTH:
        raise PydanticCustomError(
            "zip_code_too_short",
            "Zip code must be at least {min_length} digits.",
            {"min_length": ZIP_CODE_MIN_LENGTH},
        )
    if len(value) > ZIP_CODE_MAX_LENGTH:
        raise PydanticCustomError("zip_code_too_long", "Zip code too long.")
    return value


def _parse_birthdate(value: Any) -> datetime:
    """Accept a date, a datetime, or an ISO date/datetime string."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            pass
    raise PydanticCustomError("birthdate_invalid", "Please select a valid date.")


def _in_the_past(value: datetime) -> datetime:
    now = datetime.now(timezone.utc) if value.tzinfo else datetime.now()
    if value >= now:
        raise PydanticCustomError("birthdate_not_past", "Birthdate must be in the past.")
    return value


AboutMe = Annotated[str, BeforeValidator(_about_me)]

Birthdate = Annotated[datetime, BeforeValidator(_parse_birthdate), AfterValidator(_in_the_past)]


class AddressValue(BaseModel):
    """Composite address as collected by the form; flattened before storage."""

    streetAddress: Annotated[str, BeforeValidator(_required_text("Street address is required."))]
    city: Annotated[str, BeforeValidator(_required_text("City is required."))]
    state: Annotated[str, BeforeValidator(_required_text("State is required."))]
    zipCode: Annotated[str, BeforeValidator(_zip_code)]


ADDRESS_PARTS: Tuple[str, ...] = tuple(AddressValue.model_fields)

# One rule per field identifier; the step schema picks from this table
FIELD_RULES: Dict[FieldIdentifier, Any] = {
    FieldIdentifier.ABOUT_ME: AboutMe,
    FieldIdentifier.ADDRESS: AddressValue,
    FieldIdentifier.BIRTHDATE: Birthdate,
}


def rule_for(field: FieldIdentifier) -> Any:
    return FIELD_RULES[FieldIdentifier(field)]
