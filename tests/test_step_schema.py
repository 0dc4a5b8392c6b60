from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from models.onboarding_config import FieldIdentifier
from services.step_schema import build_step_schema, collect_field_errors, validate_step

VALID_ADDRESS = {
    "streetAddress": "1 Main Street",
    "city": "Springfield",
    "state": "IL",
    "zipCode": "90210",
}


def _field_errors(fields, candidate) -> dict:
    with pytest.raises(ValidationError) as exc_info:
        validate_step(fields, candidate)
    return collect_field_errors(exc_info.value)


def test_schema_only_contains_requested_fields() -> None:
    schema = build_step_schema([FieldIdentifier.BIRTHDATE, FieldIdentifier.ABOUT_ME])
    assert set(schema.model_fields) == {"aboutMe", "birthdate"}


def test_schema_ignores_fields_of_other_steps() -> None:
    values = validate_step(["aboutMe"], {"aboutMe": "I enjoy hiking and cooking.", "birthdate": "nonsense"})
    assert values == {"aboutMe": "I enjoy hiking and cooking."}


def test_field_order_does_not_change_acceptance() -> None:
    candidate = {"aboutMe": "Ten chars!", "address": VALID_ADDRESS}
    forward = validate_step(["aboutMe", "address"], candidate)
    backward = validate_step(["address", "aboutMe"], candidate)
    assert forward == backward


def test_about_me_shorter_than_ten_characters_fails() -> None:
    errors = _field_errors(["aboutMe"], {"aboutMe": "short bio"})
    assert errors == {"aboutMe": ["Please tell us a bit more (at least 10 characters)."]}


def test_about_me_of_ten_characters_passes() -> None:
    assert validate_step(["aboutMe"], {"aboutMe": "0123456789"}) == {"aboutMe": "0123456789"}


def test_about_me_missing_fails() -> None:
    errors = _field_errors(["aboutMe"], {"aboutMe": None})
    assert list(errors) == ["aboutMe"]


def test_zip_code_too_short_is_reported_under_address() -> None:
    errors = _field_errors(["address"], {"address": {**VALID_ADDRESS, "zipCode": "12"}})
    assert errors == {"address": {"zipCode": ["Zip code must be at least 4 digits."]}}


def test_zip_code_too_long_fails() -> None:
    errors = _field_errors(["address"], {"address": {**VALID_ADDRESS, "zipCode": "12345678901"}})
    assert errors == {"address": {"zipCode": ["Zip code too long."]}}


def test_valid_address_passes() -> None:
    assert validate_step(["address"], {"address": VALID_ADDRESS}) == {"address": VALID_ADDRESS}


def test_every_empty_address_part_is_reported() -> None:
    blank = {"streetAddress": "", "city": "", "state": None, "zipCode": ""}
    errors = _field_errors(["address"], {"address": blank})
    assert errors == {
        "address": {
            "streetAddress": ["Street address is required."],
            "city": ["City is required."],
            "state": ["State is required."],
            "zipCode": ["Zip code is required."],
        }
    }


def test_whitespace_address_parts_count_as_text() -> None:
    spaced = {"streetAddress": " ", "city": "  ", "state": "\t", "zipCode": "     "}
    assert validate_step(["address"], {"address": spaced}) == {"address": spaced}


def test_whitespace_zip_code_still_needs_four_characters() -> None:
    errors = _field_errors(["address"], {"address": {**VALID_ADDRESS, "zipCode": "   "}})
    assert errors == {"address": {"zipCode": ["Zip code must be at least 4 digits."]}}


def test_numeric_zip_code_gets_a_type_error() -> None:
    errors = _field_errors(["address"], {"address": {**VALID_ADDRESS, "zipCode": 90210}})
    assert errors == {"address": {"zipCode": ["Input should be a valid string"]}}


def test_birthdate_tomorrow_fails() -> None:
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    errors = _field_errors(["birthdate"], {"birthdate": tomorrow})
    assert errors == {"birthdate": ["Birthdate must be in the past."]}


def test_birthdate_unparseable_fails_with_type_message() -> None:
    errors = _field_errors(["birthdate"], {"birthdate": "not a date"})
    assert errors == {"birthdate": ["Please select a valid date."]}


def test_birthdate_empty_fails_with_type_message() -> None:
    errors = _field_errors(["birthdate"], {"birthdate": ""})
    assert errors == {"birthdate": ["Please select a valid date."]}


def test_birthdate_yesterday_passes() -> None:
    yesterday = date.today() - timedelta(days=1)
    values = validate_step(["birthdate"], {"birthdate": yesterday.isoformat()})
    assert values["birthdate"].date() == yesterday


def test_birthdate_accepts_browser_iso_timestamp() -> None:
    values = validate_step(["birthdate"], {"birthdate": "1990-05-17T00:00:00.000Z"})
    assert values["birthdate"] == datetime(1990, 5, 17, tzinfo=timezone.utc)


def test_birthdate_accepts_date_objects() -> None:
    values = validate_step(["birthdate"], {"birthdate": date(1985, 1, 2)})
    assert values["birthdate"] == datetime(1985, 1, 2)


def test_errors_for_several_fields_are_grouped() -> None:
    errors = _field_errors(
        ["aboutMe", "address", "birthdate"],
        {"aboutMe": "hi", "address": {**VALID_ADDRESS, "city": ""}, "birthdate": "2999-01-01"},
    )
    assert set(errors) == {"aboutMe", "address", "birthdate"}
    assert errors["address"] == {"city": ["City is required."]}
