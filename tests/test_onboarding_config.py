import pytest
from pydantic import ValidationError

from models.onboarding_config import (
    ALL_FIELDS,
    DEFAULT_CONFIG,
    AdminConfigForm,
    FieldIdentifier,
    OnboardingConfig,
    admin_form_errors,
    config_to_form_values,
    validate_config,
    validation_messages,
)


def _messages(candidate) -> list:
    with pytest.raises(ValidationError) as exc_info:
        validate_config(candidate)
    return validation_messages(exc_info.value)


def test_default_config_is_valid() -> None:
    config = validate_config(DEFAULT_CONFIG)
    assert config.page2 == [FieldIdentifier.ABOUT_ME, FieldIdentifier.ADDRESS]
    assert config.page3 == [FieldIdentifier.BIRTHDATE]


@pytest.mark.parametrize(
    "candidate",
    [
        {"page2": ["aboutMe"], "page3": ["address", "birthdate"]},
        {"page2": ["birthdate", "address"], "page3": ["aboutMe"]},
        {"page2": ["address"], "page3": ["birthdate", "aboutMe"]},
    ],
)
def test_valid_assignments_cover_every_field_once(candidate) -> None:
    config = validate_config(candidate)
    assigned = config.page2 + config.page3
    assert sorted(assigned) == sorted(ALL_FIELDS)
    assert len(assigned) == len(set(assigned))


def test_empty_page_is_rejected() -> None:
    assert _messages({"page2": [], "page3": ["aboutMe", "address", "birthdate"]}) == [
        "Page 2 must have at least one field."
    ]
    assert _messages({"page2": ["aboutMe", "address", "birthdate"], "page3": []}) == [
        "Page 3 must have at least one field."
    ]


def test_field_on_both_pages_is_rejected() -> None:
    messages = _messages({"page2": ["aboutMe", "address"], "page3": ["address", "birthdate"]})
    assert messages == ["Fields cannot be assigned to multiple pages."]


def test_repeated_field_on_one_page_is_rejected() -> None:
    messages = _messages({"page2": ["aboutMe", "aboutMe"], "page3": ["address", "birthdate"]})
    assert messages == ["Fields cannot be assigned to multiple pages."]


def test_unassigned_field_is_rejected() -> None:
    messages = _messages({"page2": ["aboutMe"], "page3": ["address"]})
    assert messages == ["All fields (aboutMe, address, birthdate) must be assigned exactly once."]


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_config({"page2": ["aboutMe", "nickname"], "page3": ["address", "birthdate"]})


def test_fields_for_step() -> None:
    config = OnboardingConfig(page2=["aboutMe"], page3=["address", "birthdate"])
    assert config.fields_for_step(2) == [FieldIdentifier.ABOUT_ME]
    assert config.fields_for_step(3) == [FieldIdentifier.ADDRESS, FieldIdentifier.BIRTHDATE]
    assert config.fields_for_step(4) == []
    assert config.fields_for_step(1) == []


def test_to_document_uses_plain_strings() -> None:
    config = validate_config(DEFAULT_CONFIG)
    assert config.to_document() == {"page2": ["aboutMe", "address"], "page3": ["birthdate"]}


def test_admin_form_converts_to_page_lists() -> None:
    form = AdminConfigForm.model_validate({"aboutMe": "3", "address": "2", "birthdate": "3"})
    assert form.to_config_data() == {"page2": ["address"], "page3": ["aboutMe", "birthdate"]}


def test_admin_form_requires_both_pages() -> None:
    with pytest.raises(ValidationError) as exc_info:
        AdminConfigForm.model_validate({"aboutMe": "2", "address": "2", "birthdate": "2"})
    errors = admin_form_errors(exc_info.value)
    assert errors["formError"] == "Both Page 2 and Page 3 must have at least one field assigned."
    assert errors["fieldErrors"] is None


def test_admin_form_reports_missing_choice_per_field() -> None:
    with pytest.raises(ValidationError) as exc_info:
        AdminConfigForm.model_validate({"aboutMe": "2", "address": ""})
    errors = admin_form_errors(exc_info.value)
    assert errors["fieldErrors"] == {
        "address": ["Please assign 'Address' to a page."],
        "birthdate": ["Please assign 'Birthdate' to a page."],
    }
    assert errors["formError"] is None


def test_admin_form_rejects_unknown_page() -> None:
    with pytest.raises(ValidationError) as exc_info:
        AdminConfigForm.model_validate({"aboutMe": "4", "address": "2", "birthdate": "3"})
    errors = admin_form_errors(exc_info.value)
    assert list(errors["fieldErrors"]) == ["aboutMe"]


def test_config_to_form_values_round_trips_through_admin_form() -> None:
    config = validate_config({"page2": ["birthdate"], "page3": ["aboutMe", "address"]})
    values = config_to_form_values(config)
    assert values == {"aboutMe": "3", "address": "3", "birthdate": "2"}
    form = AdminConfigForm.model_validate(values)
    assert validate_config(form.to_config_data()) == config
