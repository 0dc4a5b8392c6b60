from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError


class FieldIdentifier(str, Enum):
    ABOUT_ME = "aboutMe"
    ADDRESS = "address"
    BIRTHDATE = "birthdate"


ALL_FIELDS: List[FieldIdentifier] = [
    FieldIdentifier.ABOUT_ME,
    FieldIdentifier.ADDRESS,
    FieldIdentifier.BIRTHDATE,
]

# Raw on purpose: it goes through the same validation as a stored document
DEFAULT_CONFIG = {
    "page2": ["aboutMe", "address"],
    "page3": ["birthdate"],
}

FIELD_LABELS = {
    FieldIdentifier.ABOUT_ME: "About Me",
    FieldIdentifier.ADDRESS: "Address",
    FieldIdentifier.BIRTHDATE: "Birthdate",
}


class OnboardingConfig(BaseModel):
    """Assignment of every onboarding field to page 2 or page 3."""

    page2: List[FieldIdentifier]
    page3: List[FieldIdentifier]

    @model_validator(mode="after")
    def check_assignment(self) -> "OnboardingConfig":
        if not self.page2:
            raise PydanticCustomError("page_empty", "Page 2 must have at least one field.")
        if not self.page3:
            raise PydanticCustomError("page_empty", "Page 3 must have at least one field.")

        assigned = set(self.page2) | set(self.page3)
        if len(assigned) != len(self.page2) + len(self.page3):
            raise PydanticCustomError(
                "field_reassigned", "Fields cannot be assigned to multiple pages."
            )
        if assigned != set(ALL_FIELDS):
            raise PydanticCustomError(
                "field_unassigned",
                "All fields ({fields}) must be assigned exactly once.",
                {"fields": ", ".join(f.value for f in ALL_FIELDS)},
            )
        return self

    def fields_for_step(self, step: int) -> List[FieldIdentifier]:
        """Fields rendered on the given wizard step; empty for any other step."""
        if step == 2:
            return list(self.page2)
        if step == 3:
            return list(self.page3)
        return []

    def to_document(self) -> Dict[str, List[str]]:
        return self.model_dump(mode="json")


PageChoice = Literal["2", "3"]


class AdminConfigForm(BaseModel):
    """Flat per-field page choice submitted from the admin page."""

    aboutMe: PageChoice = Field(default=None, validate_default=True)
    address: PageChoice = Field(default=None, validate_default=True)
    birthdate: PageChoice = Field(default=None, validate_default=True)

    @field_validator("aboutMe", "address", "birthdate", mode="before")
    @classmethod
    def require_choice(cls, value, info: ValidationInfo):
        if value is None or value == "":
            raise PydanticCustomError(
                "page_choice_missing",
                "Please assign '{label}' to a page.",
                {"label": FIELD_LABELS[FieldIdentifier(info.field_name)]},
            )
        return value

    @model_validator(mode="after")
    def check_both_pages_used(self) -> "AdminConfigForm":
        choices = {self.aboutMe, self.address, self.birthdate}
        if "2" not in choices or "3" not in choices:
            raise PydanticCustomError(
                "page_unused",
                "Both Page 2 and Page 3 must have at least one field assigned.",
            )
        return self

    def to_config_data(self) -> Dict[str, List[str]]:
        """Convert the flat choices into page lists, in field order."""
        data = {"page2": [], "page3": []}
        for field in ALL_FIELDS:
            data[f"page{getattr(self, field.value)}"].append(field.value)
        return data


def config_to_form_values(config: OnboardingConfig) -> Dict[str, str]:
    """Flat '2'/'3' choice per field, used to prefill the admin form."""
    values = {}
    for field in ALL_FIELDS:
        if field in config.page2:
            values[field.value] = "2"
        elif field in config.page3:
            values[field.value] = "3"
    return values


def validation_messages(error: ValidationError) -> List[str]:
    return [err["msg"] for err in error.errors()]


def validate_config(candidate) -> OnboardingConfig:
    """Validate a raw page2/page3 mapping; raises pydantic.ValidationError."""
    if isinstance(candidate, OnboardingConfig):
        candidate = candidate.model_dump()
    return OnboardingConfig.model_validate(candidate)


def admin_form_errors(error: ValidationError) -> Dict[str, Optional[object]]:
    """Split admin-form errors into per-field messages and a form-level message."""
    field_errors: Dict[str, List[str]] = {}
    form_errors: List[str] = []
    for err in error.errors():
        if err["loc"]:
            field_errors.setdefault(str(err["loc"][0]), []).append(err["msg"])
        else:
            form_errors.append(err["msg"])
    return {
        "fieldErrors": field_errors or None,
        "formError": ", ".join(form_errors) if form_errors else None,
    }
