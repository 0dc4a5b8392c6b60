from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, EmailStr, ValidationError, WrapValidator, field_validator
from pydantic_core import PydanticCustomError

PASSWORD_MIN_LENGTH = 8


def _friendly_email(value: Any, handler):
    try:
        return handler(value)
    except ValidationError:
        raise PydanticCustomError("email_invalid", "Please enter a valid email address.")


class UserCreate(BaseModel):
    """Step 1 credentials. The password is stored as submitted (not hashed)."""

    email: Annotated[EmailStr, WrapValidator(_friendly_email)]
    password: str

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters long.",
                {"min_length": PASSWORD_MIN_LENGTH},
            )
        return value


class UserInDB(BaseModel):
    id: str  # MongoDB ObjectId as a string
    email: str
    onboardingStep: int = 1
    aboutMe: Optional[str] = None
    streetAddress: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipCode: Optional[str] = None
    birthdate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True
