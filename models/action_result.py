from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ActionResult(BaseModel):
    """Uniform result handed back to the UI layer by every service action."""

    status: Literal["success", "error"]
    message: str
    fieldErrors: Optional[Dict[str, Any]] = None
    formError: Optional[str] = None
    config: Optional[Dict[str, List[str]]] = None
    userId: Optional[str] = None
    # Views the caller should refresh after a successful write
    revalidate: Optional[List[str]] = None
    http_status: int = Field(default=200, exclude=True)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def success(cls, message: str, **extra) -> "ActionResult":
        return cls(status="success", message=message, **extra)

    @classmethod
    def error(cls, message: str, http_status: int = 400, **extra) -> "ActionResult":
        return cls(status="error", message=message, http_status=http_status, **extra)

    @classmethod
    def from_error(cls, error, **extra) -> "ActionResult":
        """Build the error result for an ``OnboardingError``."""
        return cls.error(
            error.message,
            http_status=error.status_code,
            fieldErrors=error.field_errors,
            **extra,
        )
