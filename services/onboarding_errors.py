"""Failures raised by the onboarding services.

Every class carries the human-readable message shown to the user. The
service actions catch these and turn them into an ``ActionResult``; routes
answer with the class's ``status_code``.
"""

from typing import Any, Dict, Optional


class OnboardingError(Exception):
    status_code = 400

    def __init__(self, message: str, field_errors: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.field_errors = field_errors


class MalformedRequest(OnboardingError):
    """User id missing or step number not an integer."""


class ConfigurationUnavailable(OnboardingError):
    status_code = 500


class ConfigurationIntegrityError(OnboardingError):
    """The built-in default configuration failed its own validation.

    This is a bug in the shipped default, never a user or admin input problem.
    """

    status_code = 500


class NoFieldsConfigured(OnboardingError):
    pass


class FieldValidationError(OnboardingError):
    """Per-field validation failure; ``field_errors`` maps field to messages."""


class DuplicateEmail(OnboardingError):
    status_code = 409


class UserNotFound(OnboardingError):
    status_code = 404


class PersistenceError(OnboardingError):
    status_code = 500
