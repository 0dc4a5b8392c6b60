import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from models.action_result import ActionResult
from models.onboarding_config import FieldIdentifier
from models.user import UserCreate
from services.config_service import get_current_config
from services.onboarding_errors import (
    ConfigurationIntegrityError,
    ConfigurationUnavailable,
    DuplicateEmail,
    FieldValidationError,
    MalformedRequest,
    NoFieldsConfigured,
    OnboardingError,
    PersistenceError,
    UserNotFound,
)
from services.step_schema import collect_field_errors, validate_step
from services.user_crud_service import create_user, find_user_by_email, find_user_by_id, update_user
from utils.form_mapping import assemble_step_input, flatten_step_values

logger = logging.getLogger(__name__)

TOTAL_STEPS = 3


def _duplicate_email() -> DuplicateEmail:
    return DuplicateEmail(
        "An account with this email already exists.",
        field_errors={"email": ["Email already in use."]},
    )


def create_user_account(db, form: Mapping[str, Any]) -> ActionResult:
    """
    Step 1: validate credentials and create the user.

    The password is stored exactly as submitted.
    """
    try:
        user_data = UserCreate.model_validate(
            {key: form.get(key) for key in ("email", "password") if form.get(key) is not None}
        )
    except ValidationError as e:
        return ActionResult.error("Invalid form data.", fieldErrors=collect_field_errors(e))

    try:
        if find_user_by_email(db, user_data.email):
            raise _duplicate_email()
        user = create_user(db, user_data)
    except OnboardingError as e:
        return ActionResult.from_error(e)
    except DuplicateKeyError:
        # Another request created the same email after our lookup
        return ActionResult.from_error(_duplicate_email())
    except PyMongoError:
        logger.error("Error creating user", exc_info=True)
        return ActionResult.error(
            "An unexpected error occurred. Please try again.", http_status=500
        )

    logger.info(f"Created user {user['id']}")
    return ActionResult.success(
        "Account created successfully!", userId=user["id"], http_status=201
    )


def _parse_step(step_number: Any) -> int:
    if isinstance(step_number, bool):
        raise ValueError("boolean step")
    if isinstance(step_number, int):
        return step_number
    return int(str(step_number).strip())


def step_fields_for(db, step: int) -> List[FieldIdentifier]:
    """
    Fields assigned to ``step`` by the configuration in effect.

    Raises:
    - ConfigurationUnavailable: If no valid configuration can be produced.
    - NoFieldsConfigured: If the step has no fields (any step other than 2 or 3).
    """
    try:
        config, provenance = get_current_config(db)
    except ConfigurationIntegrityError as e:
        raise ConfigurationUnavailable(
            f"Failed to load configuration to validate step {step}."
        ) from e
    logger.debug(f"Step {step} uses configuration ({provenance.value})")

    fields = config.fields_for_step(step)
    if not fields:
        raise NoFieldsConfigured(f"No fields configured for step {step}.")
    return fields


def _submit(db, user_id: Optional[str], step_number: Any, form: Mapping[str, Any]) -> int:
    try:
        step = _parse_step(step_number)
    except (TypeError, ValueError):
        step = None
    if not user_id or step is None:
        raise MalformedRequest("Missing user ID or step information.")

    fields = step_fields_for(db, step)

    candidate = assemble_step_input(fields, form)
    try:
        values = validate_step(fields, candidate)
    except ValidationError as e:
        field_errors = collect_field_errors(e)
        logger.info(f"Validation errors for step {step}: {field_errors}")
        raise FieldValidationError("Invalid form data for this step.", field_errors=field_errors)

    updates = flatten_step_values(values)
    # Read-then-write without a guard on the prior step; concurrent
    # submissions for the same user resolve as last writer wins.
    try:
        if not find_user_by_id(db, user_id):
            raise UserNotFound("User not found.")
        updates["onboardingStep"] = step + 1
        if not update_user(db, user_id, updates):
            raise UserNotFound("User not found.")
    except PyMongoError as e:
        logger.error(f"Error updating user for step {step}", exc_info=True)
        raise PersistenceError("An unexpected error occurred saving your progress.") from e
    return step


def submit_onboarding_step(
    db, user_id: Optional[str], step_number: Any, form: Mapping[str, Any]
) -> ActionResult:
    """
    Validate and store the fields of onboarding step 2 or 3.

    Args:
    - user_id: Id returned by step 1.
    - step_number: The step being submitted, as an int or numeric string.
    - form: Raw field values. The address may come as four flat values or
      as a nested ``address`` mapping.

    Returns:
    - ActionResult: On success the user's ``onboardingStep`` is ``step + 1``
      and ``revalidate`` names the views showing user data.
    """
    try:
        step = _submit(db, user_id, step_number, form)
    except OnboardingError as e:
        return ActionResult.from_error(e)
    return ActionResult.success(f"Step {step} completed!", revalidate=["/data"])


def describe_step(db, step_number: Any) -> Dict[str, Any]:
    """
    Everything a UI needs to render a wizard step.

    Raises:
    - OnboardingError: For a malformed step or missing configuration.
    """
    try:
        step = _parse_step(step_number)
    except (TypeError, ValueError):
        raise MalformedRequest("Invalid step number.")

    if step == 1:
        fields = ["email", "password"]
    else:
        fields = [field.value for field in step_fields_for(db, step)]
    return {
        "step": step,
        "totalSteps": TOTAL_STEPS,
        "fields": fields,
        "isLastStep": step == TOTAL_STEPS,
    }
