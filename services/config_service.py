import logging
from enum import Enum
from typing import Any, Mapping, NamedTuple

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from models.action_result import ActionResult
from models.onboarding_config import (
    DEFAULT_CONFIG,
    AdminConfigForm,
    OnboardingConfig,
    admin_form_errors,
    validate_config,
    validation_messages,
)
from services.config_store import find_config_data, insert_config_if_absent, upsert_config_data
from services.onboarding_errors import ConfigurationIntegrityError

logger = logging.getLogger(__name__)


class Provenance(str, Enum):
    LOADED = "loaded from store"
    DEFAULT_NONE_STORED = "using default: none stored"
    DEFAULT_STORED_INVALID = "using default: stored was invalid"
    DEFAULT_STORE_ERRORED = "using default: store errored"


PROVENANCE_MESSAGES = {
    Provenance.LOADED: "Configuration loaded from database.",
    Provenance.DEFAULT_NONE_STORED: "Using default configuration.",
    Provenance.DEFAULT_STORED_INVALID: "Using default configuration due to invalid DB data.",
    Provenance.DEFAULT_STORE_ERRORED: "Using default configuration due to error.",
}


class ConfigLoad(NamedTuple):
    config: OnboardingConfig
    provenance: Provenance


def default_config() -> OnboardingConfig:
    try:
        return validate_config(DEFAULT_CONFIG)
    except ValidationError as e:
        logger.critical(f"Default onboarding configuration is invalid: {validation_messages(e)}")
        raise ConfigurationIntegrityError(
            "Default configuration is invalid. Please check defaults."
        ) from e


def get_current_config(db) -> ConfigLoad:
    """
    Return the configuration in effect and where it came from.

    A missing, invalid or unreadable stored configuration falls back to the
    built-in default.

    Raises:
    - ConfigurationIntegrityError: If the built-in default fails validation.
    """
    try:
        stored = find_config_data(db)
    except Exception:
        logger.error("Error fetching onboarding configuration", exc_info=True)
        return ConfigLoad(default_config(), Provenance.DEFAULT_STORE_ERRORED)

    if stored is None:
        logger.warning("No stored onboarding configuration; using default.")
        return ConfigLoad(default_config(), Provenance.DEFAULT_NONE_STORED)

    try:
        return ConfigLoad(validate_config(stored), Provenance.LOADED)
    except ValidationError as e:
        logger.error(f"Invalid stored onboarding configuration: {validation_messages(e)}")
        return ConfigLoad(default_config(), Provenance.DEFAULT_STORED_INVALID)


def load_config(db) -> ActionResult:
    """Configuration read action used by the admin page and the wizard."""
    try:
        config, provenance = get_current_config(db)
    except ConfigurationIntegrityError as e:
        return ActionResult.from_error(e)
    return ActionResult.success(PROVENANCE_MESSAGES[provenance], config=config.to_document())


def update_config(db, form: Mapping[str, Any]) -> ActionResult:
    """
    Validate the admin's per-field page choices and store them.

    Args:
    - form: Mapping of field identifier to "2" or "3".

    Returns:
    - ActionResult: ``fieldErrors`` holds per-field problems and ``formError``
      the form-wide ones (both pages must be used).
    """
    try:
        choices = AdminConfigForm.model_validate(dict(form))
    except ValidationError as e:
        errors = admin_form_errors(e)
        logger.info(f"Admin config validation errors: {errors}")
        return ActionResult.error(
            errors["formError"] or "Invalid configuration data provided.",
            fieldErrors=errors["fieldErrors"],
            formError=errors["formError"],
        )

    try:
        config = validate_config(choices.to_config_data())
    except ValidationError as e:
        logger.error(f"Generated config structure invalid: {validation_messages(e)}")
        return ActionResult.error(
            "Internal error generating config.",
            http_status=500,
            formError="Internal server error while structuring configuration.",
        )

    try:
        upsert_config_data(db, config.to_document())
    except PyMongoError:
        logger.error("Error updating onboarding configuration", exc_info=True)
        return ActionResult.error(
            "Database error saving configuration.",
            http_status=500,
            formError="Could not save configuration due to a database issue.",
        )

    logger.info(f"Onboarding configuration updated: {config.to_document()}")
    return ActionResult.success(
        "Configuration updated successfully!",
        config=config.to_document(),
        revalidate=["/admin", "/"],
    )


def ensure_default_config(db) -> None:
    """Seed the default configuration on first boot; never overwrites."""
    config = default_config()
    if insert_config_if_absent(db, config.to_document()):
        logger.info("Seeded default onboarding configuration.")
