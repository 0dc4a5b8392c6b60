import logging
from flask import Blueprint, request, jsonify
from services.onboarding_errors import OnboardingError
from services.onboarding_service import create_user_account, describe_step, submit_onboarding_step
from utils.mongodb import get_db

logger = logging.getLogger(__name__)

onboarding_bp = Blueprint("onboarding", __name__)


def _payload():
    """JSON body if one was sent, otherwise the submitted form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


# Step 1: create the account
@onboarding_bp.route("/users", methods=["POST"])
def create_account():
    try:
        result = create_user_account(get_db(), _payload())
        return jsonify(result.to_response()), result.http_status
    except Exception as e:
        logger.error(f"Account creation failed: {str(e)}", exc_info=True)
        return jsonify({"status": "error", "message": "An unexpected error occurred. Please try again."}), 500


# Steps 2 and 3: fields chosen by the admin configuration
@onboarding_bp.route("/steps", methods=["POST"])
def submit_step():
    try:
        data = _payload()
        result = submit_onboarding_step(get_db(), data.get("userId"), data.get("currentStep"), data)
        return jsonify(result.to_response()), result.http_status
    except Exception as e:
        logger.error(f"Step submission failed: {str(e)}", exc_info=True)
        return jsonify({"status": "error", "message": "An unexpected error occurred saving your progress."}), 500


@onboarding_bp.route("/steps/<step>", methods=["GET"])
def get_step(step):
    try:
        return jsonify(describe_step(get_db(), step)), 200
    except OnboardingError as e:
        return jsonify({"status": "error", "message": e.message}), e.status_code
    except Exception as e:
        logger.error(f"Failed to describe step {step}: {str(e)}", exc_info=True)
        return jsonify({"status": "error", "message": "Failed to load step."}), 500
