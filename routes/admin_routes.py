import logging
from flask import Blueprint, request, jsonify
from models.onboarding_config import config_to_form_values, validate_config
from services.config_service import load_config, update_config
from utils.mongodb import get_db

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/config", methods=["GET"])
def get_config():
    try:
        result = load_config(get_db())
        response = result.to_response()
        if result.ok:
            # Prefill for the admin form's per-field radio choices
            response["formValues"] = config_to_form_values(validate_config(result.config))
        return jsonify(response), result.http_status
    except Exception as e:
        logger.error(f"Error fetching config: {str(e)}", exc_info=True)
        return jsonify({"status": "error", "message": "Failed to load configuration."}), 500


@admin_bp.route("/config", methods=["POST", "PUT"])
def save_config():
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = request.form.to_dict()
        result = update_config(get_db(), data)
        return jsonify(result.to_response()), result.http_status
    except Exception as e:
        logger.error(f"Error updating config: {str(e)}", exc_info=True)
        return jsonify({"status": "error", "message": "Database error saving configuration."}), 500
