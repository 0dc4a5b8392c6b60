import logging

from flask import Blueprint, jsonify
from services.user_form_data_service import list_user_form_data
from utils.mongodb import get_db

logger = logging.getLogger(__name__)

user_bp = Blueprint('user', __name__)


# Collected onboarding data for every user
@user_bp.route('/users', methods=['GET'])
def get_users():
    try:
        users = list_user_form_data(get_db())
        response = jsonify({'users': users})
        # Rows change after every onboarding step
        response.headers['Cache-Control'] = 'no-store'
        return response, 200

    except Exception as e:
        logger.error(f"Failed to fetch user data: {str(e)}", exc_info=True)
        return jsonify({'error': 'Could not fetch user data at this time.'}), 500
