from datetime import datetime
from typing import Any, Dict, List, Optional

from models.user import UserInDB
from services.user_crud_service import list_users
from utils.form_mapping import format_address


def _format_date(value: Optional[datetime]) -> str:
    return value.isoformat() if value else "N/A"


def list_user_form_data(db) -> List[Dict[str, Any]]:
    """
    Collected onboarding data for every user, newest first.

    Returns:
    - list: One row per user with the address joined into ``fullAddress``
      and missing values shown as "N/A".
    """
    rows = []
    for record in list_users(db):
        user = UserInDB.model_validate(record)
        rows.append({
            "id": user.id,
            "email": user.email,
            "onboardingStep": user.onboardingStep,
            "birthdate": _format_date(user.birthdate),
            "fullAddress": format_address(record),
            "aboutMe": user.aboutMe or "N/A",
            "createdAt": _format_date(user.createdAt),
            "updatedAt": _format_date(user.updatedAt),
        })
    return rows
