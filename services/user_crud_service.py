from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson.objectid import ObjectId
from pymongo import DESCENDING

from config.settings import Config
from models.user import UserCreate


def _collection(db):
    return db[Config.USERS_COLLECTION]


def _with_string_id(user: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    user["id"] = str(user.pop("_id"))
    return user


# Function to create a new user
def create_user(db, user_data: UserCreate) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    user_dict = user_data.model_dump()
    user_dict.update({"onboardingStep": 1, "createdAt": now, "updatedAt": now})

    collection = _collection(db)
    inserted_id = collection.insert_one(user_dict).inserted_id
    return _with_string_id(collection.find_one({"_id": inserted_id}))


# One account per email, enforced by the store
def ensure_user_indexes(db) -> None:
    _collection(db).create_index("email", unique=True)


def find_user_by_id(db, user_id: str) -> Optional[Dict[str, Any]]:
    # Ids that are not ObjectIds cannot match any stored user
    if not user_id or not ObjectId.is_valid(user_id):
        return None
    return _with_string_id(_collection(db).find_one({"_id": ObjectId(user_id)}))


def find_user_by_email(db, email: str) -> Optional[Dict[str, Any]]:
    return _with_string_id(_collection(db).find_one({"email": email}))


# Merge fields into an existing user in a single write
def update_user(db, user_id: str, updated_data: Dict[str, Any]) -> bool:
    """
    Apply a partial update to a user.

    Returns:
    - bool: False if no user matched ``user_id``.
    """
    update_query = {"$set": {**updated_data, "updatedAt": datetime.now(timezone.utc)}}
    result = _collection(db).update_one({"_id": ObjectId(user_id)}, update_query)
    return result.matched_count > 0


def list_users(db) -> List[Dict[str, Any]]:
    """All users, newest first, without their passwords."""
    cursor = _collection(db).find({}, {"password": 0}).sort("createdAt", DESCENDING)
    return [_with_string_id(user) for user in cursor]
