from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config.settings import Config


def _collection(db):
    return db[Config.CONFIG_COLLECTION]


def find_config_data(db) -> Optional[Dict[str, Any]]:
    """
    Read the stored configuration payload.

    Returns:
    - dict: The raw ``page2``/``page3`` payload, or None if nothing is stored.
    """
    record = _collection(db).find_one({"_id": Config.CONFIG_SINGLETON_ID})
    if not record or not record.get("configData"):
        return None
    return record["configData"]


def upsert_config_data(db, config_data: Dict[str, Any]) -> None:
    """Create or overwrite the singleton configuration; last writer wins."""
    _collection(db).update_one(
        {"_id": Config.CONFIG_SINGLETON_ID},
        {"$set": {"configData": config_data, "updatedAt": datetime.now(timezone.utc)}},
        upsert=True,
    )


def insert_config_if_absent(db, config_data: Dict[str, Any]) -> bool:
    """
    Store ``config_data`` only when no configuration exists yet.

    Returns:
    - bool: True if a new document was created.
    """
    result = _collection(db).update_one(
        {"_id": Config.CONFIG_SINGLETON_ID},
        {"$setOnInsert": {"configData": config_data, "updatedAt": datetime.now(timezone.utc)}},
        upsert=True,
    )
    return result.upserted_id is not None
