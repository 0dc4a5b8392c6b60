import logging
from flask import current_app
from pymongo import MongoClient
from config.settings import Config

# Logging configuration
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

DB_EXTENSION_KEY = "mongo_db"


def connect(uri: str = None, db_name: str = None):
    """Open a MongoDB connection and return the database instance."""
    uri = uri or Config.MONGO_URI
    db_name = db_name or Config.DB_NAME
    try:
        client = MongoClient(uri)
        db = client[db_name]
        logger.info(f"Connected to MongoDB database: {db_name}")
        return db
    except Exception as e:
        logger.error("Failed to connect to MongoDB", exc_info=True)
        raise e


def get_db():
    """Return the database instance bound to the running Flask app."""
    return current_app.extensions[DB_EXTENSION_KEY]
