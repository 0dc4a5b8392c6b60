import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME = os.getenv("MONGO_DB_NAME", "onboarding")
    FLASK_DEBUG = os.getenv("FLASK_DEBUG", "false").lower() == "true"
    PORT = int(os.getenv("PORT", "8000"))

    # Collections
    USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")
    CONFIG_COLLECTION = os.getenv("CONFIG_COLLECTION", "onboarding_config")
    # The onboarding configuration is a single document upserted by this key
    CONFIG_SINGLETON_ID = 1

    # CORS Configuration
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    CORS_METHODS = os.getenv("CORS_METHODS", "GET,POST,OPTIONS").split(",")
