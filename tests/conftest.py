from typing import Callable

import mongomock
import pytest

from app import create_app
from models.user import UserCreate
from services.config_store import upsert_config_data
from services.user_crud_service import create_user


@pytest.fixture
def db():
    return mongomock.MongoClient()["onboarding_test"]


@pytest.fixture
def app(db):
    app = create_app(db=db)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store_config(db) -> Callable[[dict], None]:
    def _store(config_data: dict) -> None:
        upsert_config_data(db, config_data)
    return _store


@pytest.fixture
def user_id(db) -> str:
    user = create_user(db, UserCreate(email="new.user@example.com", password="password123"))
    return user["id"]
