# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.todo_store import TodoStore


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, seed=True, login_username="testuser", login_password="testpass")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def store() -> TodoStore:
    return TodoStore()
