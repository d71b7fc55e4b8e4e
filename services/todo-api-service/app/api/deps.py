# app/api/deps.py
from fastapi import Request

from app.core.config import Settings
from app.services.todo_store import TodoStore


def get_store(request: Request) -> TodoStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
