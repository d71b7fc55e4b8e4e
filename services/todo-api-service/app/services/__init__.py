# app/services/__init__.py
from .auth_service import check_credentials
from .todo_store import TodoStore, parse_todo_id

__all__ = ["TodoStore", "check_credentials", "parse_todo_id"]
