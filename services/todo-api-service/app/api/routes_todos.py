# app/api/routes_todos.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from app.api.deps import get_store
from app.schemas.todo import TodoCreate, TodoDeleted, TodoRead, TodoUpdate
from app.services.todo_store import TodoStore

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("", response_model=List[TodoRead])
def list_todos_endpoint(store: TodoStore = Depends(get_store)):
    return store.list()


@router.post("", response_model=TodoRead, status_code=status.HTTP_201_CREATED)
def create_todo_endpoint(
    payload: Any = Body(default=None),
    store: TodoStore = Depends(get_store),
):
    # any body shape is accepted here; the store decides what counts as text
    todo_in = TodoCreate.model_validate(payload) if isinstance(payload, dict) else TodoCreate()
    return store.create(todo_in.text)


@router.put("/{todo_id}", response_model=TodoRead)
def update_todo_endpoint(
    todo_id: str,
    payload: Any = Body(default=None),
    store: TodoStore = Depends(get_store),
):
    # an unknown id is a 404 whatever the body holds
    store.get(todo_id)
    try:
        changes = TodoUpdate() if payload is None else TodoUpdate.model_validate(payload)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc
    return store.update(todo_id, changes)


@router.delete("/{todo_id}", response_model=TodoDeleted)
def delete_todo_endpoint(todo_id: str, store: TodoStore = Depends(get_store)):
    deleted = store.delete(todo_id)
    return TodoDeleted(deletedTodo=TodoRead.model_validate(deleted))
