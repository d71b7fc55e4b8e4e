# app/services/todo_store.py
import logging
import re
import threading
from typing import Any, Iterable, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.models.todo import SEED_TODOS, Todo
from app.schemas.todo import TodoUpdate

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_todo_id(raw: Any) -> Optional[int]:
    """Return ``raw`` as an int id, or None when it is not a plain integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _ID_RE.fullmatch(raw.strip()):
        return int(raw)
    return None


class TodoStore:
    """
    In-memory, ordered todo list with a monotonic id counter.

    Records keep insertion order. Ids are never reused, not even after the
    highest one is deleted. Every read-modify-write runs under one lock;
    sync endpoints are served from a thread pool.
    """

    def __init__(self, seed: Optional[Iterable[Todo]] = None) -> None:
        self._seed = [t.copy() for t in (SEED_TODOS if seed is None else seed)]
        self._lock = threading.Lock()
        self._todos: List[Todo] = []
        self._next_id = 1
        self._load_seed()

    def _load_seed(self) -> None:
        self._todos = [t.copy() for t in self._seed]
        self._next_id = max((t.id for t in self._todos), default=0) + 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def _index_of(self, todo_id: Any) -> int:
        parsed = parse_todo_id(todo_id)
        if parsed is not None:
            for i, todo in enumerate(self._todos):
                if todo.id == parsed:
                    return i
        raise NotFoundError()

    def list(self) -> List[Todo]:
        with self._lock:
            return [t.copy() for t in self._todos]

    def get(self, todo_id: Any) -> Todo:
        with self._lock:
            return self._todos[self._index_of(todo_id)].copy()

    def create(self, text: Any) -> Todo:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError()

        with self._lock:
            todo = Todo(id=self._next_id, text=text.strip(), completed=False)
            self._next_id += 1
            self._todos.append(todo)

        logger.info("Created todo id=%s", todo.id)
        return todo.copy()

    def update(self, todo_id: Any, changes: TodoUpdate) -> Todo:
        # text is not re-checked here; an update may blank it out
        fields = changes.model_fields_set
        with self._lock:
            todo = self._todos[self._index_of(todo_id)]
            if "text" in fields:
                todo.text = changes.text
            if "completed" in fields:
                todo.completed = changes.completed
            updated = todo.copy()

        logger.info("Updated todo id=%s fields=%s", updated.id, sorted(fields))
        return updated

    def delete(self, todo_id: Any) -> Todo:
        with self._lock:
            removed = self._todos.pop(self._index_of(todo_id))

        logger.info("Deleted todo id=%s", removed.id)
        return removed

    def reset(self) -> None:
        with self._lock:
            self._load_seed()
        logger.info("Todo store reset to %d seed item(s)", len(self._seed))
