from dataclasses import dataclass, replace
from typing import List


@dataclass
class Todo:
    id: int
    text: str
    completed: bool = False

    def copy(self) -> "Todo":
        return replace(self)


SEED_TODOS: List[Todo] = [
    Todo(id=1, text="Learn React Testing"),
    Todo(id=2, text="Write API tests"),
    Todo(id=3, text="Deploy application"),
]
