# app/schemas/todo.py
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator


class TodoCreate(BaseModel):
    # untyped: non-string text is rejected by the store as missing
    text: Any = None


class TodoUpdate(BaseModel):
    """
    Partial update body.

    Presence is read from ``model_fields_set``: a field the client did not
    send is left alone, a field sent with a value replaces
    the stored one. Sending null is rejected.
    """

    text: Optional[str] = None
    completed: Optional[StrictBool] = None

    @field_validator("text", "completed")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class TodoRead(BaseModel):
    id: int
    text: str
    completed: bool = False

    model_config = ConfigDict(from_attributes=True)


class TodoDeleted(BaseModel):
    success: bool = True
    message: str = "Todo deleted successfully"
    deletedTodo: TodoRead
