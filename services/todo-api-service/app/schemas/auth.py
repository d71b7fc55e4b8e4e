# app/schemas/auth.py
from typing import Any

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Any = None
    password: Any = None


class UserRead(BaseModel):
    username: str
    id: int


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    user: UserRead
