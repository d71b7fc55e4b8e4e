# app/services/auth_service.py
from typing import Any, Optional

from app.core.config import Settings
from app.schemas.auth import UserRead

DEMO_USER_ID = 1


def check_credentials(username: Any, password: Any, settings: Settings) -> Optional[UserRead]:
    """Fixed-pair demo login. Returns the identity, or None on any mismatch."""
    if not username or not password:
        return None
    if username != settings.login_username or password != settings.login_password:
        return None
    return UserRead(username=username, id=DEMO_USER_ID)
