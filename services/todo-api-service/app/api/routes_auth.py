# app/api/routes_auth.py
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.api.deps import get_app_settings
from app.core.config import Settings
from app.core.errors import INVALID_CREDENTIALS, failure_response
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth_service import check_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"description": INVALID_CREDENTIALS}},
)
def login_endpoint(
    payload: Any = Body(default=None),
    settings: Settings = Depends(get_app_settings),
):
    creds = LoginRequest.model_validate(payload) if isinstance(payload, dict) else LoginRequest()
    user = check_credentials(creds.username, creds.password, settings)
    if user is None:
        logger.info("Login rejected")
        return failure_response(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS)
    logger.info("Login accepted for %s", user.username)
    return LoginResponse(user=user)
