"""Signup and login stubs.

There is no user store: signup only acknowledges the request and login
issues a token for the configured demo identity.
"""

from fastapi import APIRouter, status
from loguru import logger

from src.api.constants import API_PREFIX
from src.api.dependencies import AppSettings
from src.api.schemas.auth import MessageResponse, TokenResponse
from src.core.security import create_access_token

router = APIRouter(prefix=API_PREFIX, tags=["auth"])


@router.post("/signup", status_code=status.HTTP_200_OK)
async def signup() -> MessageResponse:
    """Acknowledge a signup request."""
    logger.info("Signup requested")
    return MessageResponse(message="Signup successful")


@router.post("/login")
async def login(settings: AppSettings) -> TokenResponse:
    """Issue an access token for the demo identity."""
    identity = settings.auth_config.demo_identity
    token = create_access_token(identity, settings.auth_config)
    logger.info("Access token issued", user_id=identity)
    return TokenResponse(token=token)
