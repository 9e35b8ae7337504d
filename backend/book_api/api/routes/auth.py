"""Auth Routes: register, login, refresh-token. No bearer required.

Invariants:
    - Register and login bodies pass the validation gate before the service runs
    - refresh-token takes any refreshToken value; the service decides 401 vs 403
    - Missing refreshToken is a 401, a rejected one a 403
"""

import logging

from fastapi import APIRouter, Depends, status

from book_api.api.dependencies import get_auth_service, validated_body
from book_api.core.envelope import success_envelope
from book_api.schemas.auth import (
    LoginRequest, RefreshRequest, RegisterRequest,
)
from book_api.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest = Depends(validated_body(RegisterRequest)),
    service: AuthService = Depends(get_auth_service),
):
    user = await service.register(body)
    return success_envelope(
        "User registered successfully",
        user.model_dump(mode="json"),
        status.HTTP_201_CREATED,
    )


@router.post("/login")
async def login(
    body: LoginRequest = Depends(validated_body(LoginRequest)),
    service: AuthService = Depends(get_auth_service),
):
    tokens = await service.login(body)
    return success_envelope(
        "Login successful",
        tokens.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.post("/refresh-token")
async def refresh_token(
    body: RefreshRequest | None = None,
    service: AuthService = Depends(get_auth_service),
):
    """Mint a new access token from a refresh token."""
    refreshed = service.refresh(body.refresh_token if body else None)
    return success_envelope(
        "Access token refreshed successfully",
        refreshed.model_dump(mode="json", by_alias=True),
    )
