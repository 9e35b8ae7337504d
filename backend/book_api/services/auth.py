"""Auth Service: registration, login and refresh-token exchange.

Invariants:
    - Passwords are stored only as bcrypt hashes
    - Unknown email and wrong password produce the same 401 message
    - Refresh exchange mints an access token for the same subject and leaves
      the refresh token valid (no rotation, no revocation list)
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.config import Settings
from book_api.core.errors import (
    AuthenticationFailure, ConflictError, InvalidTokenError, MissingTokenError,
)
from book_api.core.tokens import (
    issue_access_token, issue_refresh_token, verify_refresh_token,
)
from book_api.infrastructure.database import translate_store_errors
from book_api.infrastructure.passwords import hash_password, verify_password
from book_api.models.user import User
from book_api.schemas.auth import (
    LoginRequest, LoginResponse, RefreshResponse, RegisterRequest,
)
from book_api.schemas.user import UserResponse

logger = logging.getLogger(__name__)

_USER_EXISTS = "User already exists"


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def register(self, body: RegisterRequest) -> UserResponse:
        """Create an account. 409 when the email is taken."""
        async with translate_store_errors(self.db, "Registration failed", _USER_EXISTS):
            existing = await self.db.scalar(
                select(User.id).where(User.email == body.email),
            )
            if existing is not None:
                raise ConflictError(_USER_EXISTS)

            hashed = await hash_password(body.password, self.settings.bcrypt_rounds)
            user = User(username=body.username, email=body.email, password=hashed)
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return UserResponse.model_validate(user)

    async def login(self, body: LoginRequest) -> LoginResponse:
        async with translate_store_errors(self.db, "Login failed"):
            user = await self.db.scalar(select(User).where(User.email == body.email))
        if user is None or not await verify_password(body.password, user.password):
            logger.warning("Login rejected")
            raise AuthenticationFailure()

        logger.info("User logged in", extra={"user_id": user.id})
        return LoginResponse(
            user=UserResponse(id=user.id, username=user.username, email=user.email),
            access_token=issue_access_token(user.id, self.settings, user.email),
            refresh_token=issue_refresh_token(user.id, self.settings, user.email),
        )

    def refresh(self, refresh_token: Any) -> RefreshResponse:
        """Exchange a refresh token for a fresh access token.

        refresh_token is the raw JSON value: absent or empty is a 401, any
        non-string is rejected like a bad token.
        """
        if refresh_token is None or refresh_token == "":
            raise MissingTokenError("Refresh token is required")
        if not isinstance(refresh_token, str):
            logger.warning("Refresh token rejected: not a string")
            raise InvalidTokenError(
                "Invalid refresh token", reason="Refresh token must be a string",
            )
        try:
            claims = verify_refresh_token(refresh_token, self.settings)
        except InvalidTokenError as exc:
            logger.warning(f"Refresh token rejected: {exc.errors}")
            raise InvalidTokenError("Invalid refresh token", reason=exc.errors) from exc
        return RefreshResponse(
            access_token=issue_access_token(claims.user_id, self.settings, claims.email),
        )
