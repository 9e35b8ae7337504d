"""User Service: self-service read/update/delete of the caller's own account.

Invariants:
    - The user id always comes from verified claims, never from the request body
    - A token whose subject no longer exists yields 404, and the store is untouched
    - Email changes that collide with another account yield 409
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.core.domain_types import UserId
from book_api.core.errors import NotFoundError
from book_api.infrastructure.database import translate_store_errors
from book_api.models.user import User
from book_api.schemas.user import UserResponse, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_or_404(self, user_id: UserId) -> User:
        user = await self.db.scalar(select(User).where(User.id == user_id))
        if user is None:
            raise NotFoundError("User")
        return user

    async def get_me(self, user_id: UserId) -> UserResponse:
        async with translate_store_errors(self.db, "Failed to retrieve user details"):
            user = await self._get_or_404(user_id)
        return UserResponse.model_validate(user)

    async def update_me(self, user_id: UserId, body: UserUpdate) -> UserResponse:
        async with translate_store_errors(
            self.db, "Failed to update user details", "Email is already in use",
        ):
            exists = await self.db.scalar(select(User.id).where(User.id == user_id))
            if exists is None:
                raise NotFoundError("User")
            result = await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(
                    username=body.username,
                    email=body.email,
                    updated_at=datetime.now(timezone.utc),
                )
                .returning(User),
                execution_options={"synchronize_session": False},
            )
            user = result.scalar_one_or_none()
            if user is None:
                raise NotFoundError("User")
            response = UserResponse.model_validate(user)
            await self.db.commit()
        logger.info("User details updated", extra={"user_id": user_id})
        return response

    async def delete_me(self, user_id: UserId) -> UserResponse:
        """Delete the caller's account and return what it looked like."""
        async with translate_store_errors(self.db, "Failed to delete user"):
            user = await self._get_or_404(user_id)
            snapshot = UserResponse.model_validate(user)
            await self.db.execute(
                delete(User).where(User.id == user_id),
                execution_options={"synchronize_session": False},
            )
            await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})
        return snapshot
