"""User Routes: the authenticated caller's own account (/users/me)."""

import logging

from fastapi import APIRouter, Depends

from book_api.api.dependencies import get_current_claims, get_user_service, validated_body
from book_api.core.domain_types import AccessClaims
from book_api.core.envelope import success_envelope
from book_api.schemas.user import UserUpdate
from book_api.services.users import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def get_me(
    claims: AccessClaims = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_me(claims.user_id)
    return success_envelope(
        "User details retrieved successfully", user.model_dump(mode="json"),
    )


@router.put("/me")
async def update_me(
    body: UserUpdate = Depends(validated_body(UserUpdate)),
    claims: AccessClaims = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_me(claims.user_id, body)
    return success_envelope(
        "User details updated successfully", user.model_dump(mode="json"),
    )


@router.delete("/me")
async def delete_me(
    claims: AccessClaims = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    user = await service.delete_me(claims.user_id)
    return success_envelope("User deleted successfully", user.model_dump(mode="json"))
