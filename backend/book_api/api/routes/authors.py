"""Author Routes: paginated listing with search, CRUD by id, batch delete.

Invariants:
    - Every route requires a bearer access token
    - On routes with a body, the validation gate runs before the bearer check
    - page >= 1, 1 <= limit <= 100; limit defaults to settings.per_page
    - Path ids and page stay within the 32-bit key range; anything larger is a 400
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from book_api.api.dependencies import (
    get_author_service, get_current_claims, validated_body,
)
from book_api.config import Settings, get_settings
from book_api.core.domain_types import MAX_ID, AccessClaims
from book_api.core.envelope import success_envelope
from book_api.schemas.author import (
    AuthorBatchDelete, AuthorResponse, AuthorWrite,
)
from book_api.services.authors import AuthorService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/authors", tags=["authors"])

AuthorIdPath = Annotated[int, Path(ge=1, le=MAX_ID)]


def _dump(author) -> dict:
    return AuthorResponse.model_validate(author).model_dump(mode="json")


@router.get("")
async def list_authors(
    page: int = Query(1, ge=1, le=MAX_ID),
    limit: int | None = Query(None, ge=1, le=100),
    search: str = Query(""),
    claims: AccessClaims = Depends(get_current_claims),
    settings: Settings = Depends(get_settings),
    service: AuthorService = Depends(get_author_service),
):
    """List authors newest-first, optionally filtered by name."""
    authors, pagination = await service.list_authors(
        page, limit or settings.per_page, search.strip() or None,
    )
    return success_envelope(
        "Authors retrieved successfully",
        [_dump(a) for a in authors],
        pagination=pagination,
    )


@router.get("/{author_id}")
async def get_author(
    author_id: AuthorIdPath,
    claims: AccessClaims = Depends(get_current_claims),
    service: AuthorService = Depends(get_author_service),
):
    author = await service.get_author(author_id)
    return success_envelope("Author retrieved successfully", _dump(author))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_author(
    body: AuthorWrite = Depends(validated_body(AuthorWrite)),
    claims: AccessClaims = Depends(get_current_claims),
    service: AuthorService = Depends(get_author_service),
):
    author = await service.create_author(body)
    return success_envelope(
        "Author created successfully", _dump(author), status.HTTP_201_CREATED,
    )


@router.put("/{author_id}")
async def update_author(
    author_id: AuthorIdPath,
    body: AuthorWrite = Depends(validated_body(AuthorWrite)),
    claims: AccessClaims = Depends(get_current_claims),
    service: AuthorService = Depends(get_author_service),
):
    author = await service.update_author(author_id, body)
    return success_envelope("Author updated successfully", _dump(author))


@router.delete("/{author_id}")
async def delete_author(
    author_id: AuthorIdPath,
    claims: AccessClaims = Depends(get_current_claims),
    service: AuthorService = Depends(get_author_service),
):
    await service.delete_author(author_id)
    return success_envelope("Author deleted successfully")


@router.delete("")
async def delete_authors(
    body: AuthorBatchDelete = Depends(validated_body(AuthorBatchDelete)),
    claims: AccessClaims = Depends(get_current_claims),
    service: AuthorService = Depends(get_author_service),
):
    """Batch delete by id list."""
    deleted = await service.delete_authors(body.ids)
    return success_envelope(
        f"{deleted} authors deleted successfully", {"deletedCount": deleted},
    )
