"""Author Schemas: create/update and batch delete bodies, author response shape.

Invariants:
    - Create and update share one body (replace-on-existing semantics)
    - bio is optional, trimmed, at most 500 chars
    - Batch delete ids: non-empty list of integers within the primary-key range
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from book_api.core.domain_types import MAX_ID
from book_api.core.validation import RequestModel, reported_as, required
from book_api.schemas.user import Email

AuthorIdItem = Annotated[int, Field(strict=True, ge=1, le=MAX_ID)]


class AuthorWrite(RequestModel):
    """Full set of mutable author fields."""
    name: Annotated[str, reported_as("Author name is required"), required("Author name is required")]
    email: Email
    bio: Annotated[
        Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)] | None,
        reported_as("Bio must be less than 500 characters"),
    ] = None


class AuthorBatchDelete(RequestModel):
    ids: Annotated[
        list[AuthorIdItem],
        Field(min_length=1),
        reported_as("Invalid or empty IDs array"),
    ]


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    bio: str | None = None
    created_at: datetime
    updated_at: datetime
