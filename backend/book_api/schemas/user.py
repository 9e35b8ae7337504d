"""User Schemas: self-service update body and the public user shape."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr

from book_api.core.validation import RequestModel, normalized_email, reported_as, required

Email = Annotated[EmailStr, reported_as("Invalid email format"), normalized_email]


class UserUpdate(RequestModel):
    username: Annotated[str, reported_as("Username is required"), required("Username is required")]
    email: Email


class UserResponse(BaseModel):
    """Public user fields. The password hash is deliberately absent."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
