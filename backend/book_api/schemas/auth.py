"""Auth Schemas: registration/login bodies and token payloads.

Invariants:
    - username: 3-30 chars after trimming
    - email: trimmed, lower-cased, valid shape
    - password: 6 chars to 72 bytes on register, non-empty on login, never echoed
"""

from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

from book_api.core.validation import (
    RequestModel, reject, reported_as, required,
)
from book_api.infrastructure.passwords import MAX_PASSWORD_BYTES
from book_api.schemas.user import Email, UserResponse


def _fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise reject(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return value


class RegisterRequest(RequestModel):
    redacted_fields: ClassVar[frozenset[str]] = frozenset({"password"})

    username: Annotated[
        str,
        StringConstraints(min_length=3, max_length=30),
        reported_as("Username must be between 3 and 30 characters"),
        required("Username is required"),
    ]
    email: Email
    password: Annotated[
        str,
        StringConstraints(min_length=6),
        reported_as("Password must be at least 6 characters long"),
        AfterValidator(_fits_bcrypt),
    ]


class LoginRequest(RequestModel):
    redacted_fields: ClassVar[frozenset[str]] = frozenset({"password"})

    email: Email
    password: Annotated[str, StringConstraints(min_length=1), reported_as("Password is required")]


class RefreshRequest(BaseModel):
    """Any JSON value is accepted here; the auth service decides what is usable."""
    refresh_token: Any = Field(None, alias="refreshToken")


class LoginResponse(BaseModel):
    """Login data block: public user plus both tokens."""
    model_config = ConfigDict(populate_by_name=True)

    user: UserResponse
    access_token: str = Field(serialization_alias="accessToken")
    refresh_token: str = Field(serialization_alias="refreshToken")


class RefreshResponse(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")
