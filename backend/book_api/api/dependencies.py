"""Dependency wiring for routes: validation gate, bearer claims, services.

Invariants:
    - validated_body() validates the JSON body against a RequestModel and raises
      ValidationFailure before the handler body (and before any store access)
    - get_current_claims() accepts access tokens only and stores the claims
      on request.state.claims
"""

import logging
from typing import Callable, Type, TypeVar

from fastapi import Depends, Header, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from book_api.config import Settings, get_settings
from book_api.core.domain_types import AccessClaims
from book_api.core.errors import InvalidTokenError, MissingTokenError, ValidationFailure
from book_api.core.tokens import parse_bearer, verify_access_token
from book_api.core.validation import RequestModel, violations_from
from book_api.infrastructure.database import get_db
from book_api.services.auth import AuthService
from book_api.services.authors import AuthorService
from book_api.services.users import UserService

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=RequestModel)


def validated_body(model: Type[PayloadT]) -> Callable:
    """Build a dependency that validates the JSON body into model."""

    async def dependency(request: Request) -> PayloadT:
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            violations = violations_from(exc, model.redacted_fields)
            logger.warning(
                f"Validation failed on {request.url.path}: "
                f"{[v['field'] for v in violations]}",
                extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
            )
            raise ValidationFailure(violations) from exc

    return dependency


async def get_current_claims(
    request: Request,
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> AccessClaims:
    """Validate the bearer token and attach claims to the request."""
    try:
        token = parse_bearer(authorization)
        claims = verify_access_token(token, settings)
    except (MissingTokenError, InvalidTokenError) as exc:
        logger.warning(
            f"auth.rejected method={request.method} path={request.url.path} reason={exc.code}",
            extra={"path": request.url.path, "method": request.method, "error_code": exc.code},
        )
        raise

    request.state.claims = claims
    logger.debug(
        "auth.accepted",
        extra={"path": request.url.path, "method": request.method, "user_id": claims.user_id},
    )
    return claims


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_author_service(db: AsyncSession = Depends(get_db)) -> AuthorService:
    return AuthorService(db)
