"""Credential Verifier: issues and verifies bearer JWTs.

Invariants:
    - Access and refresh tokens are signed with different secrets
    - Every token carries a `type` claim; a token of the wrong type is rejected
      even if its signature happens to verify
    - `sub` is the user id as a string; `exp` and `iat` are always present
    - Verification failures raise InvalidTokenError, header problems MissingTokenError

Design Decisions:
    - Clock is a parameter (now): expiry is testable without sleeping or patching
    - Refresh exchange does not rotate or revoke the refresh token
"""

from datetime import datetime, timedelta, timezone

import jwt as pyjwt

from book_api.config import Settings
from book_api.core.domain_types import MAX_ID, AccessClaims, TokenType, UserId
from book_api.core.errors import InvalidTokenError, MissingTokenError

_REQUIRED_CLAIMS = ["sub", "exp", "iat", "type"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _secret_for(token_type: TokenType, settings: Settings) -> str:
    if token_type is TokenType.ACCESS:
        return settings.access_token_secret
    return settings.refresh_token_secret


def _lifetime_for(token_type: TokenType, settings: Settings) -> timedelta:
    if token_type is TokenType.ACCESS:
        return settings.access_token_expiry
    return settings.refresh_token_expiry


def parse_bearer(authorization: str | None) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise MissingTokenError()
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise MissingTokenError("Access token not provided")
    return token


def issue_token(
    token_type: TokenType,
    user_id: int,
    settings: Settings,
    email: str | None = None,
    now: datetime | None = None,
) -> str:
    issued_at = now or _utcnow()
    payload = {
        "sub": str(user_id),
        "type": token_type.value,
        "iat": issued_at,
        "exp": issued_at + _lifetime_for(token_type, settings),
    }
    if email is not None:
        payload["email"] = email
    return pyjwt.encode(
        payload, _secret_for(token_type, settings), algorithm=settings.jwt_algorithm,
    )


def issue_access_token(user_id: int, settings: Settings, email: str | None = None,
                       now: datetime | None = None) -> str:
    return issue_token(TokenType.ACCESS, user_id, settings, email, now)


def issue_refresh_token(user_id: int, settings: Settings, email: str | None = None,
                        now: datetime | None = None) -> str:
    return issue_token(TokenType.REFRESH, user_id, settings, email, now)


def verify_token(
    token: str,
    expected: TokenType,
    settings: Settings,
    now: datetime | None = None,
) -> AccessClaims:
    """Decode token and check signature, expiry and type.

    Raises:
        InvalidTokenError: bad signature, expired, malformed, missing claims,
            or a token of another type.
    """
    current = now or _utcnow()
    try:
        payload = pyjwt.decode(
            token,
            _secret_for(expected, settings),
            algorithms=[settings.jwt_algorithm],
            options={"require": _REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
        )
    except pyjwt.PyJWTError as exc:
        raise InvalidTokenError(reason=str(exc)) from exc

    # exp checked against the injected clock rather than PyJWT's wall clock
    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    if expires_at <= current:
        raise InvalidTokenError(reason="Signature has expired")

    if payload.get("type") != expected.value:
        raise InvalidTokenError(reason=f"Expected {expected.value} token")

    try:
        user_id = UserId(int(payload["sub"]))
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError(reason="Token subject is not a user id") from exc
    if not 1 <= user_id <= MAX_ID:
        raise InvalidTokenError(reason="Token subject is not a user id")

    return AccessClaims(
        user_id=user_id,
        token_type=expected,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=expires_at,
        email=payload.get("email"),
    )


def verify_access_token(token: str, settings: Settings, now: datetime | None = None) -> AccessClaims:
    return verify_token(token, TokenType.ACCESS, settings, now)


def verify_refresh_token(token: str, settings: Settings, now: datetime | None = None) -> AccessClaims:
    return verify_token(token, TokenType.REFRESH, settings, now)
