"""Domain Types: identity and token types shared across layers.

Invariants:
    - UserId and AuthorId wrap integer primary keys
    - TokenType values are the literal `type` claim written into every JWT
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
AuthorId = NewType("AuthorId", int)


# ─── Enums ───────────────────────────────────────────────────────

class TokenType(str, Enum):
    """Which secret signed a token, mirrored in its `type` claim."""
    ACCESS = "access"
    REFRESH = "refresh"


# ─── Claims ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AccessClaims:
    """Identity decoded from a verified token. Rebuilt on every request."""
    user_id: UserId
    token_type: TokenType
    issued_at: datetime
    expires_at: datetime
    email: str | None = None


# ─── Bounds ──────────────────────────────────────────────────────

# Primary keys are 32-bit serials; larger ids can never match a row.
MAX_ID = 2**31 - 1
