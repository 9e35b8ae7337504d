"""Response Envelope: the single JSON shape every response is wrapped in.

Invariants:
    - Keys are always success, message, data, errors, statusCode
    - pagination is present only when a list endpoint supplies it
    - pages = ceil(total / limit)
"""

import math
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Pagination:
    """Derived list view-state. Never persisted."""
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def compute(cls, total: int, page: int, limit: int) -> "Pagination":
        if limit < 1:
            raise ValueError("limit must be >= 1")
        return cls(
            total=total, page=page, limit=limit,
            pages=math.ceil(total / limit),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_envelope(
    *,
    success: bool,
    message: str,
    status_code: int,
    data: Any = None,
    errors: Any = None,
    pagination: Pagination | None = None,
) -> dict:
    """Build the envelope dict. Callers pass JSON-ready data."""
    envelope = {
        "success": success,
        "message": message,
        "data": data,
        "errors": errors,
        "statusCode": status_code,
    }
    if pagination is not None:
        envelope["pagination"] = asdict(pagination)
    return envelope


def success_envelope(
    message: str,
    data: Any = None,
    status_code: int = 200,
    pagination: Pagination | None = None,
) -> dict:
    return build_envelope(
        success=True, message=message, status_code=status_code,
        data=data, pagination=pagination,
    )


def failure_envelope(message: str, status_code: int, errors: Any = None) -> dict:
    return build_envelope(
        success=False, message=message, status_code=status_code, errors=errors,
    )
