"""Validation Gate: pydantic request models whose failures become field violations.

Invariants:
    - Checks are pure: no IO, no store access
    - Each field reports at most one violation, carrying its own message
    - A declared field that is absent is validated as null, so it fails with
      that field's message rather than a generic "Field required"
    - Unknown keys are dropped before validation
    - Redacted fields (passwords) never echo their value back in a violation

Design Decisions:
    - Field constraints live in Annotated types (StringConstraints, EmailStr,
      Field bounds); reported_as() wraps a type so every inner failure is
      reported with one PydanticCustomError message
    - required() runs first and strips strings, so "missing", "null" and
      "whitespace only" share the required message
"""

from typing import Any, ClassVar

from pydantic import (
    BaseModel, BeforeValidator, ValidationError, WrapValidator, model_validator,
)
from pydantic_core import PydanticCustomError

BODY_NOT_OBJECT = "Request body must be a JSON object"


def reject(message: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_field", message)


def reported_as(message: str) -> WrapValidator:
    """Replace whatever the wrapped type raises with a single message."""

    def validate(value: Any, handler):
        try:
            return handler(value)
        except ValidationError:
            raise reject(message) from None

    return WrapValidator(validate)


def required(message: str) -> BeforeValidator:
    """Strip strings, then fail with message on null or empty."""

    def check(value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            raise reject(message)
        return value

    return BeforeValidator(check)


def _normalize_email(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


normalized_email = BeforeValidator(_normalize_email)


class RequestModel(BaseModel):
    """Base for gated request bodies."""

    redacted_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def absent_as_null(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        keys = (f.alias or name for name, f in cls.model_fields.items())
        return {key: data.get(key) for key in keys}


def violations_from(exc: ValidationError, redacted: frozenset[str] = frozenset()) -> list[dict]:
    """Flatten a ValidationError into {field, message, value} items."""
    violations = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        if not field:
            violations.append({"field": "body", "message": BODY_NOT_OBJECT, "value": None})
            continue
        violations.append({
            "field": field,
            "message": error["msg"],
            "value": None if field in redacted else error.get("input"),
        })
    return violations
