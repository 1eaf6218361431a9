"""
Mutation payload validation.

Turns pydantic validation failures into InvalidBodyError so callers only
ever see taxonomy errors.
"""

import re
from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from .exceptions import InvalidBodyError, InvalidParametersError
from .store import is_valid_id

M = TypeVar("M", bound=BaseModel)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class MissingRequiredFieldsError(InvalidBodyError):
    """Raised when required payload fields are absent or blank."""

    def __init__(self, fields: list[str]):
        joined = ", ".join(fields)
        super().__init__(
            f"Missing required fields: {joined}",
            reason="MISSING_REQUIRED_FIELDS",
            details={"fields": fields},
            message_key="missingRequiredFields",
            params={"fields": joined},
        )


class PayloadValidationError(InvalidBodyError):
    """Raised when payload fields fail type or range checks."""

    def __init__(self, errors: list[dict[str, Any]]):
        summary = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors
        )
        super().__init__(
            f"Validation error: {summary}",
            reason="VALIDATION_ERROR",
            details={"fields": [".".join(str(p) for p in e.get("loc", ())) for e in errors]},
            message_key="validationError",
            params={"error": summary},
        )


class InvalidEmailError(InvalidBodyError):
    """Raised when an email address is syntactically invalid."""

    def __init__(self, email: str):
        super().__init__(
            "Invalid email format",
            reason="INVALID_EMAIL",
            details={"email": email},
            message_key="invalidEmailFormat",
        )


class InvalidIdentifierError(InvalidParametersError):
    """Raised when an identifier is not well-formed."""

    def __init__(self, field_name: str, value: Any, message_key: str):
        super().__init__(
            f"Invalid {field_name} ID format",
            reason="INVALID_ID",
            details={"field": field_name, "value": value},
            message_key=message_key,
        )


def require_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise MissingRequiredFieldsError listing every absent or blank field."""
    missing = []
    for name in fields:
        value = payload.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(to_camel(name))
    if missing:
        raise MissingRequiredFieldsError(missing)


def validate_payload(model: type[M], payload: Mapping[str, Any]) -> M:
    """Validate a payload against a model, raising PayloadValidationError."""
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise PayloadValidationError(exc.errors(include_url=False)) from exc


def check_email(email: str) -> None:
    if not EMAIL_PATTERN.match(email):
        raise InvalidEmailError(email)


def check_id(value: Any, field_name: str, message_key: str) -> str:
    """Return the identifier unchanged, or raise InvalidIdentifierError."""
    if not is_valid_id(value):
        raise InvalidIdentifierError(field_name, value, message_key)
    return value


class DuplicateIdempotencyKeyError(InvalidBodyError):
    """Raised when a concurrent creation already claimed the idempotency key."""

    def __init__(self, idempotency_key: str = ""):
        super().__init__(
            "A record with this idempotency key already exists",
            reason="IDEMPOTENCY_KEY_EXISTS",
            details={"idempotency_key": idempotency_key} if idempotency_key else {},
            message_key="idempotencyKeyExists",
        )
