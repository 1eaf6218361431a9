"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Annotated, Any, Awaitable, Callable, Generic, Optional, TypeVar

from dateutil import parser as date_parser
from pydantic import BaseModel, BeforeValidator, Field

from .exceptions import InternalFailureError

T = TypeVar("T")


class AuthenticatedUser(BaseModel):
    """
    Identity asserted by a verified bearer token.

    Populated from token claims and attached to the request context.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra claims
    }


class Ref(BaseModel, Generic[T]):
    """
    Weak reference to another entity.

    Always carries the identifier; carries the entity itself only when it
    was embedded by the query that loaded the parent. Holding a Ref never
    implies ownership of the referenced entity.
    """

    id: str
    value: Optional[T] = None

    @property
    def is_resolved(self) -> bool:
        return self.value is not None

    @classmethod
    def coerce(cls, raw: Any) -> Any:
        """
        Normalize a stored reference for validation.

        Accepts a bare identifier, an embedded document, or a Ref.
        """
        if isinstance(raw, str):
            return {"id": raw}
        if isinstance(raw, Ref):
            return raw
        if isinstance(raw, BaseModel) and hasattr(raw, "id"):
            return {"id": getattr(raw, "id"), "value": raw}
        if isinstance(raw, dict):
            if "value" in raw:
                return raw
            if "id" in raw:
                return {"id": raw["id"], "value": raw}
        return raw


async def resolve_or_fetch(
    ref: Ref[T],
    fetch: Callable[[str], Awaitable[Optional[T]]],
    failure_key: str,
    failure_message: str,
) -> T:
    """
    Return the embedded entity, or look it up by id.

    A reference is assumed valid once its parent exists, so a failed lookup
    is an InternalFailureError rather than a not-found.
    """
    if ref.value is not None:
        return ref.value
    try:
        found = await fetch(ref.id)
    except Exception as exc:
        raise InternalFailureError(failure_message, message_key=failure_key) from exc
    if found is None:
        raise InternalFailureError(failure_message, message_key=failure_key)
    return found


def _parse_iso(value: Any) -> Any:
    if isinstance(value, str) and value:
        return date_parser.isoparse(value)
    return value


# Accepts ISO 8601 dates and datetimes ("1990-05-17", "2024-01-01T10:00:00Z")
IsoDateTime = Annotated[datetime, BeforeValidator(_parse_iso)]
