"""
Error taxonomy for the Chatter API.

Every failure a caller can observe is one of five kinds, each with a stable
wire code. Modules define specific errors by subclassing one of the kinds;
the kind decides the ``extensions.code`` value, the subclass adds a
``reason`` and structured details.
"""

import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class ApiError(Exception):
    """
    Base exception for all typed API errors.

    Attributes:
        message: English message, used when no translation is available.
        reason: Specific machine-readable reason (defaults to the kind code).
        details: Structured detail map merged into the wire extensions.
        message_key: Optional translation key for the localized message.
        params: Interpolation parameters for the translation.
    """

    code: str = "SERVER_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        message_key: Optional[str] = None,
        params: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.reason = reason or self.code
        self.details = details or {}
        self.message_key = message_key
        self.params = params or {}

    def to_dict(self, message: Optional[str] = None) -> dict[str, Any]:
        """Convert to the wire error shape, optionally with a localized message."""
        # details never override the kind code
        extensions = {"reason": self.reason, **self.details, "code": self.code}
        return {
            "message": message or self.message,
            "extensions": extensions,
        }


class InvalidParametersError(ApiError):
    """Malformed identifiers or query arguments."""

    code = "PARAMS_NOT_VALID"
    default_message = "Invalid parameters"


class InvalidBodyError(ApiError):
    """Missing or malformed mutation payload fields, including unique key conflicts."""

    code = "BODY_NOT_VALID"
    default_message = "Invalid input data"


class ResourceNotFoundError(ApiError):
    """A referenced entity id does not resolve."""

    code = "RESOURCE_NOT_FOUND"
    default_message = "Resource not found"


class OperationNotSupportedError(ApiError):
    """Unknown operation or path. Raised by the transport layer only."""

    code = "PATH_NOT_FOUND"
    default_message = "Invalid operation or path"


class InternalFailureError(ApiError):
    """Anything else. The message never carries internal details."""

    code = "SERVER_ERROR"
    default_message = "Internal server error"


def resolver_boundary(message_key: str, message: Optional[str] = None) -> Callable[[F], F]:
    """
    Decorate an async resolver so only taxonomy errors leave it.

    Typed errors pass through unchanged. Any other exception is logged with
    its traceback and replaced by an InternalFailureError carrying the given
    translation key.

    Usage:
        @resolver_boundary("failedToFetchUsers", "Failed to fetch users")
        async def users(self, ctx, ...):
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except ApiError:
                raise
            except Exception as exc:
                logger.exception("Unexpected failure in %s", func.__qualname__)
                raise InternalFailureError(
                    message,
                    message_key=message_key,
                ) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
