"""
Wire formatting of execution errors.

Every error that leaves the server is one of the five taxonomy kinds.
Typed errors raised by resolvers keep their kind and get a localized
message. Errors raised by the GraphQL layer itself (unknown fields or
operations, bad variables) become OperationNotSupported or
InvalidParameters. Anything else is an InternalFailure whose message says
nothing about the cause.
"""

from typing import TYPE_CHECKING, Any

from graphql import GraphQLError

from shared.exceptions import (
    ApiError,
    InternalFailureError,
    InvalidParametersError,
    OperationNotSupportedError,
)

if TYPE_CHECKING:
    from api.versions.base import ResolverSet

# GraphQL-layer messages that point at argument values, not at the operation
_PARAMETER_MARKERS = ("Variable", "Expected value of type", "cannot represent")


def classify_error(error: GraphQLError) -> ApiError:
    """Map an execution error onto the taxonomy."""
    original = error.original_error
    if isinstance(original, ApiError):
        return original
    if original is None and error.path is None:
        if any(marker in error.message for marker in _PARAMETER_MARKERS):
            return InvalidParametersError(error.message, reason="INVALID_ARGUMENT")
        return OperationNotSupportedError(
            error.message,
            reason="INVALID_OPERATION",
            message_key="invalidOperation",
        )
    return InternalFailureError(message_key="internalError")


def format_error(error: GraphQLError, resolvers: "ResolverSet") -> dict[str, Any]:
    """
    Render one error in the wire shape ``{message, extensions, path?}``.

    Messages are translated in the locale of the request's version.
    """
    api_error = classify_error(error)
    if isinstance(api_error, OperationNotSupportedError) and api_error.message == error.message:
        # keep the parser's explanation, it names the offending field
        message = error.message
    else:
        message = resolvers.localize_error(
            api_error.message_key, api_error.message, **api_error.params
        )
    body = api_error.to_dict(message)
    if error.path:
        body["path"] = list(error.path)
    return body


def format_request_error(error: ApiError, resolvers: "ResolverSet") -> dict[str, Any]:
    """Render an error raised before execution started (e.g. empty body)."""
    message = resolvers.localize_error(error.message_key, error.message, **error.params)
    return error.to_dict(message)
