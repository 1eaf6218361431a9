"""
Authentication module exceptions.

Token errors never leave the request context builder: a bad token only
means the request runs unauthenticated. Login failures do reach the caller.
"""

from shared.exceptions import InternalFailureError


class TokenError(Exception):
    """Base for bearer token verification failures."""

    code = "INVALID_TOKEN"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTokenError(TokenError):
    """Raised when a token is malformed or its signature does not verify."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message)


class ExpiredTokenError(TokenError):
    """Raised when a token has expired."""

    code = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message)


class MissingTokenError(TokenError):
    """Raised when no bearer token is provided."""

    code = "MISSING_TOKEN"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class LoginFailedError(InternalFailureError):
    """
    Raised when login cannot establish an identity.

    Unknown email and wrong password are indistinguishable to the caller.
    """

    def __init__(self) -> None:
        super().__init__(
            "Login failed",
            reason="LOGIN_FAILED",
            message_key="loginFailed",
        )
