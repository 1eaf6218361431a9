"""
Authentication module interface.

The request context builder and the login resolver depend on IAuthService,
not the concrete implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.users.models import User
from shared.models import AuthenticatedUser

from .models import AuthPayload


@runtime_checkable
class IAuthService(Protocol):
    """Contract for token issuance, verification and login."""

    def issue_token(self, user: User) -> str:
        """Sign a token for the user, valid for the configured lifetime."""
        ...

    def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Verify a token and return the identity it asserts.

        Verification is local and synchronous.

        Raises:
            MissingTokenError: Empty token
            ExpiredTokenError: Token has expired
            InvalidTokenError: Malformed token or bad signature
        """
        ...

    async def login(self, email: str, password: Optional[str] = None) -> AuthPayload:
        """
        Exchange an email (and password, when the user has one) for a token.

        Raises:
            LoginFailedError: Unknown email or rejected credentials
        """
        ...
