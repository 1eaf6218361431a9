"""
Authentication module.

Handles token issuance and verification and login by email.

Public API:
- IAuthService: Interface for auth operations
- TokenClaims, AuthPayload: Data models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, MissingTokenError,
  LoginFailedError
"""

from .interfaces import IAuthService
from .models import AuthPayload, TokenClaims
from .exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    LoginFailedError,
    MissingTokenError,
    TokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "TokenClaims",
    "AuthPayload",
    # Exceptions
    "TokenError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "LoginFailedError",
]
