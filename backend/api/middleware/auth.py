"""
Bearer token authentication.

Identity is optional for every operation: a missing, malformed, expired or
wrongly signed token is logged and the request continues unauthenticated.
"""

import logging
from typing import Optional

from modules.auth.exceptions import TokenError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    Returns None for a missing header or any other scheme.
    """
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def authenticate(
    authorization: Optional[str],
    auth: IAuthService,
) -> Optional[AuthenticatedUser]:
    """
    Verify the bearer token, if any.

    Never raises for token problems.

    Usage:
        user = authenticate(request.headers.get("authorization"), container.auth)
        if user:
            ...
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None

    try:
        return auth.validate_token(token)
    except TokenError as e:
        logger.warning("Ignoring bearer token (%s): %s", e.code, e.message)
        return None
