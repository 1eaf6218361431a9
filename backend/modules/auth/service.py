"""
Authentication service implementation.

Signs and verifies HS256 tokens with the process-wide shared secret and
handles login by email.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from modules.users.models import User
from modules.users.repository import UserRepository
from shared.config import Settings
from shared.models import AuthenticatedUser

from .exceptions import ExpiredTokenError, InvalidTokenError, LoginFailedError, MissingTokenError
from .interfaces import IAuthService
from .models import AuthPayload, TokenClaims
from .passwords import PasswordHasher

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Implements IAuthService.
    """

    def __init__(
        self,
        settings: Settings,
        users: UserRepository,
        passwords: Optional[PasswordHasher] = None,
    ) -> None:
        self._settings = settings
        self._users = users
        self._passwords = passwords or PasswordHasher()

    def issue_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        claims = TokenClaims(
            user_id=user.id,
            email=user.email,
            iat=int(now.timestamp()),
            exp=int((now + timedelta(seconds=self._settings.token_ttl_seconds)).timestamp()),
        )
        return jwt.encode(
            claims.model_dump(by_alias=True),
            self._settings.jwt_secret,
            algorithm=self._settings.jwt_algorithm,
        )

    def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Verify a token signed by issue_token.

        Raises:
            MissingTokenError: Empty token
            ExpiredTokenError: Token has expired
            InvalidTokenError: Malformed token, bad signature or missing claims
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        if "userId" not in payload:
            raise InvalidTokenError("Token has no userId claim")
        return AuthenticatedUser(id=str(payload["userId"]), email=payload.get("email") or "")

    async def login(self, email: str, password: Optional[str] = None) -> AuthPayload:
        """
        Look up a user by exact email and issue a token.

        Users created with a password must present it. Users without one can
        only log in by email while passwordless login is enabled.

        Raises:
            LoginFailedError: Unknown email or rejected credentials
        """
        user = await self._users.get_by_email(email)
        if user is None:
            logger.info("Login rejected: unknown email")
            raise LoginFailedError()

        if user.password_hash:
            if not password or not self._passwords.verify(user.password_hash, password):
                logger.info("Login rejected: bad credentials for user %s", user.id)
                raise LoginFailedError()
        elif not self._settings.allow_passwordless_login:
            logger.info("Login rejected: user %s has no password", user.id)
            raise LoginFailedError()

        return AuthPayload(token=self.issue_token(user), user=user)
