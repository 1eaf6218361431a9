"""
Users service implementation.

Validates identifiers and payloads before touching the store, deduplicates
creations by idempotency key, and maps unique-key conflicts to InvalidBody.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from modules.auth.passwords import PasswordHasher
from shared.pagination import PageRequest, PageResult
from shared.store import DuplicateKeyError
from shared.validation import (
    DuplicateIdempotencyKeyError,
    check_email,
    check_id,
    require_fields,
    validate_payload,
)

from .exceptions import EmailExistsError, UserNotFoundError
from .interfaces import IUserService
from .models import CreateUserInput, UpdateUserInput, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "email")


class UserService(IUserService):
    """
    User operations: create, read, list, search, update, delete.

    Implements IUserService.
    """

    def __init__(
        self,
        repository: UserRepository,
        passwords: Optional[PasswordHasher] = None,
    ) -> None:
        self._repo = repository
        self._passwords = passwords or PasswordHasher()

    @property
    def repository(self) -> UserRepository:
        return self._repo

    async def create_user(self, payload: Mapping[str, Any]) -> User:
        """
        Create a user, or return the existing one for a known idempotency key.

        Raises:
            MissingRequiredFieldsError: firstName, lastName or email absent
            InvalidEmailError: Email is syntactically invalid
            PayloadValidationError: Field types or lengths are invalid
            EmailExistsError: Email already registered
            DuplicateIdempotencyKeyError: Lost a creation race on the key
        """
        require_fields(payload, REQUIRED_FIELDS)
        check_email(payload["email"])
        data = validate_payload(CreateUserInput, payload)

        if data.idempotency_key:
            existing = await self._repo.get_by_idempotency_key(data.idempotency_key)
            if existing is not None:
                logger.debug("Idempotent replay of user creation %s", data.idempotency_key)
                return existing

        document = data.model_dump(mode="json", exclude_none=True, exclude={"password"})
        document["register_date"] = datetime.now(timezone.utc).isoformat()
        if data.password:
            document["password_hash"] = self._passwords.hash(data.password)

        try:
            return await self._repo.insert(document)
        except DuplicateKeyError as e:
            raise self._conflict(e, data.email, data.idempotency_key) from e

    async def get_user(self, user_id: str) -> User:
        """
        Raises:
            InvalidIdentifierError: Malformed id
            UserNotFoundError: No such user
        """
        check_id(user_id, "user", "invalidUserID")
        user = await self._repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def find_user(self, user_id: str) -> Optional[User]:
        """Lookup without validation, for resolving references."""
        return await self._repo.get_by_id(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._repo.get_by_email(email)

    async def list_users(self, request: PageRequest) -> PageResult[User]:
        return await self._repo.page(request)

    async def search_users(self, text: str, request: PageRequest) -> PageResult[User]:
        return await self._repo.page(request, base=self._repo.search_query(text))

    async def update_user(self, user_id: str, payload: Mapping[str, Any]) -> User:
        """
        Merge the provided fields into a user and return the result.

        Raises:
            InvalidIdentifierError: Malformed id
            InvalidEmailError: New email is syntactically invalid
            EmailExistsError: New email already registered
            UserNotFoundError: No such user
        """
        check_id(user_id, "user", "invalidUserID")
        if payload.get("email") is not None:
            check_email(payload["email"])
        data = validate_payload(UpdateUserInput, payload)
        changes = data.model_dump(mode="json", exclude_none=True)

        try:
            user = (
                await self._repo.update(user_id, changes)
                if changes
                else await self._repo.get_by_id(user_id)
            )
        except DuplicateKeyError as e:
            raise self._conflict(e, data.email or "", None) from e
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def delete_user(self, user_id: str) -> str:
        check_id(user_id, "user", "invalidUserID")
        if not await self._repo.delete(user_id):
            raise UserNotFoundError(user_id)
        return user_id

    @staticmethod
    def _conflict(
        error: DuplicateKeyError,
        email: str,
        idempotency_key: Optional[str],
    ) -> Exception:
        if error.key == "idempotency_key":
            return DuplicateIdempotencyKeyError(idempotency_key or "")
        return EmailExistsError(email)
