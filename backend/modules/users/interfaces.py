"""
Users module interface.

The resolver layer depends on IUserService, not the concrete implementation.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from shared.pagination import PageRequest, PageResult

from .models import User


@runtime_checkable
class IUserService(Protocol):
    """Contract the users module exposes to the resolver layer."""

    async def create_user(self, payload: Mapping[str, Any]) -> User:
        """
        Create a user.

        A payload with an idempotency key that was already used returns the
        user created for that key instead of creating a second one.

        Raises:
            InvalidBodyError: Missing fields, bad email, duplicate email
        """
        ...

    async def get_user(self, user_id: str) -> User:
        """
        Raises:
            InvalidParametersError: Malformed id
            ResourceNotFoundError: No such user
        """
        ...

    async def find_user(self, user_id: str) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    async def list_users(self, request: PageRequest) -> PageResult[User]:
        ...

    async def search_users(self, text: str, request: PageRequest) -> PageResult[User]:
        ...

    async def update_user(self, user_id: str, payload: Mapping[str, Any]) -> User:
        ...

    async def delete_user(self, user_id: str) -> str:
        """Delete a user and return its id."""
        ...
