"""
Posts module interface.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from modules.users.models import User
from shared.pagination import PageRequest, PageResult

from .models import Post


@runtime_checkable
class IPostService(Protocol):
    """Contract the posts module exposes to the resolver layer."""

    async def create_post(self, payload: Mapping[str, Any]) -> Post:
        """
        Create a post owned by an existing user.

        Raises:
            InvalidBodyError: Missing or malformed fields
            InvalidParametersError: Malformed owner id
            ResourceNotFoundError: Owner does not exist
        """
        ...

    async def get_post(self, post_id: str) -> Post:
        ...

    async def find_post(self, post_id: str) -> Optional[Post]:
        ...

    async def list_posts(self, request: PageRequest) -> PageResult[Post]:
        ...

    async def posts_by_user(self, user_id: str, request: PageRequest) -> PageResult[Post]:
        ...

    async def posts_by_tag(self, tag: str, request: PageRequest) -> PageResult[Post]:
        ...

    async def search_posts(self, text: str, request: PageRequest) -> PageResult[Post]:
        ...

    async def tags(self) -> list[str]:
        ...

    async def update_post(self, post_id: str, payload: Mapping[str, Any]) -> Post:
        ...

    async def delete_post(self, post_id: str) -> str:
        ...

    async def resolve_owner(self, post: Post) -> User:
        """
        Raises:
            InternalFailureError: Owner reference does not resolve
        """
        ...
