"""
Comments module interface.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from modules.posts.models import Post
from modules.users.models import User
from shared.pagination import PageRequest, PageResult

from .models import Comment


@runtime_checkable
class ICommentService(Protocol):
    """Contract the comments module exposes to the resolver layer."""

    async def create_comment(self, payload: Mapping[str, Any]) -> Comment:
        """
        Create a comment. Nothing is written unless both the post and the
        owner exist.

        Raises:
            InvalidBodyError: Missing or malformed fields
            InvalidParametersError: Malformed owner or post id
            ResourceNotFoundError: Post or owner does not exist
        """
        ...

    async def get_comment(self, comment_id: str) -> Comment:
        ...

    async def find_comment(self, comment_id: str) -> Optional[Comment]:
        ...

    async def list_comments(self, request: PageRequest) -> PageResult[Comment]:
        ...

    async def comments_by_post(self, post_id: str, request: PageRequest) -> PageResult[Comment]:
        ...

    async def comments_by_user(self, user_id: str, request: PageRequest) -> PageResult[Comment]:
        ...

    async def update_comment(self, comment_id: str, payload: Mapping[str, Any]) -> Comment:
        ...

    async def delete_comment(self, comment_id: str) -> str:
        ...

    async def resolve_owner(self, comment: Comment) -> User:
        ...

    async def resolve_post(self, comment: Comment) -> Post:
        ...
