"""
Comments service implementation.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from modules.posts.exceptions import PostNotFoundError
from modules.posts.models import Post
from modules.posts.repository import PostRepository
from modules.users.exceptions import UserNotFoundError
from modules.users.models import User
from modules.users.repository import UserRepository
from shared.models import resolve_or_fetch
from shared.pagination import PageRequest, PageResult
from shared.validation import check_id, require_fields, validate_payload

from .exceptions import CommentNotFoundError
from .interfaces import ICommentService
from .models import Comment, CreateCommentInput, UpdateCommentInput
from .repository import CommentRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("message", "owner", "post")
REFERENCES = ("owner", "post")


class CommentService(ICommentService):
    """
    Comment operations.

    Both references of a new comment must exist before anything is written.

    Implements ICommentService.
    """

    def __init__(
        self,
        repository: CommentRepository,
        users: UserRepository,
        posts: PostRepository,
    ) -> None:
        self._repo = repository
        self._users = users
        self._posts = posts

    @property
    def repository(self) -> CommentRepository:
        return self._repo

    async def create_comment(self, payload: Mapping[str, Any]) -> Comment:
        """
        Create a comment on an existing post by an existing user.

        Raises:
            MissingRequiredFieldsError: message, owner or post absent
            InvalidIdentifierError: Owner or post id malformed
            PayloadValidationError: Message length out of range
            PostNotFoundError: Post does not exist
            UserNotFoundError: Owner does not exist
        """
        require_fields(payload, REQUIRED_FIELDS)
        check_id(payload["owner"], "owner", "invalidOwnerID")
        check_id(payload["post"], "post", "invalidPostID")
        data = validate_payload(CreateCommentInput, payload)

        if not await self._posts.exists(data.post):
            raise PostNotFoundError(data.post)
        if not await self._users.exists(data.owner):
            raise UserNotFoundError(data.owner)

        document = data.model_dump(mode="json", exclude_none=True)
        document.setdefault("publish_date", datetime.now(timezone.utc).isoformat())
        comment = await self._repo.insert(document, populate=REFERENCES)
        logger.debug("Created comment %s on post %s", comment.id, data.post)
        return comment

    async def get_comment(self, comment_id: str) -> Comment:
        check_id(comment_id, "comment", "invalidCommentID")
        comment = await self._repo.get_by_id(comment_id, populate=REFERENCES)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        return comment

    async def list_comments(self, request: PageRequest) -> PageResult[Comment]:
        return await self._repo.page(request, populate=REFERENCES)

    async def comments_by_post(self, post_id: str, request: PageRequest) -> PageResult[Comment]:
        check_id(post_id, "post", "invalidPostID")
        return await self._repo.page(
            request, populate=REFERENCES, base=self._repo.on_post(post_id)
        )

    async def comments_by_user(self, user_id: str, request: PageRequest) -> PageResult[Comment]:
        check_id(user_id, "user", "invalidUserID")
        return await self._repo.page(
            request, populate=REFERENCES, base=self._repo.written_by(user_id)
        )

    async def update_comment(self, comment_id: str, payload: Mapping[str, Any]) -> Comment:
        check_id(comment_id, "comment", "invalidCommentID")
        changes = validate_payload(UpdateCommentInput, payload).model_dump(exclude_none=True)
        if changes:
            comment = await self._repo.update(comment_id, changes, populate=REFERENCES)
        else:
            comment = await self._repo.get_by_id(comment_id, populate=REFERENCES)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        return comment

    async def delete_comment(self, comment_id: str) -> str:
        check_id(comment_id, "comment", "invalidCommentID")
        if not await self._repo.delete(comment_id):
            raise CommentNotFoundError(comment_id)
        return comment_id

    async def resolve_owner(self, comment: Comment) -> User:
        return await resolve_or_fetch(
            comment.owner,
            self._users.get_by_id,
            "failedToFetchCommentOwner",
            "Failed to fetch comment owner",
        )

    async def resolve_post(self, comment: Comment) -> Post:
        return await resolve_or_fetch(
            comment.post,
            self._posts.get_by_id,
            "failedToFetchCommentPost",
            "Failed to fetch comment post",
        )

    async def find_comment(self, comment_id: str) -> Optional[Comment]:
        return await self._repo.get_by_id(comment_id)
