"""
Posts service implementation.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from modules.users.exceptions import UserNotFoundError
from modules.users.models import User
from modules.users.repository import UserRepository
from shared.models import resolve_or_fetch
from shared.pagination import PageRequest, PageResult
from shared.store import DuplicateKeyError
from shared.validation import (
    DuplicateIdempotencyKeyError,
    check_id,
    require_fields,
    validate_payload,
)

from .exceptions import PostNotFoundError
from .interfaces import IPostService
from .models import CreatePostInput, Post, UpdatePostInput
from .repository import PostRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("text", "owner")
OWNER = ("owner",)


class PostService(IPostService):
    """
    Post operations plus the derived tag set.

    Lists embed the owner document so that resolving ``post.owner`` usually
    needs no further lookup.

    Implements IPostService.
    """

    def __init__(self, repository: PostRepository, users: UserRepository) -> None:
        self._repo = repository
        self._users = users

    @property
    def repository(self) -> PostRepository:
        return self._repo

    async def create_post(self, payload: Mapping[str, Any]) -> Post:
        """
        Create a post, or return the existing one for a known idempotency key.

        Raises:
            MissingRequiredFieldsError: text or owner absent
            InvalidIdentifierError: Owner id malformed
            PayloadValidationError: Text length or likes out of range
            UserNotFoundError: Owner does not exist
            DuplicateIdempotencyKeyError: Lost a creation race on the key
        """
        require_fields(payload, REQUIRED_FIELDS)
        check_id(payload["owner"], "owner", "invalidOwnerID")
        data = validate_payload(CreatePostInput, payload)

        if data.idempotency_key:
            existing = await self._repo.get_by_idempotency_key(data.idempotency_key)
            if existing is not None:
                logger.debug("Idempotent replay of post creation %s", data.idempotency_key)
                return existing

        if not await self._users.exists(data.owner):
            raise UserNotFoundError(data.owner)

        document = data.model_dump(mode="json", exclude_none=True)
        document["publish_date"] = datetime.now(timezone.utc).isoformat()

        try:
            return await self._repo.insert(document, populate=OWNER)
        except DuplicateKeyError as e:
            raise DuplicateIdempotencyKeyError(data.idempotency_key or "") from e

    async def get_post(self, post_id: str) -> Post:
        """
        Raises:
            InvalidIdentifierError: Malformed id
            PostNotFoundError: No such post
        """
        check_id(post_id, "post", "invalidPostID")
        post = await self._repo.get_by_id(post_id, populate=OWNER)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def find_post(self, post_id: str) -> Optional[Post]:
        return await self._repo.get_by_id(post_id)

    async def list_posts(self, request: PageRequest) -> PageResult[Post]:
        return await self._repo.page(request, populate=OWNER)

    async def posts_by_user(self, user_id: str, request: PageRequest) -> PageResult[Post]:
        check_id(user_id, "user", "invalidUserID")
        return await self._repo.page(request, populate=OWNER, base=self._repo.owned_by(user_id))

    async def posts_by_tag(self, tag: str, request: PageRequest) -> PageResult[Post]:
        return await self._repo.page(request, populate=OWNER, base=self._repo.tagged(tag))

    async def search_posts(self, text: str, request: PageRequest) -> PageResult[Post]:
        return await self._repo.page(request, populate=OWNER, base=self._repo.search_query(text))

    async def tags(self) -> list[str]:
        """De-duplicated union of every post's tags, in first-seen order."""
        seen: dict[str, None] = {}
        for tag_list in await self._repo.all_tag_lists():
            for tag in tag_list:
                seen.setdefault(tag, None)
        return list(seen)

    async def update_post(self, post_id: str, payload: Mapping[str, Any]) -> Post:
        """
        Merge the provided fields into a post and return the result.

        Raises:
            InvalidIdentifierError: Malformed post or owner id
            UserNotFoundError: New owner does not exist
            PostNotFoundError: No such post
        """
        check_id(post_id, "post", "invalidPostID")
        if payload.get("owner") is not None:
            check_id(payload["owner"], "owner", "invalidOwnerID")
        data = validate_payload(UpdatePostInput, payload)
        changes = data.model_dump(mode="json", exclude_none=True)

        if data.owner and not await self._users.exists(data.owner):
            raise UserNotFoundError(data.owner)

        if changes:
            post = await self._repo.update(post_id, changes, populate=OWNER)
        else:
            post = await self._repo.get_by_id(post_id, populate=OWNER)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def delete_post(self, post_id: str) -> str:
        check_id(post_id, "post", "invalidPostID")
        if not await self._repo.delete(post_id):
            raise PostNotFoundError(post_id)
        return post_id

    async def resolve_owner(self, post: Post) -> User:
        """Embedded owner if present, else a lookup by id."""
        return await resolve_or_fetch(
            post.owner,
            self._users.get_by_id,
            "failedToFetchPostOwner",
            "Failed to fetch post owner",
        )
