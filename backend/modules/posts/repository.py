"""
Post repository for store access.
"""

from typing import Optional

from modules.users.repository import USERS
from shared.pagination import EntityKind, FilterRule
from shared.repository import BaseRepository
from shared.store import FieldFilter, FilterOp, SortKey, StoreQuery

from .models import Post

POSTS = "posts"

POST_KIND: EntityKind[Post] = EntityKind(
    collection=POSTS,
    parse=Post.from_document,
    timestamp_field="publish_date",
    sort_options={
        "publishDate_asc": SortKey("publish_date", descending=False),
        "publishDate_desc": SortKey("publish_date", descending=True),
        "createdAt_asc": SortKey("publish_date", descending=False),
        "createdAt_desc": SortKey("publish_date", descending=True),
        "likes_asc": SortKey("likes", descending=False),
        "likes_desc": SortKey("likes", descending=True),
    },
    filter_rules={
        "text": FilterRule.TEXT,
        "owner": FilterRule.REFERENCE,
        "tags": FilterRule.TAGS,
        "publish_date": FilterRule.DATE_FROM,
    },
    references={"owner": USERS},
)


class PostRepository(BaseRepository[Post]):
    """Repository for post data access."""

    kind = POST_KIND

    async def get_by_idempotency_key(self, key: str) -> Optional[Post]:
        return await self.find_one_by("idempotency_key", key)

    async def all_tag_lists(self) -> list[list[str]]:
        """Tag arrays of every post, oldest first."""
        documents = await self._store.find(POSTS, sort=SortKey("publish_date", descending=False))
        return [doc.get("tags") or [] for doc in documents]

    @staticmethod
    def owned_by(user_id: str) -> StoreQuery:
        return StoreQuery(all_of=(FieldFilter("owner", FilterOp.EQ, user_id),))

    @staticmethod
    def tagged(tag: str) -> StoreQuery:
        return StoreQuery(all_of=(FieldFilter("tags", FilterOp.OVERLAPS, [tag]),))

    @staticmethod
    def search_query(text: str) -> StoreQuery:
        """Substring match on text or link, or an exact tag match."""
        return StoreQuery(
            any_of=(
                FieldFilter("text", FilterOp.CONTAINS, text),
                FieldFilter("link", FilterOp.CONTAINS, text),
                FieldFilter("tags", FilterOp.OVERLAPS, [text]),
            )
        )
