"""
Comment repository for store access.
"""

from modules.posts.repository import POSTS
from modules.users.repository import USERS
from shared.pagination import EntityKind, FilterRule
from shared.repository import BaseRepository
from shared.store import FieldFilter, FilterOp, SortKey, StoreQuery

from .models import Comment

COMMENTS = "comments"

COMMENT_KIND: EntityKind[Comment] = EntityKind(
    collection=COMMENTS,
    parse=Comment.from_document,
    timestamp_field="publish_date",
    sort_options={
        "publishDate_asc": SortKey("publish_date", descending=False),
        "publishDate_desc": SortKey("publish_date", descending=True),
        "createdAt_asc": SortKey("publish_date", descending=False),
        "createdAt_desc": SortKey("publish_date", descending=True),
    },
    filter_rules={
        "message": FilterRule.TEXT,
        "publish_date": FilterRule.DATE_FROM,
    },
    references={"owner": USERS, "post": POSTS},
)


class CommentRepository(BaseRepository[Comment]):
    """Repository for comment data access."""

    kind = COMMENT_KIND

    @staticmethod
    def on_post(post_id: str) -> StoreQuery:
        return StoreQuery(all_of=(FieldFilter("post", FilterOp.EQ, post_id),))

    @staticmethod
    def written_by(user_id: str) -> StoreQuery:
        return StoreQuery(all_of=(FieldFilter("owner", FilterOp.EQ, user_id),))
