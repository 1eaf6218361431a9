"""
User repository for store access.
"""

from typing import Optional

from shared.pagination import EntityKind, FilterRule
from shared.repository import BaseRepository
from shared.store import FieldFilter, FilterOp, SortKey, StoreQuery

from .models import User

USERS = "users"

USER_KIND: EntityKind[User] = EntityKind(
    collection=USERS,
    parse=User.from_document,
    timestamp_field="register_date",
    sort_options={
        "registerDate_asc": SortKey("register_date", descending=False),
        "registerDate_desc": SortKey("register_date", descending=True),
        "createdAt_asc": SortKey("register_date", descending=False),
        "createdAt_desc": SortKey("register_date", descending=True),
    },
    filter_rules={
        "first_name": FilterRule.TEXT,
        "last_name": FilterRule.TEXT,
        "email": FilterRule.TEXT,
        "gender": FilterRule.EXACT,
    },
)

SEARCH_FIELDS = ("first_name", "last_name", "email", "phone")


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Note: This repository does NOT validate identifiers or payloads.
    The service layer is responsible for that.
    """

    kind = USER_KIND

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one_by("email", email)

    async def get_by_idempotency_key(self, key: str) -> Optional[User]:
        return await self.find_one_by("idempotency_key", key)

    @staticmethod
    def search_query(text: str) -> StoreQuery:
        """Case-insensitive substring match on any searchable field."""
        return StoreQuery(
            any_of=tuple(FieldFilter(name, FilterOp.CONTAINS, text) for name in SEARCH_FIELDS)
        )
