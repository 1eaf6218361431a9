"""
Document store contract.

Services talk to storage through DocumentStore: single-document find, count,
insert, update and delete primitives with equality, case-insensitive
substring, array-overlap and lower-bound filtering. The production
implementation lives in shared.database; tests use an in-memory fake.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable


class FilterOp(str, Enum):
    """Supported field predicates."""

    EQ = "eq"              # exact match
    CONTAINS = "contains"  # case-insensitive substring
    OVERLAPS = "overlaps"  # array shares at least one element
    GTE = "gte"            # on or after / at least


@dataclass(frozen=True)
class FieldFilter:
    """A single predicate on one document field."""

    field: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class StoreQuery:
    """
    Conjunction of ``all_of`` predicates, optionally AND-ed with a
    disjunction of ``any_of`` predicates.
    """

    all_of: tuple[FieldFilter, ...] = ()
    any_of: tuple[FieldFilter, ...] = ()

    def and_(self, *filters: FieldFilter) -> "StoreQuery":
        return StoreQuery(all_of=self.all_of + tuple(filters), any_of=self.any_of)

    def or_(self, *filters: FieldFilter) -> "StoreQuery":
        return StoreQuery(all_of=self.all_of, any_of=self.any_of + tuple(filters))


@dataclass(frozen=True)
class SortKey:
    """Ordering on one field."""

    field: str
    descending: bool = True


class DuplicateKeyError(Exception):
    """Raised by a store when an insert or update violates a unique key."""

    def __init__(self, key: str, message: str = ""):
        super().__init__(message or f"Duplicate value for unique key: {key}")
        self.key = key


@runtime_checkable
class DocumentStore(Protocol):
    """
    Interface for the external document store.

    Documents are plain dicts keyed by an ``id`` string. All operations act
    on a single document or return an ordered result set.
    """

    async def find(
        self,
        collection: str,
        query: StoreQuery = StoreQuery(),
        sort: Optional[SortKey] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Return matching documents in sort order after skip/limit."""
        ...

    async def count(self, collection: str, query: StoreQuery = StoreQuery()) -> int:
        """Count documents matching the query."""
        ...

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Return the document with this id, or None."""
        ...

    async def find_one(self, collection: str, query: StoreQuery) -> Optional[dict[str, Any]]:
        """Return the first document matching the query, or None."""
        ...

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a document and return it with its generated id.

        Raises:
            DuplicateKeyError: If a unique key is already taken
        """
        ...

    async def update_by_id(
        self,
        collection: str,
        doc_id: str,
        changes: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        """
        Merge changes into a document and return the updated document.

        Returns None if no document has this id.

        Raises:
            DuplicateKeyError: If a unique key is already taken
        """
        ...

    async def delete_by_id(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Delete a document and return it, or None if it did not exist."""
        ...


def is_valid_id(value: Any) -> bool:
    """Whether a value is a well-formed document identifier (UUID)."""
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def new_id() -> str:
    """Generate a fresh document identifier."""
    return str(uuid.uuid4())
