"""
Base repository class for store access.

Provides a common abstraction layer for all repositories, encapsulating
DocumentStore access and the paginated query builder.
"""

from typing import Any, Generic, Iterable, Optional, TypeVar

from .pagination import EntityKind, PageRequest, PageResult, QueryBuilder
from .store import DocumentStore, FieldFilter, FilterOp, StoreQuery

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for store operations:
    - DocumentStore access via self._store
    - Paginated listing via self._queries
    - Document-to-model mapping through the repository's EntityKind

    Subclasses set ``kind`` and add domain-specific lookups.

    Example:
        class UserRepository(BaseRepository[User]):
            kind = USER_KIND

            async def get_by_email(self, email: str) -> Optional[User]:
                return await self.find_one_by("email", email)
    """

    kind: EntityKind[T]

    def __init__(self, store: DocumentStore) -> None:
        """
        Initialize the repository with a document store.

        Args:
            store: DocumentStore used for all reads and writes.
        """
        self._store = store
        self._queries = QueryBuilder(store)

    async def get_by_id(self, doc_id: str, populate: Iterable[str] = ()) -> Optional[T]:
        doc = await self._store.find_by_id(self.kind.collection, doc_id)
        if doc is None:
            return None
        [doc] = await self._queries.populate(self.kind, [doc], populate)
        return self.kind.parse(doc)

    async def exists(self, doc_id: str) -> bool:
        return await self._store.find_by_id(self.kind.collection, doc_id) is not None

    async def find_one_by(self, field_name: str, value: Any) -> Optional[T]:
        query = StoreQuery(all_of=(FieldFilter(field_name, FilterOp.EQ, value),))
        doc = await self._store.find_one(self.kind.collection, query)
        return self.kind.parse(doc) if doc is not None else None

    async def insert(self, document: dict[str, Any], populate: Iterable[str] = ()) -> T:
        doc = await self._store.insert(self.kind.collection, document)
        [doc] = await self._queries.populate(self.kind, [doc], populate)
        return self.kind.parse(doc)

    async def update(
        self,
        doc_id: str,
        changes: dict[str, Any],
        populate: Iterable[str] = (),
    ) -> Optional[T]:
        doc = await self._store.update_by_id(self.kind.collection, doc_id, changes)
        if doc is None:
            return None
        [doc] = await self._queries.populate(self.kind, [doc], populate)
        return self.kind.parse(doc)

    async def delete(self, doc_id: str) -> bool:
        return await self._store.delete_by_id(self.kind.collection, doc_id) is not None

    async def page(
        self,
        request: PageRequest,
        populate: Iterable[str] = (),
        base: StoreQuery = StoreQuery(),
    ) -> PageResult[T]:
        return await self._queries.execute(self.kind, request, populate=populate, base=base)
