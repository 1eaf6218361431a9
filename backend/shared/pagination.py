"""
Paginated query builder.

One filter + sort + skip + limit + count pattern shared by every entity
list operation. An EntityKind describes how a collection is filtered,
sorted and which of its fields reference other collections; QueryBuilder
runs a PageRequest against the store for any kind.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from dateutil import parser as date_parser
from pydantic import BaseModel

from .exceptions import InvalidParametersError
from .store import DocumentStore, FieldFilter, FilterOp, SortKey, StoreQuery, is_valid_id

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class InvalidPaginationError(InvalidParametersError):
    """Raised when page or limit is not a positive integer."""

    def __init__(self, field_name: str, value: Any):
        super().__init__(
            f"Invalid pagination: {field_name} must be a positive integer",
            reason="INVALID_PAGINATION",
            details={"field": field_name, "value": value},
            message_key="invalidPagination",
            params={"field": field_name},
        )


class InvalidFilterError(InvalidParametersError):
    """Raised when a filter value cannot be interpreted."""

    def __init__(self, field_name: str, value: Any, message_key: str = "invalidDateFilter"):
        super().__init__(
            f"Invalid filter value for {field_name}: {value}",
            reason="INVALID_FILTER",
            details={"field": field_name},
            message_key=message_key,
            params={"value": value},
        )


class FilterRule(str, Enum):
    """How a filter value is matched against a field."""

    TEXT = "text"            # case-insensitive substring
    EXACT = "exact"          # equality (enum-like fields)
    REFERENCE = "reference"  # equality on a validated identifier
    TAGS = "tags"            # array shares any of the given labels
    DATE_FROM = "date_from"  # on or after the given date


class PageRequest(BaseModel):
    """A validated page request. Build with PageRequest.build()."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: Optional[str] = None
    filter: dict[str, Any] = {}

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[Mapping[str, Any]] = None,
    ) -> "PageRequest":
        """
        Apply defaults and reject non-positive page or limit.

        Raises:
            InvalidPaginationError: If page < 1 or limit < 1
        """
        page = DEFAULT_PAGE if page is None else page
        limit = DEFAULT_LIMIT if limit is None else limit
        if page < 1:
            raise InvalidPaginationError("page", page)
        if limit < 1:
            raise InvalidPaginationError("limit", limit)
        active = {k: v for k, v in (filter or {}).items() if v is not None}
        return cls(page=page, limit=limit, sort=sort, filter=active)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination block of the list envelope."""

    total_records: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def compute(cls, total_records: int, page: int, limit: int) -> "Pagination":
        return cls(
            total_records=total_records,
            total_pages=math.ceil(total_records / limit),
            current_page=page,
            has_next_page=page * limit < total_records,
            has_previous_page=page > 1,
        )


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of results plus its pagination block."""

    data: list[T]
    pagination: Pagination

    def map(self, fn: Callable[[T], U]) -> "PageResult[U]":
        return PageResult(data=[fn(item) for item in self.data], pagination=self.pagination)


@dataclass(frozen=True)
class EntityKind(Generic[T]):
    """
    Query description of one collection.

    Attributes:
        collection: Store collection name.
        parse: Builds the entity from a (possibly populated) document.
        timestamp_field: Natural timestamp; default order is newest first.
        sort_options: Enumerated sort keys accepted from callers.
        filter_rules: Filterable fields and how each one matches.
        references: Reference fields mapped to the collection they point to.
    """

    collection: str
    parse: Callable[[dict[str, Any]], T]
    timestamp_field: str
    sort_options: Mapping[str, SortKey] = field(default_factory=dict)
    filter_rules: Mapping[str, FilterRule] = field(default_factory=dict)
    references: Mapping[str, str] = field(default_factory=dict)

    @property
    def default_sort(self) -> SortKey:
        return SortKey(self.timestamp_field, descending=True)

    def resolve_sort(self, key: Optional[str]) -> SortKey:
        """Look up a sort key; unknown or missing keys fall back to newest first."""
        if key and key in self.sort_options:
            return self.sort_options[key]
        return self.default_sort

    def build_query(self, filters: Mapping[str, Any]) -> StoreQuery:
        """
        Translate caller filters into store predicates.

        Fields without a rule are ignored.

        Raises:
            InvalidFilterError: If a date or reference value is malformed
        """
        predicates = []
        for name, value in filters.items():
            rule = self.filter_rules.get(name)
            if rule is None or value is None:
                continue
            predicates.append(_predicate(name, rule, value))
        return StoreQuery(all_of=tuple(predicates))


def _predicate(name: str, rule: FilterRule, value: Any) -> FieldFilter:
    if rule is FilterRule.TEXT:
        return FieldFilter(name, FilterOp.CONTAINS, str(value))
    if rule is FilterRule.EXACT:
        return FieldFilter(name, FilterOp.EQ, getattr(value, "value", value))
    if rule is FilterRule.REFERENCE:
        if not is_valid_id(value):
            raise InvalidFilterError(name, value, message_key="invalidOwnerID")
        return FieldFilter(name, FilterOp.EQ, value)
    if rule is FilterRule.TAGS:
        labels = [value] if isinstance(value, str) else list(value)
        return FieldFilter(name, FilterOp.OVERLAPS, labels)
    if rule is FilterRule.DATE_FROM:
        return FieldFilter(name, FilterOp.GTE, parse_date(name, value).isoformat())
    raise ValueError(f"Unknown filter rule: {rule}")


def parse_date(name: str, value: Any) -> datetime:
    """Parse an ISO date string (or datetime) into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, OverflowError) as exc:
            raise InvalidFilterError(name, value) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class QueryBuilder:
    """
    Runs paginated queries against a DocumentStore.

    The count uses the same predicate as the fetch, so totals reflect
    filters rather than the whole collection.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(
        self,
        kind: EntityKind[T],
        request: PageRequest,
        populate: Iterable[str] = (),
        base: StoreQuery = StoreQuery(),
    ) -> PageResult[T]:
        """
        Fetch one page of a collection.

        Args:
            kind: Entity description.
            request: Validated page request.
            populate: Reference fields to embed as full documents.
            base: Fixed predicates AND-ed with the caller's filter
                (e.g. owner = user id, or a search disjunction).

        Returns:
            The page; past the last page ``data`` is empty, not an error.
        """
        query = base.and_(*kind.build_query(request.filter).all_of)
        total = await self._store.count(kind.collection, query)
        documents = await self._store.find(
            kind.collection,
            query,
            sort=kind.resolve_sort(request.sort),
            skip=request.skip,
            limit=request.limit,
        )
        documents = await self.populate(kind, documents, populate)
        return PageResult(
            data=[kind.parse(doc) for doc in documents],
            pagination=Pagination.compute(total, request.page, request.limit),
        )

    async def populate(
        self,
        kind: EntityKind[Any],
        documents: list[dict[str, Any]],
        fields: Iterable[str],
    ) -> list[dict[str, Any]]:
        """
        Embed referenced documents in place of bare identifiers.

        Already-embedded values are left alone. Identifiers that do not
        resolve stay bare and are handled by lazy resolution later.
        """
        targets = {name: kind.references[name] for name in fields if name in kind.references}
        if not targets or not documents:
            return documents
        cache: dict[tuple[str, str], Optional[dict[str, Any]]] = {}
        populated = []
        for doc in documents:
            doc = dict(doc)
            for name, collection in targets.items():
                ref = doc.get(name)
                if not isinstance(ref, str):
                    continue
                key = (collection, ref)
                if key not in cache:
                    cache[key] = await self._store.find_by_id(collection, ref)
                if cache[key] is not None:
                    doc[name] = cache[key]
            populated.append(doc)
        return populated
