"""
Database access for the Chatter API.

Provides the Supabase client factory and SupabaseDocumentStore, the
DocumentStore implementation backed by PostgREST tables.
"""

import logging
import re
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from .config import get_settings
from .store import DuplicateKeyError, FieldFilter, FilterOp, SortKey, StoreQuery

logger = logging.getLogger(__name__)

# Postgres error code for unique_violation
UNIQUE_VIOLATION = "23505"

_KEY_IN_DETAILS = re.compile(r"Key \((?P<key>[\w, ]+)\)")
_KEY_IN_CONSTRAINT = re.compile(r'constraint "\w+?_(?P<key>\w+?)_key"')

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None


def duplicate_key_from(error: APIError) -> str:
    """Extract the violated column name from a unique_violation error."""
    for text, pattern in ((error.details, _KEY_IN_DETAILS), (error.message, _KEY_IN_CONSTRAINT)):
        match = pattern.search(text or "")
        if match:
            return match.group("key")
    return "unknown"


class SupabaseDocumentStore:
    """
    DocumentStore over Supabase tables.

    Each collection is a table with a UUID ``id`` primary key generated by
    the database. Unique constraints on ``email`` and ``idempotency_key``
    are declared in the table schema and reported as DuplicateKeyError.
    """

    def __init__(self, db: Client) -> None:
        self._db = db

    async def find(
        self,
        collection: str,
        query: StoreQuery = StoreQuery(),
        sort: Optional[SortKey] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        builder = self._apply(self._db.table(collection).select("*"), query)
        if sort is not None:
            builder = builder.order(sort.field, desc=sort.descending)
        if limit is not None:
            builder = builder.range(skip, skip + limit - 1)
        elif skip:
            # PostgREST needs an upper bound for an offset
            builder = builder.range(skip, 2**31 - 1)
        result = builder.execute()
        return list(result.data or [])

    async def count(self, collection: str, query: StoreQuery = StoreQuery()) -> int:
        builder = self._db.table(collection).select("id", count="exact")
        result = self._apply(builder, query).execute()
        return result.count or 0

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        result = self._db.table(collection).select("*").eq("id", doc_id).limit(1).execute()
        return result.data[0] if result.data else None

    async def find_one(self, collection: str, query: StoreQuery) -> Optional[dict[str, Any]]:
        builder = self._apply(self._db.table(collection).select("*"), query)
        result = builder.limit(1).execute()
        return result.data[0] if result.data else None

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        try:
            result = self._db.table(collection).insert(document).execute()
        except APIError as e:
            raise self._translate(e) from e
        return result.data[0]

    async def update_by_id(
        self,
        collection: str,
        doc_id: str,
        changes: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        try:
            result = self._db.table(collection).update(changes).eq("id", doc_id).execute()
        except APIError as e:
            raise self._translate(e) from e
        return result.data[0] if result.data else None

    async def delete_by_id(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        result = self._db.table(collection).delete().eq("id", doc_id).execute()
        return result.data[0] if result.data else None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _apply(self, builder: Any, query: StoreQuery) -> Any:
        for item in query.all_of:
            builder = self._apply_filter(builder, item)
        if query.any_of:
            builder = builder.or_(",".join(self._or_clause(item) for item in query.any_of))
        return builder

    @staticmethod
    def _apply_filter(builder: Any, item: FieldFilter) -> Any:
        if item.op is FilterOp.EQ:
            return builder.eq(item.field, item.value)
        if item.op is FilterOp.CONTAINS:
            return builder.ilike(item.field, f"%{_escape_like(item.value)}%")
        if item.op is FilterOp.OVERLAPS:
            return builder.ov(item.field, list(item.value))
        if item.op is FilterOp.GTE:
            return builder.gte(item.field, item.value)
        raise ValueError(f"Unsupported filter operation: {item.op}")

    @staticmethod
    def _or_clause(item: FieldFilter) -> str:
        # or=() values are quoted so commas, dots and parentheses stay literal
        if item.op is FilterOp.EQ:
            return f"{item.field}.eq.{_quote(item.value)}"
        if item.op is FilterOp.CONTAINS:
            return f"{item.field}.ilike.{_quote(f'*{_escape_like(item.value)}*')}"
        if item.op is FilterOp.OVERLAPS:
            return f"{item.field}.ov.{{{','.join(_quote(v) for v in item.value)}}}"
        if item.op is FilterOp.GTE:
            return f"{item.field}.gte.{_quote(item.value)}"
        raise ValueError(f"Unsupported filter operation: {item.op}")

    @staticmethod
    def _translate(error: APIError) -> Exception:
        if error.code == UNIQUE_VIOLATION:
            key = duplicate_key_from(error)
            logger.debug("Unique violation on %s", key)
            return DuplicateKeyError(key, error.message or "")
        return error


def _escape_like(value: Any) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return re.sub(r"([%_\\])", r"\\\1", str(value))


def _quote(value: Any) -> str:
    """Double-quote a PostgREST filter value, escaping quotes and backslashes."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
