"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from postgrest.exceptions import APIError

from shared.database import (
    SupabaseDocumentStore,
    duplicate_key_from,
    get_supabase_client,
    reset_client_cache,
)
from shared.store import DuplicateKeyError, FieldFilter, FilterOp, SortKey, StoreQuery


def unique_violation(details: str = "Key (email)=(ada@example.com) already exists.") -> APIError:
    return APIError({
        "message": 'duplicate key value violates unique constraint "users_email_key"',
        "code": "23505",
        "hint": None,
        "details": details,
    })


def mock_client(data=None, count=None) -> MagicMock:
    """A Supabase client whose query builders chain and return ``data``."""
    client = MagicMock()
    builder = client.table.return_value
    for name in ("select", "insert", "update", "delete", "eq", "ilike", "ov", "gte",
                 "or_", "order", "range", "limit"):
        getattr(builder, name).return_value = builder
    builder.execute.return_value = MagicMock(data=data if data is not None else [], count=count)
    return client


class TestSupabaseClient:
    def setup_method(self):
        """Reset cache before each test."""
        reset_client_cache()

    def teardown_method(self):
        reset_client_cache()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_get_supabase_client_creates_client(self, mock_settings, mock_create):
        """Should create client with service role key."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client = get_supabase_client()

        mock_create.assert_called_once_with(
            "https://test.supabase.co",
            "test-key",
        )
        assert client is not None

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_get_supabase_client_caches_client(self, mock_settings, mock_create):
        """Should cache the client and not recreate it."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client1 = get_supabase_client()
        client2 = get_supabase_client()

        mock_create.assert_called_once()
        assert client1 is client2

    @pytest.mark.parametrize(
        "url, key",
        [("", ""), ("", "test-key"), ("https://test.supabase.co", "")],
    )
    @patch("shared.database.get_settings")
    def test_get_supabase_client_raises_without_config(self, mock_settings, url, key):
        """Should raise if configuration is missing."""
        mock_settings.return_value.supabase_url = url
        mock_settings.return_value.supabase_service_role_key = key

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()


class TestDuplicateKeyFrom:
    def test_reads_key_from_details(self):
        assert duplicate_key_from(unique_violation()) == "email"

    def test_falls_back_to_constraint_name(self):
        error = APIError({
            "message": 'duplicate key value violates unique constraint "posts_idempotency_key_key"',
            "code": "23505",
            "hint": None,
            "details": None,
        })
        assert duplicate_key_from(error) == "idempotency_key"

    def test_unknown(self):
        error = APIError({"message": "boom", "code": "23505", "hint": None, "details": None})
        assert duplicate_key_from(error) == "unknown"


class TestSupabaseDocumentStore:
    @pytest.mark.asyncio
    async def test_find_applies_filters_sort_and_range(self):
        client = mock_client(data=[{"id": "1"}])
        store = SupabaseDocumentStore(client)
        query = StoreQuery(all_of=(
            FieldFilter("first_name", FilterOp.CONTAINS, "ad"),
            FieldFilter("gender", FilterOp.EQ, "female"),
        ))

        docs = await store.find("users", query, sort=SortKey("created_at"), skip=20, limit=10)

        builder = client.table.return_value
        client.table.assert_called_with("users")
        builder.ilike.assert_called_once_with("first_name", "%ad%")
        builder.eq.assert_called_once_with("gender", "female")
        builder.order.assert_called_once_with("created_at", desc=True)
        builder.range.assert_called_once_with(20, 29)
        assert docs == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_find_escapes_like_wildcards(self):
        client = mock_client()
        store = SupabaseDocumentStore(client)

        await store.find("posts", StoreQuery(all_of=(FieldFilter("text", FilterOp.CONTAINS, "50%_off"),)))

        client.table.return_value.ilike.assert_called_once_with("text", r"%50\%\_off%")

    @pytest.mark.asyncio
    async def test_find_builds_or_clause(self):
        client = mock_client()
        store = SupabaseDocumentStore(client)
        query = StoreQuery().or_(
            FieldFilter("text", FilterOp.CONTAINS, "py"),
            FieldFilter("tags", FilterOp.OVERLAPS, ["py"]),
        )

        await store.find("posts", query)

        client.table.return_value.or_.assert_called_once_with('text.ilike."*py*",tags.ov.{"py"}')

    @pytest.mark.parametrize(
        "item, expected",
        [
            (FieldFilter("text", FilterOp.CONTAINS, "hello, world"), 'text.ilike."*hello, world*"'),
            (FieldFilter("text", FilterOp.CONTAINS, "f(x).y"), 'text.ilike."*f(x).y*"'),
            (FieldFilter("text", FilterOp.CONTAINS, 'say "hi"'), r'text.ilike."*say \"hi\"*"'),
            (FieldFilter("text", FilterOp.CONTAINS, "100%"), r'text.ilike."*100\\%*"'),
            (FieldFilter("tags", FilterOp.OVERLAPS, ["a,b", "c"]), 'tags.ov.{"a,b","c"}'),
            (FieldFilter("email", FilterOp.EQ, "a.b@example.com"), 'email.eq."a.b@example.com"'),
            (FieldFilter("likes", FilterOp.GTE, 3), 'likes.gte."3"'),
        ],
    )
    def test_or_clause_quotes_values(self, item, expected):
        assert SupabaseDocumentStore._or_clause(item) == expected

    @pytest.mark.asyncio
    async def test_search_text_with_comma(self):
        client = mock_client()
        store = SupabaseDocumentStore(client)
        query = StoreQuery().or_(
            FieldFilter("first_name", FilterOp.CONTAINS, "Smith, John"),
            FieldFilter("last_name", FilterOp.CONTAINS, "Smith, John"),
        )

        await store.find("users", query)

        client.table.return_value.or_.assert_called_once_with(
            'first_name.ilike."*Smith, John*",last_name.ilike."*Smith, John*"'
        )

    @pytest.mark.asyncio
    async def test_count_uses_exact_count(self):
        client = mock_client(count=7)
        store = SupabaseDocumentStore(client)

        total = await store.count("users", StoreQuery(all_of=(FieldFilter("likes", FilterOp.GTE, 3),)))

        builder = client.table.return_value
        builder.select.assert_called_once_with("id", count="exact")
        builder.gte.assert_called_once_with("likes", 3)
        assert total == 7

    @pytest.mark.asyncio
    async def test_count_without_result_is_zero(self):
        store = SupabaseDocumentStore(mock_client(count=None))
        assert await store.count("users") == 0

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self):
        store = SupabaseDocumentStore(mock_client(data=[]))
        assert await store.find_by_id("users", "abc") is None

    @pytest.mark.asyncio
    async def test_insert_returns_row(self):
        client = mock_client(data=[{"id": "new", "email": "a@b.co"}])
        store = SupabaseDocumentStore(client)

        doc = await store.insert("users", {"email": "a@b.co"})

        client.table.return_value.insert.assert_called_once_with({"email": "a@b.co"})
        assert doc["id"] == "new"

    @pytest.mark.asyncio
    async def test_insert_unique_violation(self):
        client = mock_client()
        client.table.return_value.execute.side_effect = unique_violation()
        store = SupabaseDocumentStore(client)

        with pytest.raises(DuplicateKeyError) as exc_info:
            await store.insert("users", {"email": "ada@example.com"})
        assert exc_info.value.key == "email"

    @pytest.mark.asyncio
    async def test_other_api_errors_propagate(self):
        client = mock_client()
        client.table.return_value.execute.side_effect = APIError(
            {"message": "permission denied", "code": "42501", "hint": None, "details": None}
        )
        store = SupabaseDocumentStore(client)

        with pytest.raises(APIError):
            await store.update_by_id("users", "abc", {"first_name": "Ada"})

    @pytest.mark.asyncio
    async def test_delete_missing_returns_none(self):
        store = SupabaseDocumentStore(mock_client(data=[]))
        assert await store.delete_by_id("posts", "abc") is None
