"""Unit tests for SupabaseProfileStore with a mocked supabase client."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from inspectroute.core.exceptions import CacheError, StoreError
from inspectroute.models.company_profile import CompanyProfileUpsert
from inspectroute.persistence.memory_backend import MemoryCacheBackend
from inspectroute.persistence.supabase_backend import SupabaseProfileStore
from inspectroute.services.detection import CompanyDetector

ROWS = [
    {"id": "1", "code": "IPI", "name": "IPI", "column_fingerprint": ["street", "city"],
     "column_mappings": {"street": "address"}, "appointment_type": "none"},
    {"id": "2", "code": "SIG", "name": "SIG", "column_fingerprint": None,
     "column_mappings": None, "appointment_type": "datetime"},
]


class BrokenCache:
    def get(self, key):
        raise CacheError("down")

    def setex(self, key, ttl, value):
        raise CacheError("down")

    def delete(self, key):
        raise CacheError("down")


@pytest.fixture
def client():
    return MagicMock()


def _table(client):
    return client.table.return_value


def _set_list_rows(client, rows):
    _table(client).select.return_value.order.return_value.execute.return_value.data = rows


@pytest.fixture
def store(client):
    return SupabaseProfileStore(client, table="company_profiles")


@pytest.fixture
def cached(client):
    cache = MemoryCacheBackend()
    return SupabaseProfileStore(client, cache=cache, cache_ttl=30), cache


class TestListProfiles:
    def test_orders_by_name(self, store, client):
        _set_list_rows(client, ROWS)
        profiles = store.list_profiles()
        assert [p.code for p in profiles] == ["IPI", "SIG"]
        client.table.assert_called_with("company_profiles")
        _table(client).select.return_value.order.assert_called_once_with("name")

    def test_wraps_api_error(self, store, client):
        _table(client).select.return_value.order.return_value.execute.side_effect = APIError(
            {"message": "permission denied", "code": "42501"}
        )
        with pytest.raises(StoreError):
            store.list_profiles()

    def test_wraps_transport_error(self, store, client):
        _table(client).select.return_value.order.return_value.execute.side_effect = httpx.ConnectError(
            "refused"
        )
        with pytest.raises(StoreError):
            store.list_profiles()

    def test_caches_catalog(self, cached, client):
        store, cache = cached
        _set_list_rows(client, ROWS)
        store.list_profiles()
        store.list_profiles()
        assert _table(client).select.return_value.order.return_value.execute.call_count == 1
        assert [r["code"] for r in json.loads(cache.get(SupabaseProfileStore.CATALOG_CACHE_KEY))] == [
            "IPI", "SIG",
        ]

    def test_malformed_row_is_skipped(self, store, client):
        legacy = {"id": "9", "code": "OLD", "name": "Legacy", "appointment_type": "call-ahead"}
        sig = {"id": "2", "code": "SIG", "name": "SIG", "column_fingerprint": ["a", "b"]}
        _set_list_rows(client, [legacy, sig])
        assert [p.code for p in store.list_profiles()] == ["SIG"]
        assert CompanyDetector(store).detect(["a", "b"]).code == "SIG"

    def test_cache_failure_falls_through_to_store(self, client):
        store = SupabaseProfileStore(client, cache=BrokenCache())
        _set_list_rows(client, ROWS)
        assert len(store.list_profiles()) == 2

    def test_unreadable_cache_entry_is_ignored(self, cached, client):
        store, cache = cached
        cache.setex(SupabaseProfileStore.CATALOG_CACHE_KEY, 30, "{not json")
        _set_list_rows(client, ROWS)
        assert len(store.list_profiles()) == 2


class TestGetProfile:
    def test_returns_profile(self, store, client):
        chain = _table(client).select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value.data = [ROWS[0]]
        profile = store.get_profile(" ipi ")
        assert profile is not None and profile.code == "IPI"
        _table(client).select.return_value.eq.assert_called_once_with("code", "IPI")

    def test_malformed_row_raises_store_error(self, store, client):
        chain = _table(client).select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value.data = [{"code": "OLD", "name": "Legacy", "appointment_type": "call-ahead"}]
        with pytest.raises(StoreError):
            store.get_profile("OLD")

    def test_returns_none_when_missing(self, store, client):
        chain = _table(client).select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value.data = []
        assert store.get_profile("NOPE") is None


class TestUpsertProfile:
    def test_upserts_on_code_and_returns_row(self, store, client):
        _table(client).upsert.return_value.execute.return_value.data = [
            {**ROWS[0], "code": "NEW", "name": "New Co"}
        ]
        saved = store.upsert_profile(CompanyProfileUpsert(code="new", name="New Co"))
        assert saved.code == "NEW"
        row, = _table(client).upsert.call_args.args
        assert row["code"] == "NEW"
        assert "updated_at" in row
        assert _table(client).upsert.call_args.kwargs == {"on_conflict": "code"}

    def test_invalidates_catalog_cache(self, cached, client):
        store, cache = cached
        _set_list_rows(client, ROWS)
        store.list_profiles()
        _table(client).upsert.return_value.execute.return_value.data = [ROWS[0]]
        store.upsert_profile(CompanyProfileUpsert(code="IPI", name="IPI"))
        assert cache.get(SupabaseProfileStore.CATALOG_CACHE_KEY) is None

    def test_invalidates_cache_even_on_failure(self, cached, client):
        store, cache = cached
        cache.setex(SupabaseProfileStore.CATALOG_CACHE_KEY, 30, "[]")
        _table(client).upsert.return_value.execute.side_effect = APIError({"message": "conflict"})
        with pytest.raises(StoreError):
            store.upsert_profile(CompanyProfileUpsert(code="IPI", name="IPI"))
        assert cache.get(SupabaseProfileStore.CATALOG_CACHE_KEY) is None

    def test_empty_response_raises(self, store, client):
        _table(client).upsert.return_value.execute.return_value.data = []
        with pytest.raises(StoreError):
            store.upsert_profile(CompanyProfileUpsert(code="IPI", name="IPI"))


def test_from_credentials_requires_url_and_key():
    with pytest.raises(StoreError):
        SupabaseProfileStore.from_credentials("", "")
