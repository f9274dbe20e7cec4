"""Supabase backend implementing ICompanyProfileStore with a short-TTL catalog cache."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client, create_client

from inspectroute.core.exceptions import CacheError, StoreError
from inspectroute.models.company_profile import CompanyProfile, CompanyProfileUpsert

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (APIError, httpx.HTTPError)


class SupabaseProfileStore:
    """Production ICompanyProfileStore backed by the hosted company_profiles table."""

    CATALOG_CACHE_KEY = "company_profiles:all"
    CACHE_TTL = 60  # 1 minute

    def __init__(self, client: Client, table: str = "company_profiles",
                 cache: Any = None, cache_ttl: int | None = None) -> None:
        self._client = client
        self._table_name = table
        self._cache = cache
        self._cache_ttl = cache_ttl or self.CACHE_TTL

    @classmethod
    def from_credentials(cls, url: str, key: str, **kwargs: Any) -> "SupabaseProfileStore":
        if not url or not key:
            raise StoreError("Missing Supabase URL or service role key")
        return cls(create_client(url, key), **kwargs)

    def _table(self):
        return self._client.table(self._table_name)

    # ---- catalog cache ----

    def _cached_catalog(self) -> Optional[list[CompanyProfile]]:
        if self._cache is None:
            return None
        try:
            cached = self._cache.get(self.CATALOG_CACHE_KEY)
        except CacheError as exc:
            logger.warning("Catalog cache read failed: %s", exc)
            return None
        if cached is None:
            return None
        try:
            return [CompanyProfile.model_validate(row) for row in json.loads(cached)]
        except (ValueError, ValidationError) as exc:
            logger.warning("Discarding unreadable catalog cache entry: %s", exc)
            return None

    def _store_catalog(self, profiles: list[CompanyProfile]) -> None:
        if self._cache is None:
            return
        payload = json.dumps([p.model_dump(mode="json") for p in profiles])
        try:
            self._cache.setex(self.CATALOG_CACHE_KEY, self._cache_ttl, payload)
        except CacheError as exc:
            logger.warning("Catalog cache write failed: %s", exc)

    def invalidate_catalog(self) -> None:
        if self._cache is None:
            return
        try:
            self._cache.delete(self.CATALOG_CACHE_KEY)
        except CacheError as exc:
            logger.warning("Catalog cache invalidation failed: %s", exc)

    @staticmethod
    def _valid_profiles(rows: list[dict[str, Any]]) -> list[CompanyProfile]:
        profiles: list[CompanyProfile] = []
        for row in rows:
            try:
                profiles.append(CompanyProfile.model_validate(row))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed company profile row: %s", exc, extra={"company": row.get("code")}
                )
        return profiles

    # ---- ICompanyProfileStore methods ----

    def list_profiles(self) -> list[CompanyProfile]:
        cached = self._cached_catalog()
        if cached is not None:
            return cached

        try:
            rows = self._table().select("*").order("name").execute().data
        except _TRANSPORT_ERRORS as exc:
            raise StoreError(f"Listing company profiles failed: {exc}") from exc

        profiles = self._valid_profiles(rows or [])
        self._store_catalog(profiles)
        return profiles

    def get_profile(self, code: str) -> Optional[CompanyProfile]:
        try:
            rows = (
                self._table().select("*").eq("code", code.strip().upper()).limit(1).execute().data
            )
        except _TRANSPORT_ERRORS as exc:
            raise StoreError(f"Loading company profile {code!r} failed: {exc}") from exc

        if not rows:
            return None
        try:
            return CompanyProfile.model_validate(rows[0])
        except ValidationError as exc:
            raise StoreError(f"Company profile {code!r} is malformed: {exc}") from exc

    def upsert_profile(self, params: CompanyProfileUpsert) -> CompanyProfile:
        row = params.to_row(updated_at=datetime.now(timezone.utc))
        try:
            rows = self._table().upsert(row, on_conflict="code").execute().data
        except _TRANSPORT_ERRORS as exc:
            raise StoreError(f"Saving company profile {params.code!r} failed: {exc}") from exc
        finally:
            self.invalidate_catalog()

        if not rows:
            raise StoreError(f"Saving company profile {params.code!r} returned no row")
        logger.info("Saved company profile", extra={"company": params.code})
        return CompanyProfile.model_validate(rows[0])
