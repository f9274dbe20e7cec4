"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from inspectroute.core.config import AppSettings
from inspectroute.persistence.memory_backend import MemoryCacheBackend
from inspectroute.persistence.redis_backend import RedisCacheBackend
from inspectroute.persistence.supabase_backend import SupabaseProfileStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (profile_store, cache).
    """
    if settings is None:
        settings = AppSettings()

    if settings.cache_backend == "redis":
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )
    else:
        cache = MemoryCacheBackend()

    profile_store = SupabaseProfileStore.from_credentials(
        settings.supabase.url,
        settings.supabase.service_role_key,
        table=settings.supabase.profiles_table,
        cache=cache,
        cache_ttl=settings.redis.catalog_ttl,
    )

    return profile_store, cache
