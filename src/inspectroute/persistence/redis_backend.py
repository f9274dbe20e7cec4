"""Shared cache for the serialized company profile catalog.

The store writes one JSON entry per catalog with a short expiry, so every
app instance sees a saved profile within one TTL. Entries with no expiry
are never written.
"""

from __future__ import annotations

import redis

from inspectroute.core.exceptions import CacheError


class RedisCacheBackend:
    """ICacheBackend over a Redis server; any client failure surfaces as CacheError."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._client = redis.Redis(host=host, port=port, db=db, decode_responses=True)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except Exception as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc

    def setex(self, key: str, ttl: int, value: str) -> None:
        if ttl <= 0:
            raise CacheError(f"Refusing to cache key={key!r} with non-positive ttl={ttl}")
        try:
            self._client.setex(key, ttl, value)
        except Exception as exc:
            raise CacheError(f"Redis SETEX failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except Exception as exc:
            raise CacheError(f"Redis DELETE failed for key={key!r}: {exc}") from exc

    def ping(self) -> bool:
        """True when the server answers; used by the readiness probe."""
        try:
            return bool(self._client.ping())
        except Exception:
            return False
