"""In-memory backends for unit tests and local development."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional

from inspectroute.models.company_profile import CompanyProfile, CompanyProfileUpsert


class MemoryProfileStore:
    """Dict-backed ICompanyProfileStore keyed on company code."""

    def __init__(self, profiles: Optional[list[CompanyProfile]] = None) -> None:
        self._profiles: dict[str, CompanyProfile] = {}
        self.list_calls = 0
        for profile in profiles or []:
            self._profiles[profile.code] = profile

    def list_profiles(self) -> list[CompanyProfile]:
        self.list_calls += 1
        return sorted(self._profiles.values(), key=lambda p: p.name)

    def get_profile(self, code: str) -> Optional[CompanyProfile]:
        return self._profiles.get(code.strip().upper())

    def upsert_profile(self, params: CompanyProfileUpsert) -> CompanyProfile:
        now = datetime.now(timezone.utc)
        existing = self._profiles.get(params.code)
        profile = CompanyProfile(
            id=existing.id if existing else f"mem-{len(self._profiles) + 1}",
            code=params.code,
            name=params.name,
            default_duration_minutes=params.default_duration_minutes,
            high_value_duration_minutes=params.high_value_duration_minutes,
            appointment_type=params.appointment_type,
            column_mappings={k: v for k, v in params.column_mappings.items() if v is not None},
            column_fingerprint=list(params.column_fingerprint),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._profiles[params.code] = profile
        return profile


class MemoryCacheBackend:
    """Dict-backed ICacheBackend that honours TTLs."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[str, float]] = {}

    def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.monotonic() >= expires_at:
            del self._store[key]
            return None
        return value

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = (value, time.monotonic() + ttl)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def ping(self) -> bool:
        return True
