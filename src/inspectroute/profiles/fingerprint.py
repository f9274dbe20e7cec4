"""Fingerprint matching: identifies which company's export format a header row follows.

A profile's fingerprint is the list of headers its export is expected to
carry. A header row is a confident match for a profile when at least 90% of
the fingerprint is present, after lower-casing and trimming both sides.
The catalog is walked in the order given and the first confident match
wins, even if a later profile would score higher.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Optional

from inspectroute.models.company_profile import CompanyProfile

CONFIDENT_MATCH_RATIO = 0.9


def normalize_header(header: str) -> str:
    """Lower-case and trim. Internal whitespace and punctuation are kept."""
    return header.lower().strip()


def _normalized_set(values: Any) -> set[str]:
    """Normalized string entries of ``values``; anything not a list-like gives an empty set."""
    if not values or isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return set()
    return {normalize_header(v) for v in values if isinstance(v, str)}


def _eligible(profiles: Any) -> list[CompanyProfile]:
    """Catalog entries that are profiles with a fingerprint, in order."""
    if not profiles or not isinstance(profiles, Iterable):
        return []
    return [p for p in profiles if isinstance(p, CompanyProfile) and p.has_fingerprint]


def match_ratio(fingerprint: Optional[Iterable[str]], headers: Optional[Iterable[str]]) -> float:
    """Share of the (deduplicated) fingerprint found among the headers."""
    expected = _normalized_set(fingerprint)
    if not expected:
        return 0.0
    present = _normalized_set(headers)
    return len(expected & present) / len(expected)


def score_profiles(
    headers: Optional[Sequence[str]],
    profiles: Optional[Iterable[CompanyProfile]],
) -> list[tuple[CompanyProfile, float]]:
    """Ratio for every eligible profile, in catalog order."""
    present = _normalized_set(headers)
    return [
        (profile, match_ratio(profile.column_fingerprint, present))
        for profile in _eligible(profiles)
    ]


def match_company_profile(
    headers: Optional[Sequence[str]],
    profiles: Optional[Iterable[CompanyProfile]],
) -> Optional[CompanyProfile]:
    """Return the first profile whose fingerprint is a confident match, else None."""
    present = _normalized_set(headers)
    if not present:
        return None

    for profile in _eligible(profiles):
        expected = _normalized_set(profile.column_fingerprint)
        if not expected:
            continue
        if len(expected & present) / len(expected) >= CONFIDENT_MATCH_RATIO:
            return profile
    return None
