"""Company detection: loads the profile catalog and runs the fingerprint matcher."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from inspectroute.core.exceptions import StoreError, UnreadableFileError
from inspectroute.core.protocols import ICompanyProfileStore
from inspectroute.ingest.headers import read_headers
from inspectroute.models.company_profile import CompanyProfile
from inspectroute.profiles.fingerprint import match_company_profile, score_profiles

logger = logging.getLogger(__name__)


class CompanyDetector:
    """Pre-classifies uploads against the stored company fingerprints.

    The store owns catalog caching; an unavailable catalog means no match.
    """

    def __init__(self, store: ICompanyProfileStore) -> None:
        self._store = store

    def _catalog(self) -> list[CompanyProfile]:
        try:
            return self._store.list_profiles()
        except StoreError as exc:
            logger.warning("Profile catalog unavailable, skipping detection: %s", exc)
            return []

    def detect(self, headers: Sequence[str]) -> Optional[CompanyProfile]:
        profile = match_company_profile(headers, self._catalog())
        if profile is not None:
            logger.info("Detected company from headers", extra={"company": profile.code})
        return profile

    def explain(
        self, headers: Sequence[str]
    ) -> tuple[Optional[CompanyProfile], list[tuple[CompanyProfile, float]]]:
        """Match plus every eligible profile's ratio, from a single catalog read."""
        catalog = self._catalog()
        return match_company_profile(headers, catalog), score_profiles(headers, catalog)

    def detect_file(self, filename: str, data: bytes) -> Optional[CompanyProfile]:
        try:
            headers = read_headers(filename, data)
        except UnreadableFileError as exc:
            logger.warning("Could not read headers from %s: %s", filename, exc)
            return None
        return self.detect(headers)
