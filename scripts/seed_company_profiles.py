"""Seed the company_profiles table with the known inspection companies.

Usage:
    python scripts/seed_company_profiles.py
    python scripts/seed_company_profiles.py --force
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from inspectroute.core.config import AppSettings
from inspectroute.core.protocols import ICompanyProfileStore
from inspectroute.models.company_profile import CompanyProfileUpsert
from inspectroute.persistence import create_persistence

SEED_PATH = Path(__file__).resolve().parent.parent / "config" / "company_profiles_seed.json"


def load_seed(path: Path = SEED_PATH) -> list[CompanyProfileUpsert]:
    data: dict[str, Any] = json.loads(path.read_text())
    return [CompanyProfileUpsert.model_validate(p) for p in data["profiles"]]


def seed_profiles(
    store: ICompanyProfileStore,
    profiles: list[CompanyProfileUpsert],
    force: bool = False,
) -> list[str]:
    """Upsert seed profiles. Existing codes are skipped unless force is set.

    Returns the codes written.
    """
    written: list[str] = []
    for params in profiles:
        if not force and store.get_profile(params.code) is not None:
            print(f"  Profile {params.code} already exists, skipping")
            continue
        store.upsert_profile(params)
        written.append(params.code)
        print(f"  Saved profile {params.code}")
    return written


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed company profiles for InspectRoute")
    parser.add_argument("--seed-file", default=str(SEED_PATH), help="Seed JSON path")
    parser.add_argument("--force", action="store_true", help="Overwrite existing profiles")
    args = parser.parse_args()

    store, _cache = create_persistence(AppSettings())

    print("Seeding company profiles...")
    written = seed_profiles(store, load_seed(Path(args.seed_file)), force=args.force)
    print(f"Done! {len(written)} profile(s) written")


if __name__ == "__main__":
    main()
