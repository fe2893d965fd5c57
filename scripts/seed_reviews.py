#!/usr/bin/env python3
"""Insert the sample approved testimonials into the configured record store."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List

from app.config import get_settings
from app.dependencies.services import get_record_store_instance
from app.services.exceptions import StoreUnavailableError
from app.services.mock_store import build_sample_reviews

SCHEMA_FILE = Path(__file__).with_name("reviews_schema.sql")


async def seed(dry_run: bool) -> List[str]:
    settings = get_settings()
    store = get_record_store_instance(settings)
    inserted: List[str] = []
    try:
        for row in build_sample_reviews():
            existing = await store.find(
                settings.reviews_table,
                {"submitter_name": row["submitter_name"], "review_text": row["review_text"]},
            )
            if existing is not None:
                print(f"Skipping existing review by {row['submitter_name']}")
                continue
            if dry_run:
                print(f"Would insert review by {row['submitter_name']}")
                continue
            record = await store.insert(settings.reviews_table, row)
            inserted.append(str(record["id"]))
            print(f"Inserted review {record['id']} by {row['submitter_name']}")
    finally:
        await store.close()
    return inserted


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be inserted without writing.",
    )
    args = parser.parse_args()

    settings = get_settings()
    if settings.mock_mode:
        print(
            "Mock mode is active. Set SITE_USE_MOCK_DATA=false and SUPABASE_URL / "
            "SUPABASE_SERVICE_ROLE_KEY to seed the hosted store.",
            file=sys.stderr,
        )
        return 1

    try:
        inserted = asyncio.run(seed(args.dry_run))
    except StoreUnavailableError as exc:
        print(
            f"Could not write to {settings.reviews_table}: {exc}. If the table does not "
            f"exist yet, run {SCHEMA_FILE} in the Supabase SQL editor first.",
            file=sys.stderr,
        )
        return 1
    print(f"Seeding complete: {len(inserted)} review(s) inserted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
