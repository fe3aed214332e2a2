#!/usr/bin/env python3
"""
Load the standard packages and FAQs into MongoDB.

Run with: python -m migrations.seed_knowledge_base [--replace]

Without --replace, existing packages and FAQs are updated in place and new ones added.
With --replace, both collections are emptied first.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dsolar.cache import CALCULATOR_PACKAGES_KEY, cache  # noqa: E402
from dsolar.config import MONGODB_DB  # noqa: E402
from dsolar.database import FAQS, PACKAGES, close_client, ensure_indexes, get_database  # noqa: E402
from dsolar.shared.dates import utc_now  # noqa: E402
from migrations.knowledge_base_data import FAQS as FAQ_DATA  # noqa: E402
from migrations.knowledge_base_data import PACKAGES as PACKAGE_DATA  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("seed_knowledge_base")


async def seed(db, replace: bool = False) -> tuple[int, int]:
    """Upsert packages by code and FAQs by faq_id. Returns (packages, faqs) written."""
    await ensure_indexes(db)

    if replace:
        await db[PACKAGES].delete_many({})
        await db[FAQS].delete_many({})
        logger.info("🗑️ Cleared existing packages and FAQs")

    now = utc_now()
    for package in PACKAGE_DATA:
        await db[PACKAGES].update_one(
            {"code": package["code"]},
            {"$set": {**package, "updated_at": now}, "$setOnInsert": {"created_at": now}},
            upsert=True,
        )
    for faq in FAQ_DATA:
        await db[FAQS].update_one(
            {"faq_id": faq["faq_id"]},
            {"$set": {**faq, "updated_at": now}, "$setOnInsert": {"created_at": now}},
            upsert=True,
        )

    cache.delete(CALCULATOR_PACKAGES_KEY)
    return len(PACKAGE_DATA), len(FAQ_DATA)


async def main(replace: bool) -> int:
    logger.info(f"📊 Seeding knowledge base into '{MONGODB_DB}'")
    try:
        packages, faqs = await seed(get_database(), replace=replace)
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}")
        return 1
    finally:
        await close_client()

    logger.info(f"✅ Seeded {packages} packages and {faqs} FAQs")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed chatbot packages and FAQs")
    parser.add_argument("--replace", action="store_true", help="empty both collections before seeding")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.replace)))
