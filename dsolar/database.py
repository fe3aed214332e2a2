import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, TEXT

from .config import MONGODB_DB, MONGODB_URI

logger = logging.getLogger(__name__)

# Collection names
ADMINS = "admins"
APPOINTMENTS = "appointments"
BLOGS = "blogs"
PACKAGES = "packages"
FAQS = "faqs"
CALCULATOR_PARAMS = "solar_calculator_params"

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Get or create the shared Motor client"""
    global _client

    if _client is None:
        _client = AsyncIOMotorClient(MONGODB_URI, serverSelectionTimeoutMS=5000, tz_aware=False)
        logger.info(f"✅ MongoDB client created for database '{MONGODB_DB}'")
    return _client


def set_client(client: Optional[AsyncIOMotorClient]) -> None:
    """Swap the shared client (used by scripts and tests)"""
    global _client
    _client = client


def get_database() -> AsyncIOMotorDatabase:
    return get_client()[MONGODB_DB]


async def get_db():
    yield get_database()


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes every collection relies on"""
    await db[ADMINS].create_index([("username", ASCENDING)], unique=True)

    await db[APPOINTMENTS].create_index([("confirmation_token", ASCENDING)], sparse=True)
    await db[APPOINTMENTS].create_index([("date", ASCENDING), ("time", ASCENDING)])
    await db[APPOINTMENTS].create_index([("status", ASCENDING)])

    await db[BLOGS].create_index([("slug", ASCENDING)], unique=True)
    await db[BLOGS].create_index([("category", ASCENDING)])
    await db[BLOGS].create_index([("tags", ASCENDING)])
    await db[BLOGS].create_index([("created_at", DESCENDING)])

    await db[PACKAGES].create_index([("code", ASCENDING)], unique=True)
    await db[PACKAGES].create_index([("type", ASCENDING), ("wattage", ASCENDING)])

    await db[FAQS].create_index([("faq_id", ASCENDING)], unique=True)
    await db[FAQS].create_index([("keywords", ASCENDING)])
    await db[FAQS].create_index([("question", TEXT)])

    await db[CALCULATOR_PARAMS].create_index([("key", ASCENDING)], unique=True)
    logger.info("✅ MongoDB indexes ensured")


async def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")
