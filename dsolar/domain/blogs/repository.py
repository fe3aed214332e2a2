"""Blog repository - Database operations for blog posts"""

from typing import Any, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from ...database import BLOGS


class BlogRepository:
    """Repository for blog post database operations"""

    @staticmethod
    async def list_posts(
        db: AsyncIOMotorDatabase,
        query: Optional[dict] = None,
        order: int = DESCENDING,
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict]:
        cursor = db[BLOGS].find(query or {}).sort("created_at", order).skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    @staticmethod
    async def count(db: AsyncIOMotorDatabase, query: Optional[dict] = None) -> int:
        return await db[BLOGS].count_documents(query or {})

    @staticmethod
    async def get_by_id(db: AsyncIOMotorDatabase, post_id: ObjectId) -> Optional[dict]:
        return await db[BLOGS].find_one({"_id": post_id})

    @staticmethod
    async def get_by_slug(db: AsyncIOMotorDatabase, slug: str) -> Optional[dict]:
        return await db[BLOGS].find_one({"slug": slug})

    @staticmethod
    async def slug_taken(
        db: AsyncIOMotorDatabase, slug: str, exclude_id: Optional[ObjectId] = None
    ) -> bool:
        query: dict[str, Any] = {"slug": slug}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return await db[BLOGS].find_one(query, {"_id": 1}) is not None

    @staticmethod
    async def create(db: AsyncIOMotorDatabase, document: dict) -> dict:
        result = await db[BLOGS].insert_one(document)
        return {**document, "_id": result.inserted_id}

    @staticmethod
    async def update(db: AsyncIOMotorDatabase, post_id: ObjectId, updates: dict) -> Optional[dict]:
        return await db[BLOGS].find_one_and_update(
            {"_id": post_id}, {"$set": updates}, return_document=ReturnDocument.AFTER
        )

    @staticmethod
    async def delete(db: AsyncIOMotorDatabase, post_id: ObjectId) -> bool:
        result = await db[BLOGS].delete_one({"_id": post_id})
        return result.deleted_count > 0

    @staticmethod
    async def sitemap_entries(db: AsyncIOMotorDatabase) -> list[dict]:
        cursor = db[BLOGS].find({}, {"slug": 1, "created_at": 1, "updated_at": 1}).sort(
            "slug", ASCENDING
        )
        return await cursor.to_list(length=None)
