"""FAQ repository - Database operations for chatbot FAQs"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from ...database import FAQS


class FAQRepository:
    """Repository for FAQ database operations"""

    @staticmethod
    async def list_faqs(db: AsyncIOMotorDatabase) -> list[dict]:
        cursor = db[FAQS].find({}).sort("faq_id", ASCENDING)
        return await cursor.to_list(length=None)

    @staticmethod
    async def text_search(db: AsyncIOMotorDatabase, query: str, limit: int) -> list[dict]:
        """Full-text search on questions, best textScore first (score kept on each hit)"""
        cursor = (
            db[FAQS]
            .find({"$text": {"$search": query}}, {"score": {"$meta": "textScore"}})
            .sort([("score", {"$meta": "textScore"})])
            .limit(limit)
        )
        return await cursor.to_list(length=limit)

    @staticmethod
    async def get_by_faq_id(db: AsyncIOMotorDatabase, faq_id: str) -> Optional[dict]:
        return await db[FAQS].find_one({"faq_id": faq_id})

    @staticmethod
    async def create(db: AsyncIOMotorDatabase, document: dict) -> dict:
        result = await db[FAQS].insert_one(document)
        return {**document, "_id": result.inserted_id}

    @staticmethod
    async def update(db: AsyncIOMotorDatabase, faq_id: str, updates: dict) -> Optional[dict]:
        return await db[FAQS].find_one_and_update(
            {"faq_id": faq_id}, {"$set": updates}, return_document=ReturnDocument.AFTER
        )

    @staticmethod
    async def delete(db: AsyncIOMotorDatabase, faq_id: str) -> bool:
        result = await db[FAQS].delete_one({"faq_id": faq_id})
        return result.deleted_count > 0
