"""Package repository - Database operations for pricing packages"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from ...database import PACKAGES


class PackageRepository:
    """Repository for package database operations"""

    @staticmethod
    async def list_packages(db: AsyncIOMotorDatabase, query: Optional[dict] = None) -> list[dict]:
        cursor = db[PACKAGES].find(query or {}).sort([("type", ASCENDING), ("wattage", ASCENDING)])
        return await cursor.to_list(length=None)

    @staticmethod
    async def get_by_code(db: AsyncIOMotorDatabase, code: str) -> Optional[dict]:
        return await db[PACKAGES].find_one({"code": code})

    @staticmethod
    async def find_one(db: AsyncIOMotorDatabase, query: dict) -> Optional[dict]:
        return await db[PACKAGES].find_one(query)

    @staticmethod
    async def create(db: AsyncIOMotorDatabase, document: dict) -> dict:
        result = await db[PACKAGES].insert_one(document)
        return {**document, "_id": result.inserted_id}

    @staticmethod
    async def update(db: AsyncIOMotorDatabase, code: str, updates: dict) -> Optional[dict]:
        return await db[PACKAGES].find_one_and_update(
            {"code": code}, {"$set": updates}, return_document=ReturnDocument.AFTER
        )

    @staticmethod
    async def delete(db: AsyncIOMotorDatabase, code: str) -> bool:
        result = await db[PACKAGES].delete_one({"code": code})
        return result.deleted_count > 0
