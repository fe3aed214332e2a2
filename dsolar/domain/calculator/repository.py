"""Calculator parameter repository - the single ``main`` settings document"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from ...database import CALCULATOR_PARAMS

PARAMS_KEY = "main"


class CalculatorParamsRepository:
    """Repository for calculator parameter database operations"""

    @staticmethod
    async def get(db: AsyncIOMotorDatabase) -> Optional[dict]:
        return await db[CALCULATOR_PARAMS].find_one({"key": PARAMS_KEY})

    @staticmethod
    async def upsert(db: AsyncIOMotorDatabase, fields: dict) -> dict:
        return await db[CALCULATOR_PARAMS].find_one_and_update(
            {"key": PARAMS_KEY},
            {"$set": fields},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
