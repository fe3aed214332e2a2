"""Appointment repository - Database operations for appointments"""

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from ...database import APPOINTMENTS
from .schemas import AppointmentStatus


def active_slot_filter(now: datetime) -> dict:
    """Appointments that hold their slot: approved or awaiting approval, or awaiting
    the customer with a confirmation link that has not expired yet"""
    return {
        "$or": [
            {
                "status": {
                    "$in": [AppointmentStatus.PENDING_ADMIN.value, AppointmentStatus.CONFIRMED.value]
                }
            },
            {
                "status": AppointmentStatus.PENDING_CUSTOMER.value,
                "confirmation_expires": {"$gt": now},
            },
        ]
    }


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    async def create(db: AsyncIOMotorDatabase, document: dict) -> ObjectId:
        result = await db[APPOINTMENTS].insert_one(document)
        return result.inserted_id

    @staticmethod
    async def delete(db: AsyncIOMotorDatabase, appointment_id: ObjectId) -> None:
        await db[APPOINTMENTS].delete_one({"_id": appointment_id})

    @staticmethod
    async def get_by_id(db: AsyncIOMotorDatabase, appointment_id: ObjectId) -> Optional[dict]:
        return await db[APPOINTMENTS].find_one({"_id": appointment_id})

    @staticmethod
    async def get_slot_holders(
        db: AsyncIOMotorDatabase, date: str, time: str, now: datetime
    ) -> list[dict]:
        """Active appointments for one slot, oldest first"""
        query = {"date": date, "time": time, **active_slot_filter(now)}
        cursor = db[APPOINTMENTS].find(query, {"_id": 1}).sort("_id", ASCENDING)
        return await cursor.to_list(length=None)

    @staticmethod
    async def get_taken_slots(
        db: AsyncIOMotorDatabase, date_from: str, date_to: str, now: datetime
    ) -> list[dict]:
        """date/time pairs of active appointments between two dates (inclusive)"""
        query = {"date": {"$gte": date_from, "$lte": date_to}, **active_slot_filter(now)}
        cursor = db[APPOINTMENTS].find(query, {"date": 1, "time": 1})
        return await cursor.to_list(length=None)

    @staticmethod
    async def get_pending_by_token(db: AsyncIOMotorDatabase, token: str) -> Optional[dict]:
        return await db[APPOINTMENTS].find_one(
            {"confirmation_token": token, "status": AppointmentStatus.PENDING_CUSTOMER.value}
        )

    @staticmethod
    async def mark_customer_confirmed(
        db: AsyncIOMotorDatabase, appointment_id: ObjectId, token: str, now: datetime
    ) -> Optional[dict]:
        """Move pending_customer -> pending_admin, consuming the token.
        Returns None if the token was consumed concurrently."""
        return await db[APPOINTMENTS].find_one_and_update(
            {
                "_id": appointment_id,
                "confirmation_token": token,
                "status": AppointmentStatus.PENDING_CUSTOMER.value,
            },
            {
                "$set": {"status": AppointmentStatus.PENDING_ADMIN.value, "updated_at": now},
                "$unset": {"confirmation_token": "", "confirmation_expires": ""},
            },
            return_document=ReturnDocument.AFTER,
        )

    @staticmethod
    async def list_appointments(
        db: AsyncIOMotorDatabase, query: dict, skip: int, limit: int
    ) -> list[dict]:
        cursor = (
            db[APPOINTMENTS]
            .find(query)
            .sort([("date", DESCENDING), ("time", ASCENDING)])
            .skip(skip)
            .limit(limit)
        )
        return await cursor.to_list(length=None)

    @staticmethod
    async def count(db: AsyncIOMotorDatabase, query: dict) -> int:
        return await db[APPOINTMENTS].count_documents(query)

    @staticmethod
    async def update(
        db: AsyncIOMotorDatabase, appointment_id: ObjectId, updates: dict[str, Any]
    ) -> Optional[dict]:
        return await db[APPOINTMENTS].find_one_and_update(
            {"_id": appointment_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
