"""FAQ service - chatbot knowledge base management"""

import logging

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ...shared.dates import utc_now
from .repository import FAQRepository
from .schemas import FAQPayload

logger = logging.getLogger(__name__)


class FAQService:
    """Service layer for FAQs"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.repo = FAQRepository()

    async def list_faqs(self) -> list[dict]:
        return await self.repo.list_faqs(self.db)

    async def get_faq(self, faq_id: str) -> dict:
        faq = await self.repo.get_by_faq_id(self.db, faq_id)
        if not faq:
            raise HTTPException(status_code=404, detail=f'FAQ with ID "{faq_id}" not found')
        return faq

    def _validate(self, data: FAQPayload) -> dict:
        question = (data.question or "").strip()
        answer = (data.answer or "").strip()
        if not question or not answer or not data.keywords:
            raise HTTPException(status_code=400, detail="Missing required fields")
        return {"question": question, "answer": answer, "keywords": data.keywords}

    async def create_faq(self, data: FAQPayload) -> dict:
        faq_id = (data.id or "").strip()
        if not faq_id:
            raise HTTPException(status_code=400, detail="Missing required fields")
        fields = self._validate(data)

        if await self.repo.get_by_faq_id(self.db, faq_id):
            raise HTTPException(status_code=409, detail="FAQ with this ID already exists")

        now = utc_now()
        try:
            faq = await self.repo.create(
                self.db, {"faq_id": faq_id, **fields, "created_at": now, "updated_at": now}
            )
        except DuplicateKeyError as e:
            raise HTTPException(status_code=409, detail="FAQ with this ID already exists") from e

        logger.info(f"✅ FAQ created: {faq_id}")
        return faq

    async def update_faq(self, faq_id: str, data: FAQPayload) -> dict:
        fields = self._validate(data)
        faq = await self.repo.update(self.db, faq_id, {**fields, "updated_at": utc_now()})
        if not faq:
            raise HTTPException(status_code=404, detail="FAQ not found")
        logger.info(f"📝 FAQ updated: {faq_id}")
        return faq

    async def delete_faq(self, faq_id: str) -> dict:
        if not await self.repo.delete(self.db, faq_id):
            raise HTTPException(status_code=404, detail="FAQ not found")
        logger.info(f"🗑️ FAQ deleted: {faq_id}")
        return {"success": True, "message": "FAQ deleted successfully"}
