"""FAQ router - admin management of the chatbot knowledge base"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...auth import get_current_admin
from ...database import get_db
from .schemas import DeleteResponse, FAQPayload, FAQResponse
from .service import FAQService

admin_router = APIRouter(prefix="/api/admin/faqs", tags=["Admin FAQs"])


def get_faq_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> FAQService:
    """Dependency injection for FAQService"""
    return FAQService(db)


def to_response(doc: dict) -> FAQResponse:
    return FAQResponse(
        id=doc["faq_id"],
        question=doc["question"],
        answer=doc["answer"],
        keywords=doc.get("keywords") or [],
    )


@admin_router.get("", response_model=list[FAQResponse])
async def admin_list_faqs(
    _admin: dict = Depends(get_current_admin),
    service: FAQService = Depends(get_faq_service),
):
    return [to_response(f) for f in await service.list_faqs()]


@admin_router.post("", response_model=FAQResponse, status_code=201)
async def admin_create_faq(
    data: FAQPayload,
    _admin: dict = Depends(get_current_admin),
    service: FAQService = Depends(get_faq_service),
):
    return to_response(await service.create_faq(data))


@admin_router.get("/{faq_id}", response_model=FAQResponse)
async def admin_get_faq(
    faq_id: str,
    _admin: dict = Depends(get_current_admin),
    service: FAQService = Depends(get_faq_service),
):
    return to_response(await service.get_faq(faq_id))


@admin_router.put("/{faq_id}", response_model=FAQResponse)
async def admin_update_faq(
    faq_id: str,
    data: FAQPayload,
    _admin: dict = Depends(get_current_admin),
    service: FAQService = Depends(get_faq_service),
):
    return to_response(await service.update_faq(faq_id, data))


@admin_router.delete("/{faq_id}", response_model=DeleteResponse)
async def admin_delete_faq(
    faq_id: str,
    _admin: dict = Depends(get_current_admin),
    service: FAQService = Depends(get_faq_service),
):
    return await service.delete_faq(faq_id)
