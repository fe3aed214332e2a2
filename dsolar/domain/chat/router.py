"""Chat router - the site chatbot endpoint"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...database import get_db
from ...rate_limiter import create_rate_limiter
from .schemas import ChatRequest, ChatResponse
from .service import ChatService

router = APIRouter(prefix="/api", tags=["Chat"])

rate_limit_chat = create_rate_limiter(limit=30, window_seconds=60, key_prefix="chat")


def get_chat_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> ChatService:
    """Dependency injection for ChatService"""
    return ChatService(db)


@router.post("/chat", response_model=ChatResponse)
async def chat(
    data: ChatRequest,
    service: ChatService = Depends(get_chat_service),
    _: None = Depends(rate_limit_chat),
):
    history = [m.model_dump() for m in data.history]
    return await service.respond(data.message, history)
