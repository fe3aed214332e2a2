"""Chat service - answers site visitors from packages, FAQs and, last, the LLM"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ... import config
from ..faqs.repository import FAQRepository
from ..packages.repository import PackageRepository
from . import llm, matching

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10

SOFTWARE_REDIRECT = (
    "🌞 I'm sorry, but I can't assist with that. I'm specialized in solar energy solutions. "
    "Let me know how I can help you with solar panels, installations, financing, or energy savings!"
)
OFF_TOPIC_REDIRECT = (
    "🌞 I can only help with solar energy questions. Ask me about our packages, savings, "
    "installation or financing!"
)

BASE_SYSTEM_PROMPT = """You are {company}'s friendly AI solar expert. You represent {company} Philippines, premier solar provider in Metro Manila. Keep responses brief with emojis.

OUR SERVICES:
- Professional solar design & installation
- Energy consultation & ROI calculation
- System monitoring & maintenance

VALUE:
- 50-70% lower electricity bills
- 25-year equipment warranty
- 3-5 year ROI
- Contact: {phone}"""

INSTRUCTIONS = """INSTRUCTIONS:
1. If query is NOT solar-related, politely redirect to solar topics
2. For solar queries, use KNOWLEDGE BASE FAQs if relevant
3. Keep responses under 2 sentences with emojis
4. Be friendly, professional and concise"""


def error_reply() -> dict:
    return {
        "message": (
            "🌞 Sorry, I'm having trouble answering right now. "
            f"Please call us at {config.COMPANY_PHONE} or email {config.COMPANY_EMAIL}."
        ),
        "source": "error",
    }


def build_system_prompt(faqs: list[dict]) -> str:
    prompt = BASE_SYSTEM_PROMPT.format(company=config.COMPANY_NAME, phone=config.COMPANY_PHONE)
    if faqs:
        entries = "\n\n".join(
            f"FAQ {i}:\nQ: {faq['question']}\nA: {faq['answer']}" for i, faq in enumerate(faqs, start=1)
        )
        prompt += f"\n\nKNOWLEDGE BASE FAQs:\n\n{entries}"
    return f"{prompt}\n\n{INSTRUCTIONS}"


class ChatService:
    """Service layer for the site chatbot"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.faq_repo = FAQRepository()
        self.package_repo = PackageRepository()

    async def _find_package(self, message: str) -> Optional[dict]:
        for query in matching.package_code_queries(message):
            package = await self.package_repo.find_one(self.db, query)
            if package:
                return package
        return None

    async def _search_faqs(self, message: str, limit: int) -> list[dict]:
        try:
            return await self.faq_repo.text_search(self.db, message, limit)
        except Exception as e:
            logger.error(f"❌ FAQ text search failed: {e}")
            return []

    async def _best_faq(self, message: str, faqs: list[dict]) -> Optional[dict]:
        faq = matching.best_faq(message, faqs)
        if faq:
            return faq
        hits = await self._search_faqs(message, 1)
        if hits and matching.accept_text_match(message, hits[0]):
            return hits[0]
        return None

    async def _context_faqs(self, message: str, faqs: list[dict]) -> list[dict]:
        context = matching.relevant_faqs(message, faqs)
        if not context:
            context = await self._search_faqs(message, matching.TEXT_CONTEXT_LIMIT)
        return context or matching.general_faqs(faqs)

    async def respond(self, message: str, history: list[dict]) -> dict:
        """First matching rule wins: package, redirect, price list, FAQ, redirect, LLM"""
        message = message.strip()

        package = await self._find_package(message)
        if package:
            return {"message": matching.format_package_card(package), "source": "package"}

        if matching.is_software_redirect_query(message):
            return {"message": SOFTWARE_REDIRECT, "source": "faq"}

        if matching.is_pricing_query(message):
            packages = await self.package_repo.list_packages(self.db)
            return {"message": matching.format_price_list(packages), "source": "package"}

        faqs = await self.faq_repo.list_faqs(self.db)
        faq = await self._best_faq(message, faqs)
        if faq:
            return {"message": matching.format_faq_answer(faq), "source": "faq"}

        if matching.is_off_topic(message):
            return {"message": OFF_TOPIC_REDIRECT, "source": "faq"}

        context = await self._context_faqs(message, faqs)
        try:
            reply = await llm.generate_reply(
                build_system_prompt(context), history[-HISTORY_LIMIT:], message
            )
        except llm.LLMUnavailableError:
            logger.warning("⚠️ Chat fell through to the LLM but no API key is configured")
            return error_reply()
        except Exception as e:
            logger.error(f"❌ LLM completion failed: {e}")
            return error_reply()

        reply = matching.clean_llm_reply(reply)
        if not reply:
            return error_reply()
        return {"message": reply, "source": "llm"}
