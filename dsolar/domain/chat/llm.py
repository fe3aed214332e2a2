"""OpenAI-compatible chat completion client (Groq by default)"""

import logging
from typing import Optional

from openai import AsyncOpenAI

from ... import config

logger = logging.getLogger(__name__)

# Lazy-loaded client
_client: Optional[AsyncOpenAI] = None


class LLMUnavailableError(RuntimeError):
    pass


def get_llm_client() -> AsyncOpenAI:
    """Get or create the completion client (lazy initialization)"""
    global _client
    if not config.LLM_API_KEY:
        raise LLMUnavailableError("LLM_API_KEY is not configured")
    if _client is None:
        _client = AsyncOpenAI(
            api_key=config.LLM_API_KEY,
            base_url=config.LLM_BASE_URL,
            timeout=config.LLM_TIMEOUT_SECONDS,
        )
    return _client


async def generate_reply(system_prompt: str, history: list[dict], message: str) -> str:
    client = get_llm_client()
    response = await client.chat.completions.create(
        model=config.LLM_MODEL,
        messages=[
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": message},
        ],
        temperature=0.7,
        max_tokens=475,
        top_p=0.95,
    )
    return response.choices[0].message.content or ""
