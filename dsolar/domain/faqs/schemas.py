"""FAQ domain schemas"""

from typing import Optional

from pydantic import BaseModel, field_validator


class FAQPayload(BaseModel):
    """Create/update body. ``id`` is only read on create."""

    id: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    keywords: Optional[list[str]] = None

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v):
        if v is None:
            return v
        return [k.strip().lower() for k in v if k and k.strip()]


class FAQResponse(BaseModel):
    id: str
    question: str
    answer: str
    keywords: list[str]


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
