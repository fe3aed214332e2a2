"""Blog domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_IMAGE_URL = "/default-blog-image.jpg"
DEFAULT_AUTHOR = "D-Solar Team"


class BlogPayload(BaseModel):
    """Create/update body. Title and content are checked in the service (400 when blank)."""

    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    shortDescription: Optional[str] = None
    imageUrl: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = []

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        seen = []
        for tag in v or []:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class BlogResponse(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    shortDescription: Optional[str] = None
    imageUrl: str
    author: str
    category: Optional[str] = None
    tags: list[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class BlogListResponse(BaseModel):
    blogs: list[BlogResponse]
    total: int
    page: int
    limit: int


class SitemapEntry(BaseModel):
    slug: str
    updatedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
