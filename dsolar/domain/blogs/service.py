"""Blog service - Business logic for blog posts"""

import logging
import re
from typing import Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from ...shared.dates import utc_now
from ...shared.validators import parse_object_id
from .repository import BlogRepository
from .schemas import DEFAULT_AUTHOR, DEFAULT_IMAGE_URL, BlogPayload

logger = logging.getLogger(__name__)


def generate_slug(title: str) -> str:
    """'Solar 101: Net Metering!' -> 'solar-101-net-metering'"""
    slug = re.sub(r"[^\w\s-]", "", title.lower())
    slug = re.sub(r"[\s_-]+", "-", slug.strip())
    return slug.strip("-")


class BlogService:
    """Service layer for blog post business logic"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.repo = BlogRepository()

    async def list_public(
        self, category: Optional[str], tag: Optional[str], page: int, limit: int
    ) -> tuple[list[dict], int]:
        query: dict = {}
        if category:
            query["category"] = category
        if tag:
            query["tags"] = tag
        total = await self.repo.count(self.db, query)
        posts = await self.repo.list_posts(self.db, query, DESCENDING, (page - 1) * limit, limit)
        return posts, total

    async def list_all(self, order: int) -> list[dict]:
        return await self.repo.list_posts(self.db, order=ASCENDING if order == 1 else DESCENDING)

    async def get_by_slug(self, slug: str) -> dict:
        post = await self.repo.get_by_slug(self.db, slug.lower())
        if not post:
            raise HTTPException(status_code=404, detail="Blog post not found")
        return post

    async def get_post(self, post_id: str) -> dict:
        oid = parse_object_id(post_id)
        post = await self.repo.get_by_id(self.db, oid) if oid else None
        if not post:
            raise HTTPException(status_code=404, detail="Blog post not found")
        return post

    def _prepare(self, data: BlogPayload, current_slug: Optional[str] = None) -> dict:
        """A slug sent by the admin wins, then the stored slug, then one derived from the title."""
        title = (data.title or "").strip()
        content = (data.content or "").strip()
        if not title or not content:
            raise HTTPException(status_code=400, detail="Title and content are required")

        if (data.slug or "").strip():
            slug = generate_slug(data.slug)
            if not slug:
                raise HTTPException(status_code=400, detail="Slug must contain letters or numbers")
        else:
            slug = current_slug or generate_slug(title)
            if not slug:
                raise HTTPException(status_code=400, detail="Title must contain letters or numbers")

        return {
            "title": title,
            "slug": slug,
            "content": content,
            "short_description": (data.shortDescription or "").strip() or None,
            "image_url": (data.imageUrl or "").strip() or DEFAULT_IMAGE_URL,
            "author": (data.author or "").strip() or DEFAULT_AUTHOR,
            "category": (data.category or "").strip() or None,
            "tags": data.tags,
        }

    async def create_post(self, data: BlogPayload) -> dict:
        fields = self._prepare(data)
        if await self.repo.slug_taken(self.db, fields["slug"]):
            raise HTTPException(status_code=400, detail="A post with this slug already exists")

        now = utc_now()
        try:
            post = await self.repo.create(self.db, {**fields, "created_at": now, "updated_at": now})
        except DuplicateKeyError as e:
            raise HTTPException(status_code=400, detail="A post with this slug already exists") from e

        logger.info(f"✅ Blog post created: {post['slug']}")
        return post

    async def update_post(self, post_id: str, data: BlogPayload) -> dict:
        existing = await self.get_post(post_id)
        fields = self._prepare(data, current_slug=existing.get("slug"))
        if await self.repo.slug_taken(self.db, fields["slug"], exclude_id=existing["_id"]):
            raise HTTPException(status_code=400, detail="A post with this slug already exists")

        try:
            post = await self.repo.update(self.db, existing["_id"], {**fields, "updated_at": utc_now()})
        except DuplicateKeyError as e:
            raise HTTPException(status_code=400, detail="A post with this slug already exists") from e
        if not post:
            raise HTTPException(status_code=404, detail="Blog post not found")

        logger.info(f"📝 Blog post updated: {post['slug']}")
        return post

    async def delete_post(self, post_id: str) -> dict:
        oid = parse_object_id(post_id)
        if not oid or not await self.repo.delete(self.db, oid):
            raise HTTPException(status_code=404, detail="Blog post not found")
        logger.info(f"🗑️ Blog post deleted: {post_id}")
        return {"success": True, "message": "Blog post deleted successfully"}

    async def sitemap_entries(self) -> list[dict]:
        return await self.repo.sitemap_entries(self.db)
