"""Blog router - public blog feed and admin blog management"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...auth import get_current_admin
from ...database import get_db
from .schemas import (
    DEFAULT_AUTHOR,
    DEFAULT_IMAGE_URL,
    BlogListResponse,
    BlogPayload,
    BlogResponse,
    DeleteResponse,
    SitemapEntry,
)
from .service import BlogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Blog"])
admin_router = APIRouter(prefix="/api/admin/blogs", tags=["Admin Blog"])


def get_blog_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> BlogService:
    """Dependency injection for BlogService"""
    return BlogService(db)


def to_response(doc: dict) -> BlogResponse:
    return BlogResponse(
        id=str(doc["_id"]),
        title=doc["title"],
        slug=doc["slug"],
        content=doc["content"],
        shortDescription=doc.get("short_description"),
        imageUrl=doc.get("image_url") or DEFAULT_IMAGE_URL,
        author=doc.get("author") or DEFAULT_AUTHOR,
        category=doc.get("category"),
        tags=doc.get("tags") or [],
        createdAt=doc.get("created_at"),
        updatedAt=doc.get("updated_at"),
    )


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("/blogs", response_model=BlogListResponse)
async def list_blogs(
    category: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=50),
    service: BlogService = Depends(get_blog_service),
):
    """Published posts, newest first"""
    posts, total = await service.list_public(category, tag, page, limit)
    return BlogListResponse(blogs=[to_response(p) for p in posts], total=total, page=page, limit=limit)


@router.get("/blogs/{slug}", response_model=BlogResponse)
async def get_blog_by_slug(slug: str, service: BlogService = Depends(get_blog_service)):
    return to_response(await service.get_by_slug(slug))


@router.get("/sitemap", response_model=list[SitemapEntry])
async def blog_sitemap(service: BlogService = Depends(get_blog_service)):
    """Slugs and timestamps for the frontend sitemap generator"""
    entries = await service.sitemap_entries()
    return [
        SitemapEntry(slug=e["slug"], updatedAt=e.get("updated_at"), createdAt=e.get("created_at"))
        for e in entries
    ]


# ============================================================================
# ADMIN
# ============================================================================


@admin_router.get("", response_model=list[BlogResponse])
async def admin_list_blogs(
    order: int = Query(-1),
    _admin: dict = Depends(get_current_admin),
    service: BlogService = Depends(get_blog_service),
):
    return [to_response(p) for p in await service.list_all(order)]


@admin_router.post("", response_model=BlogResponse, status_code=201)
async def admin_create_blog(
    data: BlogPayload,
    _admin: dict = Depends(get_current_admin),
    service: BlogService = Depends(get_blog_service),
):
    return to_response(await service.create_post(data))


@admin_router.get("/{post_id}", response_model=BlogResponse)
async def admin_get_blog(
    post_id: str,
    _admin: dict = Depends(get_current_admin),
    service: BlogService = Depends(get_blog_service),
):
    return to_response(await service.get_post(post_id))


@admin_router.put("/{post_id}", response_model=BlogResponse)
async def admin_update_blog(
    post_id: str,
    data: BlogPayload,
    _admin: dict = Depends(get_current_admin),
    service: BlogService = Depends(get_blog_service),
):
    return to_response(await service.update_post(post_id, data))


@admin_router.delete("/{post_id}", response_model=DeleteResponse)
async def admin_delete_blog(
    post_id: str,
    _admin: dict = Depends(get_current_admin),
    service: BlogService = Depends(get_blog_service),
):
    return await service.delete_post(post_id)
