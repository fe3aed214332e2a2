import logging
from datetime import datetime
from xml.sax.saxutils import escape

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from .. import config
from ..database import get_db
from ..domain.blogs.repository import BlogRepository
from ..shared.dates import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["SEO"])

# (path, changefreq, priority)
STATIC_PAGES = [
    ("", "monthly", "1.0"),
    ("/residential", "monthly", "0.8"),
    ("/commercial", "monthly", "0.8"),
    ("/financing", "monthly", "0.8"),
    ("/net-metering", "monthly", "0.8"),
    ("/about", "monthly", "0.8"),
    ("/blogs", "daily", "0.9"),
]


def _url_entry(loc: str, lastmod: datetime, changefreq: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(loc)}</loc>\n"
        f"    <lastmod>{lastmod.strftime('%Y-%m-%dT%H:%M:%SZ')}</lastmod>\n"
        f"    <changefreq>{changefreq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>"
    )


def build_sitemap(posts: list[dict], now: datetime) -> str:
    entries = [_url_entry(f"{config.SITE_URL}{path}", now, freq, prio) for path, freq, prio in STATIC_PAGES]
    for post in posts:
        lastmod = post.get("updated_at") or post.get("created_at") or now
        entries.append(_url_entry(f"{config.SITE_URL}/blogs/{post['slug']}", lastmod, "weekly", "0.7"))
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>\n"
    )


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap_xml(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        posts = await BlogRepository.sitemap_entries(db)
    except Exception as e:
        logger.error(f"❌ Sitemap blog lookup failed, serving static pages only: {e}")
        posts = []
    return Response(content=build_sitemap(posts, utc_now()), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
async def robots_txt():
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /admin/\n"
        "Disallow: /api/\n"
        "Disallow: /private/\n"
        "\n"
        f"Sitemap: {config.SITE_URL}/sitemap.xml\n"
    )
