"""Tests for sitemap.xml and robots.txt"""

from datetime import datetime

from conftest import run

from dsolar import config
from dsolar.database import BLOGS
from dsolar.routes.seo import STATIC_PAGES, build_sitemap


def test_build_sitemap_lists_static_pages_and_posts():
    now = datetime(2024, 5, 1, 8, 30)
    posts = [
        {"slug": "net-metering-101", "updated_at": datetime(2024, 4, 2, 10, 0), "created_at": datetime(2024, 4, 1)},
        {"slug": "no-timestamps"},
    ]

    xml = build_sitemap(posts, now)

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert xml.count("<url>") == len(STATIC_PAGES) + 2
    assert f"<loc>{config.SITE_URL}/blogs/net-metering-101</loc>" in xml
    assert "<lastmod>2024-04-02T10:00:00Z</lastmod>" in xml
    assert "<lastmod>2024-05-01T08:30:00Z</lastmod>" in xml
    assert "<changefreq>weekly</changefreq>" in xml


def test_build_sitemap_escapes_urls():
    xml = build_sitemap([{"slug": "a&b"}], datetime(2024, 1, 1))
    assert "/blogs/a&amp;b</loc>" in xml


def test_sitemap_endpoint(client, db):
    run(db[BLOGS].insert_one({"slug": "why-go-solar", "title": "Why", "created_at": datetime(2024, 1, 5)}))

    response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert f"{config.SITE_URL}/blogs/why-go-solar" in response.text
    assert "<lastmod>2024-01-05T00:00:00Z</lastmod>" in response.text


def test_sitemap_falls_back_to_static_pages(client, monkeypatch):
    from dsolar.domain.blogs.repository import BlogRepository

    async def broken(db):
        raise RuntimeError("database down")

    monkeypatch.setattr(BlogRepository, "sitemap_entries", staticmethod(broken))

    response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.text.count("<url>") == len(STATIC_PAGES)


def test_robots_txt(client):
    response = client.get("/robots.txt")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    lines = response.text.splitlines()
    assert "Disallow: /admin/" in lines
    assert "Disallow: /api/" in lines
    assert f"Sitemap: {config.SITE_URL}/sitemap.xml" in lines
