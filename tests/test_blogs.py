"""Tests for the public blog and admin post management"""

from datetime import timedelta

import pytest
from conftest import run

from dsolar.database import BLOGS
from dsolar.domain.blogs.service import generate_slug
from dsolar.shared.dates import utc_now


@pytest.mark.parametrize(
    "title,slug",
    [
        ("Solar 101: Net Metering!", "solar-101-net-metering"),
        ("  Hybrid vs On-Grid  ", "hybrid-vs-on-grid"),
        ("Why   solar__now", "why-solar-now"),
    ],
)
def test_generate_slug(title, slug):
    assert generate_slug(title) == slug


def backdate(db, title, minutes):
    run(db[BLOGS].update_one({"title": title}, {"$set": {"created_at": utc_now() - timedelta(minutes=minutes)}}))


def post(**overrides):
    data = {
        "title": "How Net Metering Works",
        "content": "<p>Export your excess power to the grid.</p>",
        "shortDescription": "A primer on net metering",
        "category": "Guides",
        "tags": ["net metering", " savings ", "savings", ""],
    }
    data.update(overrides)
    return data


def test_create_post_applies_defaults(admin_client):
    response = admin_client.post("/api/admin/blogs", json=post())

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "how-net-metering-works"
    assert body["author"] == "D-Solar Team"
    assert body["imageUrl"] == "/default-blog-image.jpg"
    assert body["tags"] == ["net metering", "savings"]
    assert body["createdAt"] is not None


def test_create_post_requires_title_and_content(admin_client):
    assert admin_client.post("/api/admin/blogs", json=post(title="  ")).status_code == 400
    assert admin_client.post("/api/admin/blogs", json=post(content="")).status_code == 400


def test_duplicate_title_is_rejected(admin_client):
    admin_client.post("/api/admin/blogs", json=post())

    response = admin_client.post("/api/admin/blogs", json=post(title="How net metering works!"))
    assert response.status_code == 400


def test_public_post_by_slug(admin_client):
    admin_client.post("/api/admin/blogs", json=post())

    response = admin_client.get("/api/blogs/How-Net-Metering-Works")

    assert response.status_code == 200
    assert response.json()["title"] == "How Net Metering Works"


def test_public_post_not_found(client):
    assert client.get("/api/blogs/missing-post").status_code == 404


def test_public_list_filters_and_paginates(admin_client, db):
    admin_client.post("/api/admin/blogs", json=post(title="First", category="News", tags=["launch"]))
    admin_client.post("/api/admin/blogs", json=post(title="Second", category="Guides"))
    admin_client.post("/api/admin/blogs", json=post(title="Third", category="Guides", tags=["launch"]))
    for minutes, title in ((30, "First"), (20, "Second"), (10, "Third")):
        backdate(db, title, minutes)

    everything = admin_client.get("/api/blogs").json()
    assert everything["total"] == 3
    assert [b["title"] for b in everything["blogs"]] == ["Third", "Second", "First"]

    guides = admin_client.get("/api/blogs", params={"category": "Guides"}).json()
    assert {b["title"] for b in guides["blogs"]} == {"Second", "Third"}

    tagged = admin_client.get("/api/blogs", params={"tag": "launch"}).json()
    assert tagged["total"] == 2

    page = admin_client.get("/api/blogs", params={"page": 2, "limit": 2}).json()
    assert [b["title"] for b in page["blogs"]] == ["First"]
    assert page["page"] == 2


def test_admin_list_order(admin_client, db):
    admin_client.post("/api/admin/blogs", json=post(title="Older"))
    admin_client.post("/api/admin/blogs", json=post(title="Newer"))
    backdate(db, "Older", 10)

    newest_first = admin_client.get("/api/admin/blogs").json()
    oldest_first = admin_client.get("/api/admin/blogs", params={"order": 1}).json()

    assert [b["title"] for b in newest_first] == ["Newer", "Older"]
    assert [b["title"] for b in oldest_first] == ["Older", "Newer"]


def test_create_post_with_explicit_slug(admin_client):
    response = admin_client.post("/api/admin/blogs", json=post(slug="Net-Metering-101"))

    assert response.status_code == 201
    assert response.json()["slug"] == "net-metering-101"
    assert admin_client.get("/api/blogs/net-metering-101").status_code == 200


def test_create_post_with_taken_slug(admin_client):
    admin_client.post("/api/admin/blogs", json=post())

    response = admin_client.post("/api/admin/blogs", json=post(title="Another Title", slug="how-net-metering-works"))

    assert response.status_code == 400


def test_retitled_post_keeps_its_url(admin_client):
    post_id = admin_client.post("/api/admin/blogs", json=post(title="Net Metering Guide")).json()["id"]

    response = admin_client.put(
        f"/api/admin/blogs/{post_id}",
        json=post(title="Net Metering Guide 2025", slug="net-metering-guide", author="Engr. Reyes"),
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "net-metering-guide"
    assert response.json()["author"] == "Engr. Reyes"
    assert admin_client.get("/api/blogs/net-metering-guide").json()["title"] == "Net Metering Guide 2025"


def test_update_without_slug_keeps_stored_slug(admin_client):
    post_id = admin_client.post("/api/admin/blogs", json=post()).json()["id"]

    response = admin_client.put(f"/api/admin/blogs/{post_id}", json=post(title="Net Metering Explained"))

    assert response.json()["slug"] == "how-net-metering-works"
    assert admin_client.get("/api/blogs/how-net-metering-works").status_code == 200


def test_update_post_with_new_slug(admin_client):
    post_id = admin_client.post("/api/admin/blogs", json=post()).json()["id"]

    response = admin_client.put(f"/api/admin/blogs/{post_id}", json=post(slug="net-metering-explained"))

    assert response.json()["slug"] == "net-metering-explained"
    assert admin_client.get("/api/blogs/how-net-metering-works").status_code == 404


def test_update_post_keeping_its_title(admin_client):
    post_id = admin_client.post("/api/admin/blogs", json=post()).json()["id"]

    response = admin_client.put(f"/api/admin/blogs/{post_id}", json=post(content="<p>Updated</p>"))

    assert response.status_code == 200
    assert response.json()["content"] == "<p>Updated</p>"


def test_update_post_into_slug_of_another_post(admin_client):
    admin_client.post("/api/admin/blogs", json=post(title="Taken"))
    post_id = admin_client.post("/api/admin/blogs", json=post(title="Free")).json()["id"]

    response = admin_client.put(f"/api/admin/blogs/{post_id}", json=post(title="Free", slug="taken"))

    assert response.status_code == 400
    assert response.json()["detail"] == "A post with this slug already exists"


def test_get_and_delete_post(admin_client):
    post_id = admin_client.post("/api/admin/blogs", json=post()).json()["id"]

    assert admin_client.get(f"/api/admin/blogs/{post_id}").status_code == 200
    response = admin_client.delete(f"/api/admin/blogs/{post_id}")
    assert response.json() == {"success": True, "message": "Blog post deleted successfully"}
    assert admin_client.get(f"/api/admin/blogs/{post_id}").status_code == 404
    assert admin_client.delete(f"/api/admin/blogs/{post_id}").status_code == 404


def test_malformed_post_id(admin_client):
    assert admin_client.get("/api/admin/blogs/not-an-object-id").status_code == 404


def test_blog_sitemap_entries(admin_client):
    admin_client.post("/api/admin/blogs", json=post(title="Beta"))
    admin_client.post("/api/admin/blogs", json=post(title="Alpha"))

    entries = admin_client.get("/api/sitemap").json()

    assert [e["slug"] for e in entries] == ["alpha", "beta"]
    assert entries[0]["updatedAt"] is not None
