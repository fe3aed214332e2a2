"""Tests for admin FAQ management"""


def faq(**overrides):
    data = {
        "id": "net-metering",
        "question": "What is net metering?",
        "answer": "Net metering credits you for excess power exported to the grid.",
        "keywords": ["Net Metering", " export ", ""],
    }
    data.update(overrides)
    return data


def test_create_faq_normalizes_keywords(admin_client):
    response = admin_client.post("/api/admin/faqs", json=faq())

    assert response.status_code == 201
    assert response.json()["id"] == "net-metering"
    assert response.json()["keywords"] == ["net metering", "export"]


def test_create_faq_missing_fields(admin_client):
    for overrides in ({"id": ""}, {"question": " "}, {"answer": None}, {"keywords": []}):
        response = admin_client.post("/api/admin/faqs", json=faq(**overrides))
        assert response.status_code == 400, overrides


def test_create_duplicate_faq(admin_client):
    admin_client.post("/api/admin/faqs", json=faq())

    response = admin_client.post("/api/admin/faqs", json=faq())

    assert response.status_code == 409
    assert response.json()["detail"] == "FAQ with this ID already exists"


def test_list_faqs_sorted_by_id(admin_client):
    admin_client.post("/api/admin/faqs", json=faq(id="warranty"))
    admin_client.post("/api/admin/faqs", json=faq(id="battery"))

    ids = [f["id"] for f in admin_client.get("/api/admin/faqs").json()]
    assert ids == ["battery", "warranty"]


def test_get_faq(admin_client):
    admin_client.post("/api/admin/faqs", json=faq())

    assert admin_client.get("/api/admin/faqs/net-metering").json()["question"] == "What is net metering?"

    response = admin_client.get("/api/admin/faqs/unknown")
    assert response.status_code == 404
    assert response.json()["detail"] == 'FAQ with ID "unknown" not found'


def test_update_faq(admin_client):
    admin_client.post("/api/admin/faqs", json=faq())

    response = admin_client.put(
        "/api/admin/faqs/net-metering", json=faq(id=None, answer="Updated answer", keywords=["grid"])
    )

    assert response.status_code == 200
    assert response.json()["answer"] == "Updated answer"
    assert response.json()["keywords"] == ["grid"]


def test_update_unknown_faq(admin_client):
    assert admin_client.put("/api/admin/faqs/unknown", json=faq()).status_code == 404


def test_delete_faq(admin_client):
    admin_client.post("/api/admin/faqs", json=faq())

    response = admin_client.delete("/api/admin/faqs/net-metering")

    assert response.json() == {"success": True, "message": "FAQ deleted successfully"}
    assert admin_client.delete("/api/admin/faqs/net-metering").status_code == 404
