"""Tests for consultation booking, customer confirmation and the admin console"""

import importlib
from datetime import datetime, timedelta

import pytest
from conftest import run

from dsolar import email_service
from dsolar.database import APPOINTMENTS
from dsolar.domain.appointments import service as appointment_service
from dsolar.email_service import EmailDeliveryError
from dsolar.shared.dates import BUSINESS_TZ, business_today, utc_now


def next_weekday(offset: int = 1):
    day = business_today() + timedelta(days=offset)
    while day.weekday() >= 5:
        day += timedelta(days=1)
    return day


def next_weekend_day():
    day = business_today() + timedelta(days=1)
    while day.weekday() < 5:
        day += timedelta(days=1)
    return day


def booking(**overrides):
    data = {
        "name": "Juan Dela Cruz",
        "email": "Juan@Example.com",
        "phone": "0917-123-4567",
        "date": next_weekday().isoformat(),
        "time": "10:00",
        "message": "Interested in a hybrid system",
    }
    data.update(overrides)
    return data


def stored(db, appointment_id):
    from bson import ObjectId

    return run(db[APPOINTMENTS].find_one({"_id": ObjectId(appointment_id)}))


# ============================================================================
# BOOKING
# ============================================================================


def test_booking_creates_pending_customer_appointment(client, db, sent_emails):
    response = client.post("/api/appointment", json=booking())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    appointment = stored(db, body["appointmentId"])
    assert appointment["status"] == "pending_customer"
    assert appointment["email"] == "juan@example.com"
    assert appointment["confirmation_expires"] > utc_now() + timedelta(hours=23)

    assert len(sent_emails) == 1
    assert sent_emails[0]["to"] == "juan@example.com"
    assert f"token={appointment['confirmation_token']}" in sent_emails[0]["body"]


@pytest.mark.parametrize("field", ["name", "email", "phone", "date", "time"])
def test_booking_missing_field(client, field):
    response = client.post("/api/appointment", json=booking(**{field: ""}))

    assert response.status_code == 400
    assert field in response.json()["detail"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"phone": "call me maybe"},
        {"date": "12/01/2030"},
        {"time": "12:00"},
        {"time": "08:30"},
    ],
)
def test_booking_invalid_input(client, overrides):
    assert client.post("/api/appointment", json=booking(**overrides)).status_code == 400


def test_booking_in_the_past(client):
    yesterday = (business_today() - timedelta(days=1)).isoformat()
    response = client.post("/api/appointment", json=booking(date=yesterday))

    assert response.status_code == 400
    assert "past" in response.json()["detail"]


def test_booking_on_weekend(client):
    response = client.post("/api/appointment", json=booking(date=next_weekend_day().isoformat()))

    assert response.status_code == 400
    assert "weekend" in response.json()["detail"]


def test_double_booking_is_rejected(client):
    assert client.post("/api/appointment", json=booking()).status_code == 201

    response = client.post("/api/appointment", json=booking(email="other@example.com"))
    assert response.status_code == 409


def test_expired_unconfirmed_booking_frees_the_slot(client, db):
    slot = booking()
    run(
        db[APPOINTMENTS].insert_one(
            {
                **slot,
                "status": "pending_customer",
                "confirmation_token": "stale",
                "confirmation_expires": utc_now() - timedelta(hours=1),
                "created_at": utc_now() - timedelta(days=2),
            }
        )
    )

    assert client.post("/api/appointment", json=slot).status_code == 201


def test_cancelled_booking_frees_the_slot(client, db):
    slot = booking()
    run(db[APPOINTMENTS].insert_one({**slot, "status": "cancelled"}))

    assert client.post("/api/appointment", json=slot).status_code == 201


def test_booking_survives_email_failure(client, monkeypatch):
    async def failing_send_email(*args, **kwargs):
        raise EmailDeliveryError("Email service not configured")

    monkeypatch.setattr(email_service, "send_email", failing_send_email)

    assert client.post("/api/appointment", json=booking()).status_code == 201


def test_booking_rejects_failed_captcha(client, monkeypatch):
    async def reject(token, ip=None):
        return False

    monkeypatch.setattr(
        importlib.import_module("dsolar.domain.appointments.router"), "verify_turnstile", reject
    )

    response = client.post("/api/appointment", json=booking(captchaToken="bad"))
    assert response.status_code == 400


# ============================================================================
# AVAILABILITY
# ============================================================================


def test_day_slots_mark_booked_slot(client):
    day = next_weekday().isoformat()
    client.post("/api/appointment", json=booking(date=day, time="13:00"))

    response = client.get("/api/appointment", params={"date": day})

    assert response.status_code == 200
    slots = {s["time"]: s["available"] for s in response.json()["slots"]}
    assert list(slots) == ["09:00", "10:00", "11:00", "13:00", "14:00", "15:00", "16:00"]
    assert slots["13:00"] is False
    assert slots["09:00"] is True


def test_day_slots_on_weekend_are_closed(client):
    response = client.get("/api/appointment", params={"date": next_weekend_day().isoformat()})
    assert all(not s["available"] for s in response.json()["slots"])


def test_day_slots_invalid_date(client):
    assert client.get("/api/appointment", params={"date": "tomorrow"}).status_code == 400


def test_available_dates_skip_weekends(client):
    response = client.get("/api/appointment/available-slots")

    assert response.status_code == 200
    dates = response.json()
    assert 0 < len(dates) <= 14
    for entry in dates:
        day = entry["date"]
        assert day > business_today().isoformat()
        assert entry["formatted"]
        assert entry["available"] is True


def test_time_slots_for_date(client):
    day = next_weekday().isoformat()
    response = client.get("/api/appointment/available-slots", params={"date": day})

    assert response.status_code == 200
    slots = response.json()
    assert slots[0] == {"time": "09:00", "label": "09:00 AM", "available": True}
    assert slots[-1]["label"] == "04:00 PM"


@pytest.fixture
def lunchtime_wednesday(monkeypatch):
    """Freeze the business clock at 12:30 on a Wednesday"""
    now = datetime(2031, 6, 18, 12, 30, tzinfo=BUSINESS_TZ)
    monkeypatch.setattr(appointment_service, "business_now", lambda: now)
    return now.date()


def test_todays_earlier_slots_are_unavailable(client, lunchtime_wednesday):
    response = client.get("/api/appointment", params={"date": lunchtime_wednesday.isoformat()})

    assert response.status_code == 200
    slots = {s["time"]: s["available"] for s in response.json()["slots"]}
    assert slots == {
        "09:00": False,
        "10:00": False,
        "11:00": False,
        "13:00": True,
        "14:00": True,
        "15:00": True,
        "16:00": True,
    }


def test_todays_time_slots_hide_passed_hours(client, lunchtime_wednesday):
    response = client.get(
        "/api/appointment/available-slots", params={"date": lunchtime_wednesday.isoformat()}
    )

    available = [s["time"] for s in response.json() if s["available"]]
    assert available == ["13:00", "14:00", "15:00", "16:00"]


def test_booking_a_passed_slot_today(client, lunchtime_wednesday, sent_emails):
    response = client.post(
        "/api/appointment", json=booking(date=lunchtime_wednesday.isoformat(), time="10:00")
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "This time slot has already passed"
    assert sent_emails == []


def test_booking_a_later_slot_today(client, lunchtime_wednesday, sent_emails):
    response = client.post(
        "/api/appointment", json=booking(date=lunchtime_wednesday.isoformat(), time="13:00")
    )

    assert response.status_code == 201


def test_time_slots_for_weekend(client):
    response = client.get(
        "/api/appointment/available-slots", params={"date": next_weekend_day().isoformat()}
    )
    assert response.status_code == 400


# ============================================================================
# CONFIRMATION
# ============================================================================


def test_confirmation_moves_to_pending_admin(client, db, sent_emails):
    appointment_id = client.post("/api/appointment", json=booking()).json()["appointmentId"]
    token = stored(db, appointment_id)["confirmation_token"]

    response = client.get("/api/appointment/confirm", params={"token": token})

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Juan Dela Cruz" in response.text
    appointment = stored(db, appointment_id)
    assert appointment["status"] == "pending_admin"
    assert "confirmation_token" not in appointment
    assert len(sent_emails) == 2
    assert sent_emails[1]["reply_to"] == "juan@example.com"


def test_confirmation_token_is_single_use(client, db):
    appointment_id = client.post("/api/appointment", json=booking()).json()["appointmentId"]
    token = stored(db, appointment_id)["confirmation_token"]

    client.get("/api/appointment/confirm", params={"token": token})
    response = client.get("/api/appointment/confirm", params={"token": token})

    assert response.status_code == 404
    assert "text/html" in response.headers["content-type"]


def test_confirmation_without_token(client):
    assert client.get("/api/appointment/confirm").status_code == 400


def test_confirmation_with_unknown_token(client):
    assert client.get("/api/appointment/confirm", params={"token": "nope"}).status_code == 404


def test_confirmation_with_expired_token(client, db):
    run(
        db[APPOINTMENTS].insert_one(
            {
                **booking(),
                "status": "pending_customer",
                "confirmation_token": "expired-token",
                "confirmation_expires": utc_now() - timedelta(minutes=5),
            }
        )
    )

    response = client.get("/api/appointment/confirm", params={"token": "expired-token"})

    assert response.status_code == 410
    assert "Expired" in response.text


# ============================================================================
# ADMIN
# ============================================================================


def test_admin_lists_appointments_with_pagination(admin_client):
    for slot in ("09:00", "10:00", "11:00"):
        admin_client.post("/api/appointment", json=booking(time=slot))

    response = admin_client.get("/api/admin/appointments", params={"limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert len(body["appointments"]) == 2
    assert body["pagination"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}
    assert body["appointments"][0]["time"] == "09:00"


def test_admin_filters_by_status(admin_client, db):
    appointment_id = admin_client.post("/api/appointment", json=booking()).json()["appointmentId"]
    admin_client.post("/api/appointment", json=booking(time="14:00"))
    run(db[APPOINTMENTS].update_one({"_id": stored(db, appointment_id)["_id"]}, {"$set": {"status": "confirmed"}}))

    response = admin_client.get("/api/admin/appointments", params={"status": "confirmed"})

    appointments = response.json()["appointments"]
    assert [a["id"] for a in appointments] == [appointment_id]


def test_admin_filters_by_date_range(admin_client):
    first = next_weekday()
    later = next_weekday((first - business_today()).days + 1)
    admin_client.post("/api/appointment", json=booking(date=first.isoformat()))
    admin_client.post("/api/appointment", json=booking(date=later.isoformat()))

    response = admin_client.get(
        "/api/admin/appointments",
        params={"startDate": later.isoformat(), "endDate": later.isoformat()},
    )

    assert [a["date"] for a in response.json()["appointments"]] == [later.isoformat()]


def test_admin_rejects_unknown_status_filter(admin_client):
    assert admin_client.get("/api/admin/appointments", params={"status": "lost"}).status_code == 400


def test_admin_updates_status_and_notes(admin_client):
    appointment_id = admin_client.post("/api/appointment", json=booking()).json()["appointmentId"]

    response = admin_client.patch(
        "/api/admin/appointments",
        json={"id": appointment_id, "status": "confirmed", "notes": "  Called to confirm  "},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert response.json()["notes"] == "Called to confirm"


def test_admin_update_invalid_status(admin_client):
    appointment_id = admin_client.post("/api/appointment", json=booking()).json()["appointmentId"]

    response = admin_client.patch("/api/admin/appointments", json={"id": appointment_id, "status": "maybe"})
    assert response.status_code == 400


def test_admin_update_unknown_appointment(admin_client):
    for appointment_id in ("0123456789abcdef01234567", "not-an-id"):
        response = admin_client.patch(
            "/api/admin/appointments", json={"id": appointment_id, "status": "confirmed"}
        )
        assert response.status_code == 404


def test_admin_pending_count(admin_client, db):
    first = admin_client.post("/api/appointment", json=booking()).json()["appointmentId"]
    admin_client.post("/api/appointment", json=booking(time="14:00"))
    admin_client.patch("/api/admin/appointments", json={"id": first, "status": "cancelled"})

    response = admin_client.get("/api/admin/appointments/pending-count")
    assert response.json() == {"count": 1}
