"""Appointment service - booking, slot availability and the confirmation flow"""

import logging
from datetime import date, datetime, timedelta
from math import ceil
from typing import Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...config import CONFIRMATION_TOKEN_TTL_HOURS
from ...email_service import (
    EmailDeliveryError,
    send_admin_appointment_notification,
    send_appointment_confirmation_email,
)
from ...security_utils import generate_secure_token
from ...shared.dates import business_now, format_long_date, format_time_label, is_weekend, utc_now
from ...shared.validators import (
    EMAIL_REGEX,
    PHONE_REGEX,
    parse_iso_date,
    parse_object_id,
)
from ...utils.sanitization import clean_text
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentStatus, AppointmentUpdate

logger = logging.getLogger(__name__)

# Hourly consultation slots in the business timezone, lunch hour excluded
SLOT_TIMES = ["09:00", "10:00", "11:00", "13:00", "14:00", "15:00", "16:00"]
MAX_APPOINTMENTS_PER_SLOT = 1
BOOKING_WINDOW_DAYS = 14

PENDING_STATUSES = [AppointmentStatus.PENDING_CUSTOMER.value, AppointmentStatus.PENDING_ADMIN.value]


class ConfirmationError(Exception):
    """A confirmation link that cannot be honoured; rendered as an HTML page"""

    def __init__(self, status_code: int, title: str, message: str, reasons: Optional[list[str]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.title = title
        self.message = message
        self.reasons = reasons or []


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.repo = AppointmentRepository()

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    @staticmethod
    def _slot_has_passed(day: date, slot: str, now: datetime) -> bool:
        if day != now.date():
            return day < now.date()
        return slot <= now.strftime("%H:%M")

    def _free_slots(self, day: date, taken: dict[tuple[str, str], int], now: datetime) -> list[dict]:
        day_key = day.isoformat()
        closed = is_weekend(day)
        return [
            {
                "time": slot,
                "available": not closed
                and not self._slot_has_passed(day, slot, now)
                and taken.get((day_key, slot), 0) < MAX_APPOINTMENTS_PER_SLOT,
            }
            for slot in SLOT_TIMES
        ]

    async def _taken_counts(self, date_from: date, date_to: date) -> dict[tuple[str, str], int]:
        holders = await self.repo.get_taken_slots(
            self.db, date_from.isoformat(), date_to.isoformat(), utc_now()
        )
        counts: dict[tuple[str, str], int] = {}
        for holder in holders:
            key = (holder["date"], holder["time"])
            counts[key] = counts.get(key, 0) + 1
        return counts

    async def get_day_slots(self, day: date) -> list[dict]:
        """Every slot of one day with its availability"""
        taken = await self._taken_counts(day, day)
        return self._free_slots(day, taken, business_now().replace(tzinfo=None))

    async def get_available_dates(self) -> list[dict]:
        """The next BOOKING_WINDOW_DAYS days (from tomorrow), weekends skipped"""
        now = business_now().replace(tzinfo=None)
        days = [now.date() + timedelta(days=offset) for offset in range(1, BOOKING_WINDOW_DAYS + 1)]
        days = [day for day in days if not is_weekend(day)]
        if not days:
            return []

        taken = await self._taken_counts(days[0], days[-1])
        return [
            {
                "date": day.isoformat(),
                "formatted": format_long_date(day),
                "available": any(slot["available"] for slot in self._free_slots(day, taken, now)),
            }
            for day in days
        ]

    async def get_time_slots(self, day: date) -> list[dict]:
        if is_weekend(day):
            raise HTTPException(status_code=400, detail="Appointments are not available on weekends")
        slots = await self.get_day_slots(day)
        return [
            {"time": slot["time"], "label": format_time_label(slot["time"]), "available": slot["available"]}
            for slot in slots
        ]

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def _validate_booking(self, data: AppointmentCreate) -> dict:
        required = {
            "name": data.name,
            "email": data.email,
            "phone": data.phone,
            "date": data.date,
            "time": data.time,
        }
        missing = [field for field, value in required.items() if not (value and value.strip())]
        if missing:
            raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

        email = data.email.strip().lower()
        if not EMAIL_REGEX.match(email):
            raise HTTPException(status_code=400, detail="Invalid email format")

        phone = data.phone.strip()
        if not PHONE_REGEX.match(phone):
            raise HTTPException(status_code=400, detail="Invalid phone number format")

        try:
            day = parse_iso_date(data.date)
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Invalid date format, expected YYYY-MM-DD") from e

        slot = data.time.strip()
        if slot not in SLOT_TIMES:
            raise HTTPException(status_code=400, detail="Invalid time slot")

        now = business_now().replace(tzinfo=None)
        if day < now.date():
            raise HTTPException(status_code=400, detail="Cannot book appointments in the past")
        if is_weekend(day):
            raise HTTPException(status_code=400, detail="Appointments are not available on weekends")
        if self._slot_has_passed(day, slot, now):
            raise HTTPException(status_code=400, detail="This time slot has already passed")

        try:
            name = clean_text(data.name, max_length=120)
            message = clean_text(data.message, max_length=2000)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return {
            "name": name,
            "email": email,
            "phone": phone,
            "date": day,
            "time": slot,
            "message": message or None,
        }

    async def create_appointment(self, data: AppointmentCreate) -> str:
        """Store a pending_customer booking and email the confirmation link"""
        fields = self._validate_booking(data)
        day: date = fields["date"]
        now = utc_now()

        holders = await self.repo.get_slot_holders(self.db, day.isoformat(), fields["time"], now)
        if len(holders) >= MAX_APPOINTMENTS_PER_SLOT:
            logger.info(f"🚫 Slot {day.isoformat()} {fields['time']} already taken")
            raise HTTPException(status_code=409, detail="This time slot is already booked")

        token = generate_secure_token()
        document = {
            **fields,
            "date": day.isoformat(),
            "status": AppointmentStatus.PENDING_CUSTOMER.value,
            "confirmation_token": token,
            "confirmation_expires": now + timedelta(hours=CONFIRMATION_TOKEN_TTL_HOURS),
            "notes": None,
            "created_at": now,
            "updated_at": now,
        }
        appointment_id = await self.repo.create(self.db, document)

        # Two requests can pass the check above together; the oldest booking keeps the slot
        holders = await self.repo.get_slot_holders(self.db, day.isoformat(), fields["time"], now)
        if holders and holders[0]["_id"] != appointment_id:
            await self.repo.delete(self.db, appointment_id)
            logger.info(f"🚫 Lost race for slot {day.isoformat()} {fields['time']}")
            raise HTTPException(status_code=409, detail="This time slot is already booked")

        logger.info(f"✅ Appointment {appointment_id} created for {day.isoformat()} {fields['time']}")

        try:
            await send_appointment_confirmation_email(
                to=fields["email"],
                customer_name=fields["name"],
                date_label=format_long_date(day),
                time_label=format_time_label(fields["time"]),
                token=token,
            )
        except EmailDeliveryError as e:
            logger.error(f"❌ Confirmation email for appointment {appointment_id} failed: {e}")

        return str(appointment_id)

    # ------------------------------------------------------------------
    # Customer confirmation
    # ------------------------------------------------------------------

    async def confirm_appointment(self, token: Optional[str]) -> dict:
        if not token:
            raise ConfirmationError(
                400, "Invalid Confirmation Link", "The confirmation link is missing its token."
            )

        appointment = await self.repo.get_pending_by_token(self.db, token)
        if not appointment:
            raise ConfirmationError(
                404,
                "Appointment Not Found",
                "We could not find an appointment waiting for this confirmation.",
                [
                    "The appointment was already confirmed",
                    "The link was copied incorrectly",
                    "The appointment was cancelled",
                ],
            )

        now = utc_now()
        expires = appointment.get("confirmation_expires")
        if expires is None or expires < now:
            raise ConfirmationError(
                410,
                "Confirmation Link Expired",
                f"Confirmation links are valid for {CONFIRMATION_TOKEN_TTL_HOURS} hours. Please book again.",
            )

        updated = await self.repo.mark_customer_confirmed(self.db, appointment["_id"], token, now)
        if not updated:
            raise ConfirmationError(
                404,
                "Appointment Not Found",
                "This appointment has already been confirmed.",
            )
        logger.info(f"✅ Appointment {updated['_id']} confirmed by customer")

        day = parse_iso_date(updated["date"])
        try:
            await send_admin_appointment_notification(
                updated, format_long_date(day), format_time_label(updated["time"])
            )
        except EmailDeliveryError as e:
            logger.error(f"❌ Admin notification for appointment {updated['_id']} failed: {e}")

        return updated

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def list_appointments(
        self,
        status: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
        page: int,
        limit: int,
    ) -> tuple[list[dict], dict]:
        query: dict = {}
        if status:
            if status not in {s.value for s in AppointmentStatus}:
                raise HTTPException(status_code=400, detail="Invalid status")
            query["status"] = status

        date_range = {}
        try:
            if start_date:
                date_range["$gte"] = parse_iso_date(start_date).isoformat()
            if end_date:
                date_range["$lte"] = parse_iso_date(end_date).isoformat()
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Invalid date format, expected YYYY-MM-DD") from e
        if date_range:
            query["date"] = date_range

        total = await self.repo.count(self.db, query)
        appointments = await self.repo.list_appointments(self.db, query, (page - 1) * limit, limit)
        pagination = {"total": total, "page": page, "limit": limit, "pages": ceil(total / limit)}
        return appointments, pagination

    async def update_appointment(self, data: AppointmentUpdate) -> dict:
        updates: dict = {}
        if data.status is not None:
            if data.status not in {s.value for s in AppointmentStatus}:
                raise HTTPException(status_code=400, detail="Invalid status")
            updates["status"] = data.status
        if data.notes is not None:
            updates["notes"] = data.notes.strip()

        appointment_id = parse_object_id(data.id)
        if appointment_id is None:
            raise HTTPException(status_code=404, detail="Appointment not found")

        if not updates:
            appointment = await self.repo.get_by_id(self.db, appointment_id)
        else:
            updates["updated_at"] = utc_now()
            appointment = await self.repo.update(self.db, appointment_id, updates)

        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")

        logger.info(f"📝 Appointment {appointment_id} updated: {', '.join(updates) or 'no changes'}")
        return appointment

    async def pending_count(self) -> int:
        return await self.repo.count(self.db, {"status": {"$in": PENDING_STATUSES}})
