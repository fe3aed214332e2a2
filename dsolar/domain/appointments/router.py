"""Appointment router - public booking endpoints and the admin appointment console"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...auth import get_current_admin
from ...database import get_db
from ...page_templates import confirmation_error_page, confirmation_success_page
from ...rate_limiter import create_rate_limiter, get_client_ip
from ...shared.dates import format_long_date, format_time_label
from ...shared.validators import parse_iso_date
from ...turnstile import verify_turnstile
from .schemas import (
    AppointmentCreate,
    AppointmentCreated,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
    AvailableDate,
    DaySlotsResponse,
    PendingCountResponse,
    TimeSlot,
)
from .service import AppointmentService, ConfirmationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointment", tags=["Appointments"])
admin_router = APIRouter(prefix="/api/admin/appointments", tags=["Admin Appointments"])

rate_limit_bookings = create_rate_limiter(limit=10, window_seconds=3600, key_prefix="booking")


def get_appointment_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def to_response(doc: dict) -> AppointmentResponse:
    return AppointmentResponse(
        id=str(doc["_id"]),
        name=doc["name"],
        email=doc["email"],
        phone=doc["phone"],
        date=doc["date"],
        time=doc["time"],
        message=doc.get("message"),
        status=doc["status"],
        notes=doc.get("notes"),
        createdAt=doc.get("created_at"),
        updatedAt=doc.get("updated_at"),
    )


def _parse_date_param(value: str):
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid date format, expected YYYY-MM-DD") from e


# ============================================================================
# PUBLIC BOOKING
# ============================================================================


@router.post("", response_model=AppointmentCreated, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    request: Request,
    service: AppointmentService = Depends(get_appointment_service),
    _: None = Depends(rate_limit_bookings),
):
    """Book a consultation slot; the customer must confirm it from their inbox"""
    if not await verify_turnstile(data.captchaToken, get_client_ip(request)):
        raise HTTPException(status_code=400, detail="CAPTCHA verification failed")

    appointment_id = await service.create_appointment(data)
    return AppointmentCreated(
        message="Appointment created. Please check your email to confirm.",
        appointmentId=appointment_id,
    )


@router.get("", response_model=DaySlotsResponse)
async def get_day_slots(
    date: str = Query(..., description="YYYY-MM-DD"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Availability of every slot on one day"""
    day = _parse_date_param(date)
    slots = await service.get_day_slots(day)
    return DaySlotsResponse(date=day.isoformat(), slots=slots)


@router.get("/available-slots", response_model=list[AvailableDate] | list[TimeSlot])
async def get_available_slots(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Bookable dates for the next two weeks, or the time slots of one date"""
    if not date:
        return await service.get_available_dates()
    return await service.get_time_slots(_parse_date_param(date))


@router.get("/confirm", response_class=HTMLResponse)
async def confirm_appointment(
    token: Optional[str] = Query(None),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Landing page for the emailed confirmation link"""
    try:
        appointment = await service.confirm_appointment(token)
    except ConfirmationError as e:
        logger.warning(f"⚠️ Appointment confirmation rejected ({e.status_code}): {e.message}")
        return HTMLResponse(
            confirmation_error_page(e.title, e.message, e.reasons), status_code=e.status_code
        )
    except Exception as e:
        logger.error(f"❌ Appointment confirmation failed: {e}")
        return HTMLResponse(
            confirmation_error_page(
                "Something Went Wrong",
                "We could not confirm your appointment right now. Please try again later.",
            ),
            status_code=500,
        )

    day = parse_iso_date(appointment["date"])
    return HTMLResponse(
        confirmation_success_page(
            appointment["name"], format_long_date(day), format_time_label(appointment["time"])
        )
    )


# ============================================================================
# ADMIN
# ============================================================================


@admin_router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    status: Optional[str] = Query(None),
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    _admin: dict = Depends(get_current_admin),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointments, pagination = await service.list_appointments(status, startDate, endDate, page, limit)
    return AppointmentListResponse(
        appointments=[to_response(doc) for doc in appointments], pagination=pagination
    )


@admin_router.patch("", response_model=AppointmentResponse)
async def update_appointment(
    data: AppointmentUpdate,
    _admin: dict = Depends(get_current_admin),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Change an appointment's status and/or internal notes"""
    return to_response(await service.update_appointment(data))


@admin_router.get("/pending-count", response_model=PendingCountResponse)
async def pending_count(
    _admin: dict = Depends(get_current_admin),
    service: AppointmentService = Depends(get_appointment_service),
):
    return PendingCountResponse(count=await service.pending_count())
