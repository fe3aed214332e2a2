"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AppointmentStatus(str, Enum):
    PENDING_CUSTOMER = "pending_customer"
    PENDING_ADMIN = "pending_admin"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    ARCHIVED = "archived"
    COMPLETED = "completed"


class AppointmentCreate(BaseModel):
    """Public booking form. Fields are checked in the service so gaps answer 400, not 422."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    message: Optional[str] = None
    captchaToken: Optional[str] = None


class AppointmentUpdate(BaseModel):
    id: str
    status: Optional[str] = None
    notes: Optional[str] = None


class AppointmentCreated(BaseModel):
    success: bool = True
    message: str
    appointmentId: str


class AppointmentResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    date: str
    time: str
    message: Optional[str] = None
    status: AppointmentStatus
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse]
    pagination: Pagination


class SlotAvailability(BaseModel):
    time: str
    available: bool


class DaySlotsResponse(BaseModel):
    date: str
    slots: list[SlotAvailability]


class AvailableDate(BaseModel):
    date: str
    formatted: str
    available: bool


class TimeSlot(BaseModel):
    time: str
    label: str
    available: bool


class PendingCountResponse(BaseModel):
    count: int
