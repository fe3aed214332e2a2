"""Date helpers shared by scheduling, blog and SEO code"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from ..config import BUSINESS_TIMEZONE

BUSINESS_TZ = ZoneInfo(BUSINESS_TIMEZONE)


def utc_now() -> datetime:
    """Naive UTC timestamp, the form MongoDB hands back"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def business_now() -> datetime:
    return datetime.now(BUSINESS_TZ)


def business_today() -> date:
    return business_now().date()


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def format_long_date(day: date) -> str:
    """Monday, January 1, 2024"""
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}, {day.year}"


def format_time_label(hhmm: str) -> str:
    """09:00 -> 09:00 AM"""
    return datetime.strptime(hhmm, "%H:%M").strftime("%I:%M %p")

