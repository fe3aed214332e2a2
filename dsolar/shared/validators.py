"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_REGEX = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-\s./0-9]*$")


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Return an ObjectId for a valid hex id, None otherwise"""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Trimmed, lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not EMAIL_REGEX.match(email):
        raise ValueError("Invalid email format")
    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a phone number in local or international notation.
    Accepts forms like 0960-471-6968, +63 960 471 6968, (02) 8831-7330.
    """
    if not phone:
        return phone

    phone = phone.strip()
    digits = re.sub(r"\D", "", phone)
    if not PHONE_REGEX.match(phone) or len(digits) < 7:
        raise ValueError("Invalid phone number format")
    return phone


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError otherwise"""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()
