import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ..email_service import EmailDeliveryError, send_quote_request_emails
from ..rate_limiter import create_rate_limiter, get_client_ip
from ..shared.validators import validate_email, validate_phone
from ..turnstile import verify_turnstile
from ..utils.sanitization import clean_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Quote Request"])

rate_limit_quotes = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="quote")

MAX_ESTIMATE_ROWS = 20


class QuoteRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    monthlyBill: Optional[float] = None
    message: Optional[str] = None
    estimate: Optional[dict[str, Any]] = None
    captchaToken: Optional[str] = None


@router.post("/quote-request")
async def request_quote(data: QuoteRequest, request: Request, _: None = Depends(rate_limit_quotes)):
    """Email a quote summary to the customer and copy the company inbox"""
    if not await verify_turnstile(data.captchaToken, get_client_ip(request)):
        raise HTTPException(status_code=400, detail="CAPTCHA verification failed")

    name = (data.name or "").strip()
    if not name or not (data.email or "").strip():
        raise HTTPException(status_code=400, detail="Name and email are required")
    try:
        email = validate_email(data.email)
        validate_phone(data.phone)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if data.monthlyBill is not None and data.monthlyBill < 0:
        raise HTTPException(status_code=400, detail="Monthly bill cannot be negative")

    try:
        details = [
            ("Name", clean_text(name, 200)),
            ("Email", email),
            ("Phone", clean_text(data.phone, 50) if data.phone else None),
            ("Address", clean_text(data.address, 500) if data.address else None),
            ("Monthly Bill", f"₱{data.monthlyBill:,.2f}" if data.monthlyBill is not None else None),
            ("Message", clean_text(data.message, 2000) if data.message else None),
        ]
        estimate = None
        if data.estimate:
            estimate = {
                clean_text(str(label), 100): clean_text(str(value), 200)
                for label, value in list(data.estimate.items())[:MAX_ESTIMATE_ROWS]
            }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        await send_quote_request_emails(email, name, details, estimate)
    except EmailDeliveryError as e:
        logger.error(f"❌ Quote request email failed for {email}: {e}")
        raise HTTPException(status_code=502, detail="Failed to send email. Please try again later.") from e

    logger.info(f"📧 Quote request sent for {email}")
    return {"success": True}
