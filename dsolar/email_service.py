"""
Email Service using an SMTP relay (when configured) with Resend as fallback
Templates are MJML, compiled to HTML before sending
"""

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Union

import resend
from fastapi.concurrency import run_in_threadpool
from mjml import mjml_to_html

from . import config
from .shared.dates import utc_now
from .email_templates import (
    admin_appointment_notification_template,
    appointment_confirmation_template,
    quote_request_template,
)

logger = logging.getLogger(__name__)

resend.api_key = config.RESEND_API_KEY


class EmailDeliveryError(Exception):
    """Raised when no configured transport could deliver a message"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e

    # mjml_to_html returns a dict-like result with 'html' and 'errors'
    errors = result.get("errors") if hasattr(result, "get") else None
    if errors:
        logger.warning(f"MJML compilation warnings: {errors}")
    return result.get("html", "") if hasattr(result, "get") else str(result)


def send_via_smtp(
    to: list[str],
    subject: str,
    html_content: str,
    from_address: str,
    reply_to: Optional[str] = None,
) -> dict:
    """Send email through the configured SMTP relay"""
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = from_address
    msg["To"] = ", ".join(to)
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.attach(MIMEText(html_content, "html"))

    try:
        if config.SMTP_PORT == 465:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT, context=context, timeout=30)
        else:
            server = smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=30)
            if config.SMTP_USE_TLS:
                server.starttls(context=ssl.create_default_context())

        with server:
            if config.SMTP_USERNAME:
                server.login(config.SMTP_USERNAME, config.SMTP_PASSWORD or "")
            server.sendmail(from_address.split("<")[-1].rstrip(">"), to, msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"❌ SMTP send failed via {config.SMTP_HOST}: {e}")
        raise EmailDeliveryError(f"SMTP failed: {str(e)}") from e

    logger.info(f"✅ SMTP email sent via {config.SMTP_HOST}")
    return {"id": f"smtp-{utc_now().timestamp()}", "success": True}


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> dict:
    """
    Send an email using the SMTP relay (if configured) or Resend (fallback)

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address
        reply_to: Optional Reply-To address

    Returns:
        Send response dict
    """
    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to
    sender = from_address or config.EMAIL_FROM_ADDRESS

    if config.SMTP_HOST:
        try:
            logger.info(f"📧 Sending email via SMTP relay: {config.SMTP_HOST}")
            return await run_in_threadpool(
                send_via_smtp, recipients, subject, html_content, sender, reply_to
            )
        except EmailDeliveryError as e:
            logger.warning(f"⚠️ SMTP relay failed, falling back to Resend: {e}")

    if not config.RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing and no SMTP relay")
        raise EmailDeliveryError("Email service not configured")

    email_data = {
        "from": sender,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if reply_to:
        email_data["reply_to"] = reply_to

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = await run_in_threadpool(resend.Emails.send, email_data)
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e

    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


# ============================================
# Site emails
# ============================================


async def send_appointment_confirmation_email(
    to: str, customer_name: str, date_label: str, time_label: str, token: str
) -> dict:
    """Send the customer the link that moves their booking to pending_admin"""
    confirm_url = f"{config.API_URL}/api/appointment/confirm?token={token}"
    mjml_content = appointment_confirmation_template(
        customer_name, date_label, time_label, confirm_url, config.CONFIRMATION_TOKEN_TTL_HOURS
    )
    return await send_email(
        to=to,
        subject=f"Please confirm your {config.COMPANY_NAME} consultation",
        mjml_content=mjml_content,
    )


async def send_admin_appointment_notification(appointment: dict, date_label: str, time_label: str) -> dict:
    """Notify the admin inbox that a customer confirmed a booking"""
    mjml_content = admin_appointment_notification_template(
        customer_name=appointment["name"],
        customer_email=appointment["email"],
        customer_phone=appointment["phone"],
        date_label=date_label,
        time_label=time_label,
        message=appointment.get("message"),
        admin_url=f"{config.SITE_URL}/admin/appointments",
    )
    return await send_email(
        to=config.ADMIN_NOTIFICATION_EMAIL,
        subject=f"New appointment confirmed: {appointment['name']} on {date_label}",
        mjml_content=mjml_content,
        reply_to=appointment["email"],
    )


async def send_quote_request_emails(
    customer_email: str,
    customer_name: str,
    details: list[tuple[str, Optional[str]]],
    estimate: Optional[dict] = None,
) -> None:
    """Send the company copy first, then the summary to the customer"""
    await send_email(
        to=config.COMPANY_EMAIL,
        subject=f"[Company Copy] Quote request from {customer_name}",
        mjml_content=quote_request_template(customer_name, details, estimate, is_company_copy=True),
        reply_to=customer_email,
    )
    await send_email(
        to=customer_email,
        subject=f"Your {config.COMPANY_NAME} solar quote request",
        mjml_content=quote_request_template(customer_name, details, estimate),
    )
