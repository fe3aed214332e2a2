"""
MJML Email Templates
Every email the site sends, written in MJML for responsive, cross-client rendering.
Callers pass raw user input; values are escaped here before interpolation.
"""

from typing import Optional

from .config import COMPANY_ADDRESS, COMPANY_EMAIL, COMPANY_NAME, COMPANY_PHONE, SITE_URL
from .utils.sanitization import sanitize_string

# Brand colors - solar orange on slate
THEME = {
    "primary": "#f97316",
    "primary_dark": "#ea580c",
    "primary_light": "#ffedd5",
    "background": "#f8fafc",
    "card_bg": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "success": "#16a34a",
    "warning": "#f59e0b",
    "danger": "#ef4444",
}

LOGO_URL = f"{SITE_URL}/dsolar-logo.png"


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 20px">
          <mj-column>
            <mj-image src="{LOGO_URL}" alt="{COMPANY_NAME}" width="140px" href="{SITE_URL}" padding="0" />
          </mj-column>
        </mj-section>

        <mj-section background-color="#ffffff" padding="0 40px 48px 40px">
          <mj-column>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 32px 0" />
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              {COMPANY_NAME} Philippines &bull; {COMPANY_ADDRESS}<br/>
              {COMPANY_PHONE} &bull; {COMPANY_EMAIL}
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def _detail_rows(rows: list[tuple[str, Optional[str]]]) -> str:
    """Label/value lines for a details block; empty values are skipped"""
    lines = [
        f"<strong>{sanitize_string(str(label))}:</strong> {sanitize_string(str(value))}"
        for label, value in rows
        if value not in (None, "")
    ]
    return "<br/>".join(lines)


def appointment_confirmation_template(
    customer_name: str, date_label: str, time_label: str, confirm_url: str, expires_hours: int
) -> str:
    """Ask the customer to confirm the consultation they just booked"""
    content = f"""
    <mj-text>
      Hi {sanitize_string(customer_name)},
    </mj-text>

    <mj-text>
      Thank you for booking a free solar consultation with {COMPANY_NAME}. Please confirm your
      appointment using the button below so our team can schedule it.
    </mj-text>

    <mj-text background-color="{THEME['primary_light']}" padding="16px 20px" font-size="15px" color="{THEME['text_primary']}">
      <strong>Date:</strong> {date_label}<br/>
      <strong>Time:</strong> {time_label}
    </mj-text>

    <mj-text font-size="14px" color="{THEME['text_muted']}">
      This link expires in {expires_hours} hours. If you did not request this appointment you can ignore this email.
    </mj-text>
    """

    return get_base_template(
        title="Confirm Your Appointment",
        preview_text=f"Please confirm your consultation on {date_label}",
        content_sections=content,
        cta_url=confirm_url,
        cta_label="Confirm Appointment",
    )


def admin_appointment_notification_template(
    customer_name: str,
    customer_email: str,
    customer_phone: str,
    date_label: str,
    time_label: str,
    message: Optional[str],
    admin_url: str,
) -> str:
    """Tell the admin a customer confirmed their booking"""
    details = _detail_rows(
        [
            ("Name", customer_name),
            ("Email", customer_email),
            ("Phone", customer_phone),
            ("Message", message),
        ]
    )

    content = f"""
    <mj-text>
      A customer has confirmed their consultation request. It is waiting for your approval.
    </mj-text>

    <mj-text background-color="{THEME['primary_light']}" padding="16px 20px" font-size="15px" color="{THEME['text_primary']}">
      <strong>Date:</strong> {date_label}<br/>
      <strong>Time:</strong> {time_label}
    </mj-text>

    <mj-text font-size="15px">
      {details}
    </mj-text>
    """

    return get_base_template(
        title="New Appointment Awaiting Approval",
        preview_text=f"{sanitize_string(customer_name)} confirmed an appointment for {date_label}",
        content_sections=content,
        cta_url=admin_url,
        cta_label="Open Admin Dashboard",
    )


def quote_request_template(
    customer_name: str,
    details: list[tuple[str, Optional[str]]],
    estimate: Optional[dict] = None,
    is_company_copy: bool = False,
) -> str:
    """Quote request summary, sent to the customer and copied to the company"""
    if is_company_copy:
        intro = f"A new quote request was submitted by {sanitize_string(customer_name)}."
    else:
        intro = (
            f"Hi {sanitize_string(customer_name)}, thank you for your interest in going solar. "
            f"Our team will review your details and reach out with a customized proposal."
        )

    estimate_section = ""
    if estimate:
        estimate_rows = _detail_rows([(label, value) for label, value in estimate.items()])
        estimate_section = f"""
        <mj-text font-size="18px" font-weight="600" color="{THEME['text_primary']}" padding="24px 0 8px 0">
          Your Savings Estimate
        </mj-text>
        <mj-text background-color="{THEME['primary_light']}" padding="16px 20px" font-size="15px">
          {estimate_rows}
        </mj-text>
        <mj-text font-size="12px" color="{THEME['text_muted']}">
          Estimates only. Actual savings depend on weather, usage and system performance.
        </mj-text>
        """

    content = f"""
    <mj-text>
      {intro}
    </mj-text>

    <mj-text font-size="15px">
      {_detail_rows(details)}
    </mj-text>

    {estimate_section}
    """

    title = "New Quote Request" if is_company_copy else "We Received Your Quote Request"
    return get_base_template(
        title=title,
        preview_text=title,
        content_sections=content,
        cta_url=None if is_company_copy else SITE_URL,
        cta_label=None if is_company_copy else f"Visit {COMPANY_NAME}",
    )
