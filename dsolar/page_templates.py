"""
Standalone HTML pages returned by the appointment confirmation link
"""

from typing import Optional

from .config import COMPANY_NAME, COMPANY_PHONE, SITE_URL
from .email_templates import THEME
from .utils.sanitization import sanitize_string


def _page(title: str, accent: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{title} | {COMPANY_NAME}</title>
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
           background: {THEME['background']}; color: {THEME['text_secondary']}; margin: 0; }}
    .card {{ max-width: 560px; margin: 64px auto; background: #fff; border-radius: 12px;
            border-top: 6px solid {accent}; padding: 40px; box-shadow: 0 4px 24px rgba(15,23,42,.08); }}
    h1 {{ color: {THEME['text_primary']}; font-size: 24px; margin-top: 0; }}
    a.button {{ display: inline-block; margin-top: 24px; padding: 12px 28px; border-radius: 8px;
               background: {THEME['primary']}; color: #fff; text-decoration: none; font-weight: 600; }}
    ul {{ padding-left: 20px; }}
  </style>
</head>
<body>
  <div class="card">
    <h1>{title}</h1>
    {body}
    <a class="button" href="{SITE_URL}">Back to {COMPANY_NAME}</a>
  </div>
</body>
</html>"""


def confirmation_success_page(customer_name: str, date_label: str, time_label: str) -> str:
    body = f"""
    <p>Thank you, {sanitize_string(customer_name)}! Your appointment request has been confirmed.</p>
    <p><strong>{date_label}</strong> at <strong>{time_label}</strong></p>
    <p>Our team will review the schedule and contact you shortly. For urgent concerns call {COMPANY_PHONE}.</p>
    """
    return _page("Appointment Confirmed", THEME["success"], body)


def confirmation_error_page(title: str, message: str, reasons: Optional[list[str]] = None) -> str:
    reasons_html = ""
    if reasons:
        items = "".join(f"<li>{sanitize_string(reason)}</li>" for reason in reasons)
        reasons_html = f"<p>This can happen when:</p><ul>{items}</ul>"

    body = f"""
    <p>{sanitize_string(message)}</p>
    {reasons_html}
    <p>Need help? Call us at {COMPANY_PHONE}.</p>
    """
    return _page(sanitize_string(title), THEME["danger"], body)
