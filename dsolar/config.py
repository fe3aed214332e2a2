import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

# MongoDB
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB = os.getenv("MONGODB_DB", "dsolar")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Admin session cookie
SESSION_COOKIE_NAME = "admin_session"
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 24 * 7)))
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "true").lower() == "true"

# Password for the first admin created via /api/admin/init (unset disables the endpoint)
ADMIN_INITIAL_PASSWORD = os.getenv("ADMIN_INITIAL_PASSWORD")

# Public site base URL, used for confirmation links and the sitemap
SITE_URL = os.getenv("SITE_URL", "http://localhost:3000").rstrip("/")
# Where this API is reachable from the browser (the confirmation link points here)
API_URL = os.getenv("API_URL", SITE_URL).rstrip("/")

# Business calendar
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Manila")
CONFIRMATION_TOKEN_TTL_HOURS = int(os.getenv("CONFIRMATION_TOKEN_TTL_HOURS", "24"))

# Company contact details
COMPANY_NAME = os.getenv("COMPANY_NAME", "D-Solar")
COMPANY_PHONE = os.getenv("COMPANY_PHONE", "+63960-471-6968")
COMPANY_ADDRESS = os.getenv(
    "COMPANY_ADDRESS", "No.30-C Westbend Arcade, Dona Soledad Avenue, Paranaque City"
)
COMPANY_EMAIL = os.getenv("COMPANY_EMAIL", "info@d-tec.asia")
ADMIN_NOTIFICATION_EMAIL = os.getenv("ADMIN_NOTIFICATION_EMAIL", "dsolarph@gmail.com")

# Resend Email Configuration (fallback)
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "D-Solar <noreply@d-tec.asia>")

# SMTP relay (preferred when SMTP_HOST is set)
SMTP_HOST = os.getenv("SMTP_HOST")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

# Windy point forecast
WINDY_API_KEY = os.getenv("WINDY_API_KEY")
WINDY_API_URL = os.getenv("WINDY_API_URL", "https://api.windy.com/api/point-forecast/v2")

# Chatbot LLM (any OpenAI-compatible endpoint, e.g. Groq)
LLM_API_KEY = os.getenv("LLM_API_KEY")
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
