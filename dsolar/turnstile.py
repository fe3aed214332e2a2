"""
Cloudflare Turnstile CAPTCHA verification for the public booking and quote forms
"""

import hashlib
import logging
import os
from typing import Optional

import httpx

from . import rate_limiter

logger = logging.getLogger(__name__)

TURNSTILE_SECRET_KEY = os.getenv("TURNSTILE_SECRET_KEY")
TURNSTILE_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


async def verify_turnstile(token: Optional[str], ip: Optional[str] = None) -> bool:
    """
    Verify a Turnstile token, caching successes in Redis for five minutes

    Args:
        token: Turnstile token from client
        ip: Client IP address (optional)

    Returns:
        True if verification successful, False otherwise
    """
    if not TURNSTILE_SECRET_KEY:
        logger.debug("TURNSTILE_SECRET_KEY not configured - skipping CAPTCHA verification")
        return True

    if not token:
        logger.warning(f"❌ Turnstile token missing for IP: {ip}")
        return False

    cache_key = f"turnstile_verified:{hashlib.sha256(f'{token}:{ip}'.encode()).hexdigest()}"

    redis_client = None
    try:
        redis_client = rate_limiter.get_redis_client()
        if redis_client.get(cache_key):
            logger.info(f"✅ Turnstile verification cached for IP: {ip}")
            return True
    except Exception as redis_error:
        logger.warning(f"⚠️ Redis cache check failed: {redis_error}")

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                TURNSTILE_VERIFY_URL,
                json={"secret": TURNSTILE_SECRET_KEY, "response": token, "remoteip": ip},
                timeout=10.0,
            )
            result = response.json()
    except Exception as e:
        logger.error(f"❌ Turnstile verification error: {str(e)}")
        # Fail open - allow request if verification service is down
        return True

    success = bool(result.get("success", False))
    if success:
        logger.info(f"✅ Turnstile verification successful for IP: {ip}")
        if redis_client is not None:
            try:
                redis_client.setex(cache_key, 300, "verified")
            except Exception as redis_error:
                logger.warning(f"⚠️ Redis cache set failed: {redis_error}")
    else:
        logger.warning(
            f"❌ Turnstile verification failed for IP: {ip} - Errors: {result.get('error-codes', [])}"
        )
    return success
