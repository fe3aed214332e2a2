"""
Security utilities: admin password hashing, signed session tokens and random tokens
"""

import logging
import secrets
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import SECRET_KEY, SESSION_MAX_AGE

logger = logging.getLogger(__name__)

# bcrypt for new hashes. hex_sha256 only verifies accounts created before bcrypt was
# introduced and is marked deprecated so verify_and_update() rehashes them.
pwd_context = CryptContext(schemes=["bcrypt", "hex_sha256"], deprecated=["hex_sha256"])

session_serializer = URLSafeTimedSerializer(SECRET_KEY, salt="admin-session")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> tuple[bool, Optional[str]]:
    """
    Verify a password against a stored hash.

    Returns:
        (is_valid, new_hash) where new_hash is set when the stored hash
        uses a deprecated scheme and should be replaced.
    """
    if not hashed_password:
        return False, None
    try:
        return pwd_context.verify_and_update(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification error: {e}")
        return False, None


# ============================================================================
# SESSION TOKENS
# ============================================================================


def create_session_token(username: str) -> str:
    return session_serializer.dumps({"username": username})


def read_session_token(token: Optional[str], max_age: int = SESSION_MAX_AGE) -> Optional[str]:
    """Return the username stored in a session token, or None if invalid/expired"""
    if not token:
        return None
    try:
        data = session_serializer.loads(token, max_age=max_age)
    except SignatureExpired:
        logger.info("Admin session token expired")
        return None
    except BadSignature:
        logger.warning("⚠️ Admin session token has an invalid signature")
        return None
    username = data.get("username") if isinstance(data, dict) else None
    return username or None


# ============================================================================
# RANDOM TOKENS
# ============================================================================


def generate_secure_token(nbytes: int = 32) -> str:
    """Hex token, e.g. for appointment confirmation links"""
    return secrets.token_hex(nbytes)
