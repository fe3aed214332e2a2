import logging

from fastapi import Depends, HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from .config import SESSION_COOKIE_NAME
from .database import ADMINS, get_db
from .security_utils import read_session_token

logger = logging.getLogger(__name__)


async def get_current_admin(request: Request, db: AsyncIOMotorDatabase = Depends(get_db)) -> dict:
    """
    Resolve the admin behind the signed session cookie.
    Raises 401 when the cookie is missing, tampered with, expired, or names
    an admin that no longer exists.
    """
    username = read_session_token(request.cookies.get(SESSION_COOKIE_NAME))
    if not username:
        logger.warning(f"🚫 Unauthenticated admin request: {request.method} {request.url.path}")
        raise HTTPException(status_code=401, detail="Not authenticated")

    admin = await db[ADMINS].find_one({"username": username})
    if not admin:
        logger.warning(f"🚫 Session references unknown admin '{username}'")
        raise HTTPException(status_code=401, detail="Not authenticated")

    return admin
