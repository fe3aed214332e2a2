import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from .. import config
from ..database import ADMINS, get_db
from ..rate_limiter import create_rate_limiter
from ..security_utils import create_session_token, hash_password, read_session_token, verify_password
from ..shared.dates import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin Auth"])

rate_limit_login = create_rate_limiter(limit=10, window_seconds=900, key_prefix="admin_login")

INITIAL_ADMIN_USERNAME = "admin"
INITIAL_ADMIN_EMAIL = "admin@dsolar.com"


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool
    username: str


class CheckAuthResponse(BaseModel):
    isAuthenticated: bool
    username: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def set_session_cookie(response: Response, username: str) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=create_session_token(username),
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=config.SESSION_MAX_AGE,
        path="/",
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncIOMotorDatabase = Depends(get_db),
    _: None = Depends(rate_limit_login),
):
    """Check credentials and start a cookie session"""
    username = (data.username or "").strip()
    if not username or not data.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    admin = await db[ADMINS].find_one({"username": username})
    valid, new_hash = verify_password(data.password, admin["password"]) if admin else (False, None)
    if not valid:
        logger.warning(f"🚫 Failed admin login for '{username}'")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    updates = {"last_login": utc_now()}
    if new_hash:
        updates["password"] = new_hash
        logger.info(f"🔐 Upgraded password hash for admin '{username}'")
    await db[ADMINS].update_one({"_id": admin["_id"]}, {"$set": updates})

    set_session_cookie(response, username)
    logger.info(f"✅ Admin '{username}' logged in")
    return LoginResponse(success=True, username=username)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(config.SESSION_COOKIE_NAME, path="/")
    return MessageResponse(message="Logged out successfully")


@router.get("/check-auth", response_model=CheckAuthResponse)
async def check_auth(request: Request, db: AsyncIOMotorDatabase = Depends(get_db)):
    username = read_session_token(request.cookies.get(config.SESSION_COOKIE_NAME))
    if username and await db[ADMINS].find_one({"username": username}):
        return CheckAuthResponse(isAuthenticated=True, username=username)
    return CheckAuthResponse(isAuthenticated=False)


@router.post("/init", response_model=MessageResponse, status_code=201)
async def init_admin(db: AsyncIOMotorDatabase = Depends(get_db), _: None = Depends(rate_limit_login)):
    """Create the first admin account from ADMIN_INITIAL_PASSWORD"""
    if not config.ADMIN_INITIAL_PASSWORD:
        raise HTTPException(status_code=503, detail="Admin initialization is not configured")

    if await db[ADMINS].find_one({}):
        raise HTTPException(status_code=409, detail="Admin already exists")

    try:
        await db[ADMINS].insert_one(
            {
                "username": INITIAL_ADMIN_USERNAME,
                "email": INITIAL_ADMIN_EMAIL,
                "password": hash_password(config.ADMIN_INITIAL_PASSWORD),
                "created_at": utc_now(),
            }
        )
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail="Admin already exists") from e

    logger.info(f"✅ Initial admin '{INITIAL_ADMIN_USERNAME}' created")
    return MessageResponse(message="Admin user created successfully")
