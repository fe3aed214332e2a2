import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from .config import COMPANY_NAME
from .csrf import CSRF_COOKIE_NAME, CSRFMiddleware, generate_csrf_token, set_csrf_cookie
from .database import close_client, ensure_indexes, get_database, get_db
from .domain.appointments import admin_router as admin_appointments_router
from .domain.appointments import router as appointments_router
from .domain.blogs import admin_router as admin_blogs_router
from .domain.blogs import router as blogs_router
from .domain.calculator import admin_router as admin_calculator_router
from .domain.calculator import router as calculator_router
from .domain.chat import router as chat_router
from .domain.faqs import admin_router as admin_faqs_router
from .domain.packages import admin_router as admin_packages_router
from .domain.packages import router as packages_router
from .routes import admin_auth_router, quotes_router, seo_router, weather_router
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# CSRF is ENABLED by default; set CSRF_ENABLED=false only for development/testing
CSRF_ENABLED = os.getenv("CSRF_ENABLED", "true").lower() == "true"
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")

    try:
        await ensure_indexes(get_database())
    except Exception as e:
        logger.error(f"❌ Failed to ensure MongoDB indexes: {e}")

    try:
        from .rate_limiter import get_redis_client

        get_redis_client()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"⚠️ Redis connection failed - rate limiting and caching are degraded: {e}")

    yield

    logger.info("Application shutting down...")
    await close_client()


app = FastAPI(title=f"{COMPANY_NAME} Site API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

if CSRF_ENABLED:
    app.add_middleware(CSRFMiddleware)
    logger.info("CSRF protection enabled")
else:
    logger.info("CSRF protection disabled")

# Admin cookies need explicit origins
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "https://dsolar.com.ph,https://www.dsolar.com.ph,http://localhost:3000",
).split(",")
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Public routes
app.include_router(appointments_router)
app.include_router(blogs_router)
app.include_router(packages_router)
app.include_router(calculator_router)
app.include_router(chat_router)
app.include_router(weather_router)
app.include_router(quotes_router)
app.include_router(seo_router)

# Admin routes
app.include_router(admin_auth_router)
app.include_router(admin_appointments_router)
app.include_router(admin_blogs_router)
app.include_router(admin_packages_router)
app.include_router(admin_faqs_router)
app.include_router(admin_calculator_router)


@app.get("/")
def root():
    return {"message": f"{COMPANY_NAME} API is running"}


@app.get("/health")
async def health(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await db.command("ping")
        database = "connected"
    except Exception as e:
        logger.error(f"❌ Database health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "unreachable"})
    return {"status": "healthy", "database": database}


@app.get("/health/redis")
async def redis_health_check():
    """Check Redis connectivity for monitoring"""
    try:
        from .rate_limiter import get_redis_client

        redis_client = get_redis_client()

        start_time = time.time()
        redis_client.ping()
        response_time = (time.time() - start_time) * 1000

        info = redis_client.info()
        return {
            "status": "healthy",
            "redis": {
                "connected": True,
                "response_time_ms": round(response_time, 2),
                "version": info.get("redis_version", "unknown"),
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "connected_clients": info.get("connected_clients", 0),
            },
        }
    except Exception as e:
        return {"status": "unhealthy", "redis": {"connected": False, "error": str(e)}}


@app.get("/csrf-token")
async def get_csrf_token(request: Request, response: Response):
    """
    Get a CSRF token for the admin frontend.
    The token is also set as a cookie; send it back in the X-CSRF-Token header.
    """
    existing_token = request.cookies.get(CSRF_COOKIE_NAME)
    if existing_token:
        return {"csrf_token": existing_token}

    new_token = generate_csrf_token()
    set_csrf_cookie(response, new_token)
    return {"csrf_token": new_token}
