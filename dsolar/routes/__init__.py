from .admin_auth import router as admin_auth_router
from .quotes import router as quotes_router
from .seo import router as seo_router
from .weather import router as weather_router

__all__ = ["admin_auth_router", "quotes_router", "seo_router", "weather_router"]
