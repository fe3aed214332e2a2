"""FAQs domain"""

from .router import admin_router

__all__ = ["admin_router"]
