# Storefront Routes

from .pages import router as pages_router
from .browse import router as browse_router
from .leads import router as leads_router

__all__ = ["pages_router", "browse_router", "leads_router"]
