"""
API routes package.
"""

from .analytics import router as analytics_router
from .customers import router as customers_router
from .health import router as health_router
from .jobs import router as jobs_router

__all__ = [
    "analytics_router",
    "customers_router",
    "health_router",
    "jobs_router",
]
