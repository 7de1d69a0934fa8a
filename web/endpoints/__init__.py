"""
Endpoint handlers for the web app.
"""
from .auth import router as auth_router
from .health import router as health_router
from .page import router as page_router

__all__ = [
    'auth_router',
    'health_router',
    'page_router',
]
