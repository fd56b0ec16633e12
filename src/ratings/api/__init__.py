"""Ratings domain API package."""

from ratings.api.errors import register_error_handlers
from ratings.api.routes import admin_router, provider_router, review_router

__all__ = ["review_router", "provider_router", "admin_router", "register_error_handlers"]
