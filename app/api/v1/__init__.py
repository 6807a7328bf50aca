"""
API v1 Routes
"""

from .saved_searches import router as saved_searches_router

__all__ = ["saved_searches_router"]
