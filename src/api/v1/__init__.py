"""
API v1 package.

Contains versioned administrative routes for customer records.
"""

from src.api.v1.routes import router

__all__ = ["router"]
