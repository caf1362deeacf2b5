"""
Web package.

Server-rendered registration pages and the email availability check.
"""

from src.api.web.routes import router

__all__ = ["router"]
