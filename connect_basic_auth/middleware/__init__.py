"""
Basic Auth Middleware Package

Host adapters for the authentication filter.
"""

from .basic_auth import BasicAuthMiddleware, StarletteRequestContext

__all__ = [
    "BasicAuthMiddleware",
    "StarletteRequestContext",
]
