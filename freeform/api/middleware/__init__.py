"""API middleware for the layout service."""

from freeform.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
