"""
Middleware components for request processing.

This package contains middleware for:
- Request context (request ID, log correlation)
"""

from contactbook.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
