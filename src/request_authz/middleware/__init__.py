"""Middleware — request-scoped authorization setup and unauthorized handlers."""

from __future__ import annotations

from request_authz.middleware._handlers import (
    ExceptionHandler,
    SuppressHandler,
    UnauthorizedHandler,
    create_handler,
    register_handler,
)
from request_authz.middleware._middleware import AuthorizationMiddleware

__all__ = [
    "AuthorizationMiddleware",
    "ExceptionHandler",
    "SuppressHandler",
    "UnauthorizedHandler",
    "create_handler",
    "register_handler",
]
