"""Unauthorized-request handlers and the name-based handler factory."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from request_authz.exceptions import AuthzError, HandlerNotFound, InvalidHandler

__all__ = [
    "ExceptionHandler",
    "SuppressHandler",
    "UnauthorizedHandler",
    "create_handler",
    "register_handler",
]

logger = logging.getLogger("request_authz")


@runtime_checkable
class UnauthorizedHandler(Protocol):
    """Decides what happens when a request fails authorization."""

    def handle(self, exc: AuthzError, request: Any) -> Any: ...


class ExceptionHandler:
    """Re-raise the authorization error. The default."""

    def handle(self, exc: AuthzError, request: Any) -> Any:
        raise exc


class SuppressHandler:
    """Log the error and return ``default`` instead of raising."""

    def __init__(self, default: Any = None) -> None:
        self.default = default

    def handle(self, exc: AuthzError, request: Any) -> Any:
        logger.warning("Unauthorized request suppressed: %s", exc)
        return self.default


_HANDLERS: dict[str, type] = {
    "Exception": ExceptionHandler,
    "Suppress": SuppressHandler,
}


def register_handler(name: str, handler_cls: type) -> None:
    """Register *handler_cls* under *name* for ``create_handler``.

    Example::

        register_handler("Redirect", RedirectHandler)
        middleware = AuthorizationMiddleware(resolver, unauthorized_handler="Redirect")
    """
    _HANDLERS[name] = handler_cls


def create_handler(name: str, **options: Any) -> UnauthorizedHandler:
    """Instantiate the handler registered under *name*.

    Raises:
        HandlerNotFound: Nothing is registered under *name*.
        InvalidHandler: The instance does not implement ``handle``.
    """
    handler_cls = _HANDLERS.get(name)
    if handler_cls is None:
        raise HandlerNotFound(name=name)

    instance = handler_cls(**options)
    if not isinstance(instance, UnauthorizedHandler):
        raise InvalidHandler(name=name, actual_type=type(instance).__name__)
    return instance
