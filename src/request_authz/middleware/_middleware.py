"""AuthorizationMiddleware — per-request service setup and the unchecked-request assertion."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from request_authz._audit import log_unchecked_request
from request_authz._types import ACTION_PARAM, IdentityLike
from request_authz.exceptions import (
    AuthorizationDenied,
    AuthorizationRequiredError,
    MissingIdentity,
)
from request_authz.identity import Identity
from request_authz.middleware._handlers import UnauthorizedHandler, create_handler
from request_authz.policy._resolver import PolicyResolver
from request_authz.request import RequestContext
from request_authz.service import AuthorizationService

__all__ = ["AuthorizationMiddleware"]

RequestHandler = Callable[[RequestContext], Any]


class AuthorizationMiddleware:
    """Wrap a request handler with authorization bookkeeping.

    For every request a fresh ``AuthorizationService`` is stored under
    ``service_attribute``; a raw actor found under ``identity_attribute``
    is wrapped in an ``Identity`` bound to that service, and an ``Identity``
    left over from another service is re-bound to it. Other ``IdentityLike``
    objects are kept as given and must report to the request's service
    themselves. After the handler
    returns, the request must have been authorized, scoped or explicitly
    skipped, otherwise ``AuthorizationRequiredError`` is raised.

    Denials and missing identities raised by the handler are passed to the
    unauthorized handler (``"Exception"`` re-raises them).

    Args:
        resolver: Policy resolver for the per-request services.
        identity_attribute: Request attribute holding the actor.
        service_attribute: Request attribute to store the service under.
        require_authorization_check: Enforce the end-of-request assertion.
        unauthorized_handler: Handler name for ``create_handler`` or an
            ``UnauthorizedHandler`` instance.

    Example::

        middleware = AuthorizationMiddleware(PolicyResolver(registry))

        def handle(request: RequestContext):
            controller = ArticlesController(request)
            controller.add_component(AuthorizationComponent(controller))
            controller.startup()
            return controller.view(1)

        response = middleware(RequestContext.for_action("view", identity=user), handle)
    """

    def __init__(
        self,
        resolver: PolicyResolver | None = None,
        *,
        identity_attribute: str = "identity",
        service_attribute: str = "authorization",
        require_authorization_check: bool = True,
        unauthorized_handler: str | UnauthorizedHandler = "Exception",
    ) -> None:
        self.resolver = resolver if resolver is not None else PolicyResolver()
        self.identity_attribute = identity_attribute
        self.service_attribute = service_attribute
        self.require_authorization_check = require_authorization_check
        if isinstance(unauthorized_handler, str):
            unauthorized_handler = create_handler(unauthorized_handler)
        self.unauthorized_handler = unauthorized_handler

    def prepare(self, request: RequestContext) -> tuple[RequestContext, AuthorizationService]:
        """Attach a fresh service and bound identity to *request*."""
        service = AuthorizationService(self.resolver)
        request = request.with_attribute(self.service_attribute, service)

        actor = request.get_attribute(self.identity_attribute)
        if isinstance(actor, Identity):
            actor = actor.get_original_data()
        if actor is not None and not isinstance(actor, IdentityLike):
            request = request.with_attribute(self.identity_attribute, Identity(actor, service))
        return request, service

    def verify(self, request: RequestContext, service: AuthorizationService) -> None:
        """Raise ``AuthorizationRequiredError`` for an unchecked request."""
        if self.require_authorization_check and not service.authorization_checked():
            action = request.get_param(ACTION_PARAM)
            log_unchecked_request(action=action)
            raise AuthorizationRequiredError(action=action)

    def __call__(self, request: RequestContext, handler: RequestHandler) -> Any:
        request, service = self.prepare(request)
        try:
            response = handler(request)
        except (AuthorizationDenied, MissingIdentity) as exc:
            return self.unauthorized_handler.handle(exc, request)

        self.verify(request, service)
        return response
