"""request-authz — per-request authorization checks for controller actions.

Resolves the action being performed, asks the request's identity whether it
may perform it on a resource, and makes sure every request is either
authorized, scoped or explicitly skipped.

Example::

    from request_authz import AuthorizationComponent, ComponentConfig, policy

    @policy(Article, "edit")
    def article_edit(actor: User, article: Article) -> bool:
        return article.owner_id == actor.id

    authz = AuthorizationComponent(controller, ComponentConfig(action_map={"update": "edit"}))
    authz.authorize(article)  # raises AuthorizationDenied if not the owner
"""

from importlib.metadata import PackageNotFoundError, version

from request_authz._types import (
    ALL,
    AuthorizationServiceLike,
    IdentityLike,
    RequestLike,
)
from request_authz.component import AuthorizationComponent, check_action, resolve_action
from request_authz.config._config import ComponentConfig, PolicyConfig, configure
from request_authz.exceptions import (
    AuthorizationDenied,
    AuthorizationRequiredError,
    AuthzError,
    InvalidConfiguration,
    MissingIdentity,
    NoPolicyError,
)
from request_authz.identity import Identity
from request_authz.lifecycle import Controller, EventDispatcher
from request_authz.middleware import AuthorizationMiddleware
from request_authz.policy import PolicyRegistry, PolicyResolver, policy, scope
from request_authz.request import RequestContext
from request_authz.service import AuthorizationService, AuthorizationState

try:
    __version__ = version("request-authz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "ALL",
    "AuthorizationComponent",
    "AuthorizationDenied",
    "AuthorizationMiddleware",
    "AuthorizationRequiredError",
    "AuthorizationService",
    "AuthorizationServiceLike",
    "AuthorizationState",
    "AuthzError",
    "ComponentConfig",
    "Controller",
    "EventDispatcher",
    "Identity",
    "IdentityLike",
    "InvalidConfiguration",
    "MissingIdentity",
    "NoPolicyError",
    "PolicyConfig",
    "PolicyRegistry",
    "PolicyResolver",
    "RequestContext",
    "RequestLike",
    "check_action",
    "configure",
    "policy",
    "resolve_action",
    "scope",
]
