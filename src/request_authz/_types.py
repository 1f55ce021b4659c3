"""Shared protocols and type aliases for request-authz."""

from __future__ import annotations

from typing import Any, Literal, Protocol, runtime_checkable

__all__ = [
    "ACTION_PARAM",
    "ALL",
    "AuthorizationServiceLike",
    "ControllerLike",
    "IdentityLike",
    "OnMissingPolicy",
    "RequestLike",
]

# Wildcard key in per-action configuration maps.
ALL = "*"

# Routed parameter holding the controller action name.
ACTION_PARAM = "action"

# Valid values for PolicyConfig.on_missing_policy.
OnMissingPolicy = Literal["deny", "raise"]


@runtime_checkable
class IdentityLike(Protocol):
    """Structural type for the identity attached to a request.

    Any object exposing ``can`` and ``apply_scope`` satisfies this
    protocol — no inheritance required.

    Example::

        class StaticIdentity:
            def can(self, action, resource):
                return action == "view"

            def apply_scope(self, action, resource):
                return resource

        assert isinstance(StaticIdentity(), IdentityLike)
    """

    def can(self, action: str, resource: Any) -> bool: ...

    def apply_scope(self, action: str, resource: Any) -> Any: ...


@runtime_checkable
class AuthorizationServiceLike(Protocol):
    """Structural type for the request-scoped authorization service.

    The service is the single source of truth for whether the current
    request's authorization was handled.
    """

    def can(self, actor: Any, action: str, resource: Any) -> bool: ...

    def apply_scope(self, actor: Any, action: str, resource: Any) -> Any: ...

    def skip_authorization(self) -> None: ...

    def authorization_checked(self) -> bool: ...


@runtime_checkable
class RequestLike(Protocol):
    """Structural type for the request context read by the component."""

    def get_attribute(self, key: str) -> Any | None: ...

    def get_param(self, name: str) -> Any | None: ...


@runtime_checkable
class ControllerLike(Protocol):
    """Structural type for the host controller owning a component."""

    request: RequestLike

    def load_model(self) -> Any: ...
