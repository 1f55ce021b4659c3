"""Identity — binds an authenticated actor to the request's authorization service."""

from __future__ import annotations

from typing import Any

from request_authz._types import AuthorizationServiceLike

__all__ = ["Identity"]


class Identity:
    """Satisfies ``IdentityLike`` by delegating to an authorization service.

    Args:
        actor: The authenticated principal (user model, dataclass, ...).
        service: The request's authorization service.

    Example::

        identity = Identity(current_user, service)
        identity.can("edit", article)
    """

    def __init__(self, actor: Any, service: AuthorizationServiceLike) -> None:
        self._actor = actor
        self._service = service

    def can(self, action: str, resource: Any) -> bool:
        return self._service.can(self._actor, action, resource)

    def apply_scope(self, action: str, resource: Any) -> Any:
        return self._service.apply_scope(self._actor, action, resource)

    def get_original_data(self) -> Any:
        """Return the wrapped actor."""
        return self._actor

    def __getattr__(self, name: str) -> Any:
        # Expose actor attributes (``identity.id``) without unwrapping.
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._actor, name)

    def __repr__(self) -> str:
        return f"Identity({self._actor!r})"
