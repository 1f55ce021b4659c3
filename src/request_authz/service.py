"""Request-scoped authorization service and its bookkeeping state."""

from __future__ import annotations

import enum
import logging
from typing import Any

from request_authz.policy._resolver import PolicyResolver

__all__ = ["AuthorizationService", "AuthorizationState"]

logger = logging.getLogger("request_authz")


class AuthorizationState(enum.Enum):
    """Per-request authorization state.

    ``UNCHECKED`` is initial. The first terminal state reached is canonical
    for the rest of the request. A denied check does not leave
    ``UNCHECKED``; the request is aborted by the raised error instead.
    """

    UNCHECKED = "unchecked"
    AUTHORIZED = "authorized"
    SCOPED = "scoped"
    SKIPPED = "skipped"


class AuthorizationService:
    """Tracks whether authorization was handled for a single request.

    Create one per request. The service delegates decisions to a
    ``PolicyResolver`` and records the first decision it sees.

    Args:
        resolver: Resolver used for ``can`` and ``apply_scope``.
            Defaults to a resolver over the global registry and config.

    Example::

        service = AuthorizationService(PolicyResolver(registry))
        service.can(user, "view", article)
        assert service.state is AuthorizationState.AUTHORIZED
    """

    def __init__(self, resolver: PolicyResolver | None = None) -> None:
        self._resolver = resolver if resolver is not None else PolicyResolver()
        self._state = AuthorizationState.UNCHECKED

    @property
    def state(self) -> AuthorizationState:
        return self._state

    @property
    def resolver(self) -> PolicyResolver:
        return self._resolver

    def _transition(self, target: AuthorizationState) -> None:
        if self._state is AuthorizationState.UNCHECKED:
            self._state = target
        elif self._state is not target:
            logger.debug(
                "Authorization already %s; ignoring transition to %s",
                self._state.value,
                target.value,
            )

    def can(self, actor: Any, action: str, resource: Any) -> bool:
        allowed = self._resolver.can(actor, action, resource)
        if allowed:
            self._transition(AuthorizationState.AUTHORIZED)
        return allowed

    def apply_scope(self, actor: Any, action: str, resource: Any) -> Any:
        result = self._resolver.apply_scope(actor, action, resource)
        self._transition(AuthorizationState.SCOPED)
        return result

    def skip_authorization(self) -> None:
        """Mark the current request as intentionally not authorized."""
        self._transition(AuthorizationState.SKIPPED)

    def authorization_checked(self) -> bool:
        """Return True once any terminal state has been reached."""
        return self._state is not AuthorizationState.UNCHECKED

    def __repr__(self) -> str:
        return f"AuthorizationService(state={self._state.value!r})"
