"""PolicyRegistry — stores and retrieves policy registrations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from request_authz.policy._base import PolicyKind, PolicyRegistration

__all__ = ["PolicyRegistry", "get_default_registry"]


class PolicyRegistry:
    """Registry that maps (resource type, action) pairs to policy functions.

    Checks and scopes are kept apart: a resource type may have a check for
    ``"view"`` and a scope for ``"index"`` independently. Lookups walk the
    resource type's MRO, so policies registered on a base class apply to
    its subclasses unless the subclass registers its own.

    Thread-safe for reads after startup. Append-only during registration.

    Example::

        registry = PolicyRegistry()
        registry.register(Article, "edit", is_owner, name="is_owner", description="")
        policies = registry.lookup(Article, "edit")
    """

    def __init__(self) -> None:
        self._policies: dict[tuple[type, str, PolicyKind], list[PolicyRegistration]] = {}

    def register(
        self,
        resource_type: type,
        action: str,
        fn: Callable[[Any, Any], bool],
        *,
        name: str,
        description: str,
    ) -> None:
        """Register a check function for a (resource type, action) pair.

        Multiple checks can be registered for the same key; they are OR'd
        together at evaluation time.

        Args:
            resource_type: The class the check applies to.
            action: The action string (e.g., ``"view"``, ``"edit"``).
            fn: A callable ``(actor, resource) -> bool``.
            name: Human-readable name for the policy (used in logging).
            description: Description of the policy (typically the docstring).

        Example::

            registry.register(
                Article, "edit",
                lambda actor, article: article.owner_id == actor.id,
                name="owner_edits",
                description="Owners may edit their articles",
            )
        """
        self._add(resource_type, action, fn, name=name, description=description, kind="check")

    def register_scope(
        self,
        resource_type: type,
        action: str,
        fn: Callable[[Any, Any], Any],
        *,
        name: str,
        description: str,
    ) -> None:
        """Register a scope function for a (resource type, action) pair.

        Multiple scopes registered for the same key are applied in
        registration order, each receiving the previous result.

        Args:
            resource_type: The class the scope applies to.
            action: The action string (e.g., ``"index"``).
            fn: A callable ``(actor, resource) -> resource``.
            name: Human-readable name for the scope.
            description: Description of the scope.
        """
        self._add(resource_type, action, fn, name=name, description=description, kind="scope")

    def _add(
        self,
        resource_type: type,
        action: str,
        fn: Callable[[Any, Any], Any],
        *,
        name: str,
        description: str,
        kind: PolicyKind,
    ) -> None:
        registration = PolicyRegistration(
            resource_type=resource_type,
            action=action,
            fn=fn,
            name=name,
            description=description,
            kind=kind,
        )
        self._policies.setdefault((resource_type, action, kind), []).append(registration)

    def _find(self, resource_type: type, action: str, kind: PolicyKind) -> list[PolicyRegistration]:
        for klass in resource_type.__mro__:
            found = self._policies.get((klass, action, kind))
            if found:
                return list(found)
        return []

    def lookup(self, resource_type: type, action: str) -> list[PolicyRegistration]:
        """Look up the checks that apply to a (resource type, action) pair.

        The nearest class in the MRO with registered checks wins. Returns a
        copy so callers cannot mutate the registry state.

        Returns:
            A list of ``PolicyRegistration`` objects. Empty list if none apply.
        """
        return self._find(resource_type, action, "check")

    def lookup_scopes(self, resource_type: type, action: str) -> list[PolicyRegistration]:
        """Look up the scopes that apply to a (resource type, action) pair."""
        return self._find(resource_type, action, "scope")

    def has_policy(self, resource_type: type, action: str) -> bool:
        """Check whether at least one check applies to (resource type, action)."""
        return bool(self._find(resource_type, action, "check"))

    def has_scope(self, resource_type: type, action: str) -> bool:
        """Check whether at least one scope applies to (resource type, action)."""
        return bool(self._find(resource_type, action, "scope"))

    def clear(self) -> None:
        """Remove all registered policies.

        Primarily useful in test teardown to reset the registry state
        between tests.
        """
        self._policies.clear()


# Module-level default registry (singleton).
_default_registry = PolicyRegistry()


def get_default_registry() -> PolicyRegistry:
    """Return the global default (singleton) policy registry.

    This is the registry used by ``@policy``, ``@scope`` and
    ``PolicyResolver`` when no explicit registry is provided.
    """
    return _default_registry
