"""PolicyResolver — dispatch a resource to the policies registered for its type."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, false

from request_authz.config._config import PolicyConfig, get_global_config
from request_authz.exceptions import NoPolicyError
from request_authz.policy._registry import PolicyRegistry, get_default_registry

__all__ = ["PolicyResolver", "resource_type_of"]


def resource_type_of(resource: Any) -> type:
    """Return the type used for policy dispatch.

    A class passed as the resource is its own key (model-level checks such
    as "may this identity create articles at all"). Anything else is keyed
    by its runtime type.
    """
    if isinstance(resource, type):
        return resource
    return type(resource)


class PolicyResolver:
    """Locate and invoke the policies that apply to a resource.

    Args:
        registry: Policy registry to read. Defaults to the global registry.
        config: Policy config. Defaults to the global config at call time.

    Example::

        resolver = PolicyResolver()
        if resolver.can(current_user, "edit", article):
            ...
        stmt = resolver.apply_scope(current_user, "index", select(Article))
    """

    def __init__(
        self,
        registry: PolicyRegistry | None = None,
        config: PolicyConfig | None = None,
    ) -> None:
        self._registry = registry
        self._config = config

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    @property
    def config(self) -> PolicyConfig:
        return self._config if self._config is not None else get_global_config()

    def can(self, actor: Any, action: str, resource: Any) -> bool:
        """Evaluate the checks registered for the resource's type and *action*.

        Multiple checks for the same key are OR'd — any passing check grants
        access.

        Raises:
            NoPolicyError: No check applies and ``on_missing_policy="raise"``.
        """
        entity = resource_type_of(resource)
        policies = self.registry.lookup(entity, action)
        config = self.config

        if not policies and config.on_missing_policy == "raise":
            raise NoPolicyError(resource_type=entity.__name__, action=action)

        allowed = any(bool(p.fn(actor, resource)) for p in policies)

        if config.log_policy_decisions:
            from request_authz._audit import log_policy_evaluation

            log_policy_evaluation(
                entity=entity,
                action=action,
                actor=actor,
                policies=policies,
                result=allowed,
            )
        return allowed

    def apply_scope(self, actor: Any, action: str, resource: Any) -> Any:
        """Narrow *resource* to what *actor* may see for *action*.

        SQLAlchemy ``Select`` statements are scoped per entity in their
        column descriptions; entities without a scope get ``WHERE false``
        under the deny policy. Other resources run the scopes registered
        for their type in order.

        Raises:
            NoPolicyError: No scope applies and the resource cannot be
                narrowed to an empty view, or ``on_missing_policy="raise"``.
        """
        if isinstance(resource, Select):
            return self._scope_statement(actor, action, resource)

        entity = resource_type_of(resource)
        scopes = self.registry.lookup_scopes(entity, action)
        if not scopes:
            raise NoPolicyError(resource_type=entity.__name__, action=action)

        for registration in scopes:
            resource = registration.fn(actor, resource)
        self._log(entity, action, actor, scopes, resource)
        return resource

    def _scope_statement(self, actor: Any, action: str, stmt: Select[Any]) -> Select[Any]:
        desc_list: list[dict[str, Any]] = stmt.column_descriptions
        # Several columns of one entity share its scopes; apply them once
        entities: dict[type, None] = dict.fromkeys(
            desc["entity"] for desc in desc_list if desc.get("entity") is not None
        )
        for entity in entities:
            scopes = self.registry.lookup_scopes(entity, action)
            if not scopes:
                if self.config.on_missing_policy == "raise":
                    raise NoPolicyError(resource_type=entity.__name__, action=action)
                stmt = stmt.where(false())
            for registration in scopes:
                stmt = registration.fn(actor, stmt)
            self._log(entity, action, actor, scopes, stmt)
        return stmt

    def _log(self, entity: type, action: str, actor: Any, scopes: list[Any], result: Any) -> None:
        if self.config.log_policy_decisions:
            from request_authz._audit import log_policy_evaluation

            log_policy_evaluation(
                entity=entity,
                action=action,
                actor=actor,
                policies=scopes,
                result=result,
            )
