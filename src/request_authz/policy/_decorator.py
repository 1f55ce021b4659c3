"""@policy and @scope decorators — register authorization policy functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from request_authz.policy._registry import PolicyRegistry, get_default_registry

if TYPE_CHECKING:
    from request_authz.policy._predicate import Predicate

__all__ = ["policy", "scope"]

F = TypeVar("F", bound=Callable[..., Any])


def policy(
    resource_type: type,
    action: str,
    *,
    predicate: Predicate | None = None,
    registry: PolicyRegistry | None = None,
) -> Callable[[F], F]:
    """Decorator that registers a check function for (resource type, action).

    The decorated function receives the actor and the resource and returns
    a bool. When ``predicate`` is provided, the predicate is registered
    instead of the decorated function body; the decorated function is still
    used for its name and docstring.

    Args:
        resource_type: The class the check applies to.
        action: The action string (e.g., "view", "edit").
        predicate: Optional composable predicate to use as the check.
        registry: Optional custom registry. Defaults to the global registry.

    Returns:
        A decorator that registers the function and returns it unchanged.

    Example::

        @policy(Article, "edit")
        def article_edit(actor: User, article: Article) -> bool:
            return article.owner_id == actor.id

        @policy(Article, "delete", predicate=is_owner | is_admin)
        def article_delete(actor, article):
            ...
    """

    def decorator(fn: F) -> F:
        target = registry if registry is not None else get_default_registry()
        check_fn: Callable[[Any, Any], bool] = predicate if predicate is not None else fn
        target.register(
            resource_type,
            action,
            check_fn,
            name=fn.__name__,
            description=fn.__doc__ or "",
        )
        return fn

    return decorator


def scope(
    resource_type: type,
    action: str,
    *,
    registry: PolicyRegistry | None = None,
) -> Callable[[F], F]:
    """Decorator that registers a scope function for (resource type, action).

    The decorated function receives the actor and the resource (usually a
    SQLAlchemy ``Select``) and returns the narrowed resource.

    Example::

        @scope(Article, "index")
        def article_index(actor: User, stmt: Select) -> Select:
            return stmt.where(Article.owner_id == actor.id)
    """

    def decorator(fn: F) -> F:
        target = registry if registry is not None else get_default_registry()
        target.register_scope(
            resource_type,
            action,
            fn,
            name=fn.__name__,
            description=fn.__doc__ or "",
        )
        return fn

    return decorator
