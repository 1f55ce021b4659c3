"""Composable predicates for authorization checks."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = ["Predicate", "predicate", "always_allow", "always_deny"]


class Predicate:
    """A composable authorization predicate.

    Wraps a callable that takes an actor and a resource and returns a
    bool. Supports ``&`` (AND), ``|`` (OR), and ``~`` (NOT) composition.
    Both operands are short-circuited like Python's ``and``/``or``.

    Example::

        is_published = Predicate(lambda actor, article: article.is_published)
        is_owner = Predicate(lambda actor, article: article.owner_id == actor.id)

        combined = is_published | is_owner
        combined(current_user, article)  # bool
    """

    def __init__(self, fn: Callable[[Any, Any], bool], *, name: str = "") -> None:
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "<anonymous>")

    def __call__(self, actor: Any, resource: Any) -> bool:
        return bool(self._fn(actor, resource))

    def __and__(self, other: Predicate) -> Predicate:
        def _and(actor: Any, resource: Any) -> bool:
            return self(actor, resource) and other(actor, resource)

        return Predicate(_and, name=f"({self._name} & {other._name})")

    def __or__(self, other: Predicate) -> Predicate:
        def _or(actor: Any, resource: Any) -> bool:
            return self(actor, resource) or other(actor, resource)

        return Predicate(_or, name=f"({self._name} | {other._name})")

    def __invert__(self) -> Predicate:
        def _not(actor: Any, resource: Any) -> bool:
            return not self(actor, resource)

        return Predicate(_not, name=f"~{self._name}")

    @property
    def name(self) -> str:
        """The human-readable name of this predicate."""
        return self._name

    def __repr__(self) -> str:
        return f"Predicate({self._name!r})"


def predicate(fn: Callable[[Any, Any], bool]) -> Predicate:
    """Decorator/factory that creates a Predicate from a callable.

    Example::

        @predicate
        def is_admin(actor, resource) -> bool:
            return actor.role == "admin"
    """
    return Predicate(fn, name=getattr(fn, "__name__", "<lambda>"))


# Built-in predicates


def _always_allow(actor: Any, resource: Any) -> bool:
    return True


def _always_deny(actor: Any, resource: Any) -> bool:
    return False


always_allow: Predicate = Predicate(_always_allow, name="always_allow")
always_deny: Predicate = Predicate(_always_deny, name="always_deny")
