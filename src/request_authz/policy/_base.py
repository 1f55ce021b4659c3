"""PolicyRegistration dataclass — metadata for a registered policy."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

__all__ = ["PolicyKind", "PolicyRegistration"]

# A "check" answers yes/no; a "scope" narrows the resource.
PolicyKind = Literal["check", "scope"]


@dataclass(frozen=True, slots=True)
class PolicyRegistration:
    """A single registered policy function with its metadata.

    Attributes:
        resource_type: The class this policy applies to.
        action: The action string (e.g., "view", "edit", "index").
        fn: ``(actor, resource) -> bool`` for checks,
            ``(actor, resource) -> resource`` for scopes.
        name: The policy function name (for debugging/logging).
        description: Human-readable description (from docstring).
        kind: ``"check"`` or ``"scope"``.
    """

    resource_type: type
    action: str
    fn: Callable[[Any, Any], Any]
    name: str
    description: str
    kind: PolicyKind = "check"
