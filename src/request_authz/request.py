"""RequestContext — per-request attributes and routed parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from request_authz._types import ACTION_PARAM

__all__ = ["RequestContext"]


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Carries request attributes (identity, service, ...) and routed params.

    Immutable: ``with_attribute`` returns a modified copy, the way request
    objects flow through a middleware stack.

    Attributes:
        attributes: Values stored by middleware under string keys.
        params: Routing parameters; ``"action"`` names the controller action.

    Example::

        request = RequestContext.for_action("edit", identity=identity)
        request = request.with_attribute("authorization", service)
    """

    attributes: Mapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def for_action(cls, action: str, /, **attributes: Any) -> RequestContext:
        return cls(attributes=dict(attributes), params={ACTION_PARAM: action})

    def get_attribute(self, key: str) -> Any | None:
        return self.attributes.get(key)

    def get_param(self, name: str) -> Any | None:
        return self.params.get(name)

    def with_attribute(self, key: str, value: Any) -> RequestContext:
        return replace(self, attributes={**self.attributes, key: value})

    @property
    def action(self) -> str | None:
        return self.params.get(ACTION_PARAM)
