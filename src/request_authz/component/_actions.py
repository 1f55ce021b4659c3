"""Resolve the authorization action name for a routed controller action."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from request_authz.exceptions import InvalidConfiguration

__all__ = ["resolve_action"]


def resolve_action(action: str, action_map: Mapping[str, Any]) -> str:
    """Map a routed action name to the authorization action name.

    Returns *action* unchanged when ``action_map`` has no entry for it (or
    the entry is ``None``), and the mapped string otherwise.

    Raises:
        InvalidConfiguration: The entry exists but is not a string.

    Example::

        resolve_action("index", {"index": "list"})  # "list"
        resolve_action("view", {})                  # "view"
    """
    name = action_map.get(action)
    if name is None:
        return action
    if not isinstance(name, str):
        actual = type(name).__name__
        raise InvalidConfiguration(
            key=action,
            expected="str or None",
            actual_type=actual,
            message=f"Invalid action type for `{action}`. Expected `str` or `None`, got `{actual}`.",
        )
    return name
