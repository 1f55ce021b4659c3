"""Per-action boolean switches with a wildcard default."""

from __future__ import annotations

from collections.abc import Mapping

from request_authz._types import ALL
from request_authz.config._config import ComponentConfig

__all__ = ["GATE_KEYS", "check_action"]

GATE_KEYS = frozenset({"skip_authorization", "authorize_model"})


def check_action(action: str, config_key: str, config: ComponentConfig) -> bool:
    """Return the per-action flag for *action* under *config_key*.

    An exact boolean entry for *action* wins regardless of the wildcard.
    Anything else falls back to ``bool(mapping["*"])``.

    Args:
        action: The routed action name.
        config_key: ``"skip_authorization"`` or ``"authorize_model"``.
        config: The component configuration.

    Example::

        config = ComponentConfig(skip_authorization={"delete": True})
        check_action("delete", "skip_authorization", config)  # True
        check_action("view", "skip_authorization", config)    # False
    """
    gates: dict[str, Mapping[str, bool]] = {
        "skip_authorization": config.skip_authorization,
        "authorize_model": config.authorize_model,
    }
    flags = gates.get(config_key)
    if flags is None:
        raise ValueError(f"config_key must be one of {sorted(GATE_KEYS)!r}, got {config_key!r}")

    value = flags.get(action)
    if isinstance(value, bool):
        return value
    return bool(flags.get(ALL))
