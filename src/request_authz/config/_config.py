"""Layered configuration for request-authz."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from request_authz._types import ALL, OnMissingPolicy

__all__ = [
    "ComponentConfig",
    "PolicyConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_POLICIES: set[str] = {"deny", "raise"}

DEFAULT_AUTHORIZATION_EVENT = "Controller.initialize"

# Request-start events, in the order Controller.startup() dispatches them.
STARTUP_EVENTS: tuple[str, ...] = (DEFAULT_AUTHORIZATION_EVENT, "Controller.startup")

_DEFAULT_SKIP_AUTHORIZATION: Mapping[str, bool] = {ALL: False}
_DEFAULT_AUTHORIZE_MODEL: Mapping[str, bool] = {ALL: True}


def _freeze(overrides: Mapping[str, Any] | None, defaults: Mapping[str, Any]) -> Mapping[str, Any]:
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return MappingProxyType(merged)


@dataclass(frozen=True, slots=True)
class ComponentConfig:
    """Per-controller authorization component configuration.

    The per-action maps (``skip_authorization``, ``authorize_model``) are
    merged over their defaults, so the ``"*"`` wildcard is always defined.
    All maps are stored read-only.

    Attributes:
        identity_attribute: Request attribute holding the identity.
        service_attribute: Request attribute holding the authorization service.
        authorization_event: Lifecycle event that triggers ``authorize_action``;
            one of ``STARTUP_EVENTS``.
        skip_authorization: Action name (or ``"*"``) to skip flag.
        authorize_model: Action name (or ``"*"``) to model-authorization flag.
        action_map: Routed action name to authorization action name.

    Example::

        config = ComponentConfig(
            skip_authorization={"login": True},
            action_map={"index": "list"},
        )
        assert config.skip_authorization["*"] is False
    """

    identity_attribute: str = "identity"
    service_attribute: str = "authorization"
    authorization_event: str = DEFAULT_AUTHORIZATION_EVENT
    skip_authorization: Mapping[str, bool] = field(default_factory=dict)
    authorize_model: Mapping[str, bool] = field(default_factory=dict)
    action_map: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("identity_attribute", "service_attribute", "authorization_event"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string, got {value!r}")
        if self.authorization_event not in STARTUP_EVENTS:
            raise ValueError(
                f"authorization_event must be one of {list(STARTUP_EVENTS)!r}, "
                f"got {self.authorization_event!r}"
            )
        # Use object.__setattr__ because the dataclass is frozen
        object.__setattr__(
            self,
            "skip_authorization",
            _freeze(self.skip_authorization, _DEFAULT_SKIP_AUTHORIZATION),
        )
        object.__setattr__(
            self,
            "authorize_model",
            _freeze(self.authorize_model, _DEFAULT_AUTHORIZE_MODEL),
        )
        object.__setattr__(self, "action_map", _freeze(self.action_map, {}))

    def merge(
        self,
        *,
        identity_attribute: str | None = None,
        service_attribute: str | None = None,
        authorization_event: str | None = None,
        skip_authorization: Mapping[str, bool] | None = None,
        authorize_model: Mapping[str, bool] | None = None,
        action_map: Mapping[str, Any] | None = None,
    ) -> ComponentConfig:
        """Return a new config with non-None overrides applied.

        Per-action maps are merged key by key, so overriding a single action
        keeps the rest of the existing map.

        Example::

            base = ComponentConfig(authorize_model={"*": False})
            controller_cfg = base.merge(skip_authorization={"health": True})
        """
        return ComponentConfig(
            identity_attribute=(
                identity_attribute if identity_attribute is not None else self.identity_attribute
            ),
            service_attribute=(
                service_attribute if service_attribute is not None else self.service_attribute
            ),
            authorization_event=(
                authorization_event
                if authorization_event is not None
                else self.authorization_event
            ),
            skip_authorization={**self.skip_authorization, **(skip_authorization or {})},
            authorize_model={**self.authorize_model, **(authorize_model or {})},
            action_map={**self.action_map, **(action_map or {})},
        )


@dataclass(frozen=True, slots=True)
class PolicyConfig:
    """Configuration for policy resolution.

    Attributes:
        on_missing_policy: Behavior when no policy is registered.
            ``"deny"`` answers ``False`` (or scopes to nothing).
            ``"raise"`` raises ``NoPolicyError``.
        log_policy_decisions: Emit audit log records for each decision.
    """

    on_missing_policy: OnMissingPolicy = "deny"
    log_policy_decisions: bool = False

    def __post_init__(self) -> None:
        if self.on_missing_policy not in _VALID_POLICIES:
            raise ValueError(
                f"on_missing_policy must be one of {_VALID_POLICIES!r}, "
                f"got {self.on_missing_policy!r}"
            )

    def merge(
        self,
        *,
        on_missing_policy: OnMissingPolicy | None = None,
        log_policy_decisions: bool | None = None,
    ) -> PolicyConfig:
        """Return a new config with non-None overrides applied."""
        return PolicyConfig(
            on_missing_policy=(
                on_missing_policy if on_missing_policy is not None else self.on_missing_policy
            ),
            log_policy_decisions=(
                log_policy_decisions
                if log_policy_decisions is not None
                else self.log_policy_decisions
            ),
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = PolicyConfig()


def get_global_config() -> PolicyConfig:
    """Return the current global policy configuration.

    Example::

        config = get_global_config()
        print(config.on_missing_policy)  # "deny"
    """
    return _global_config


def configure(
    *,
    on_missing_policy: OnMissingPolicy | None = None,
    log_policy_decisions: bool | None = None,
) -> PolicyConfig:
    """Update the global policy configuration by merging overrides.

    Only non-None values are applied. Returns the new global config.

    Example::

        configure(on_missing_policy="raise")
        # Now missing policies raise NoPolicyError instead of denying
    """
    global _global_config
    _global_config = _global_config.merge(
        on_missing_policy=on_missing_policy,
        log_policy_decisions=log_policy_decisions,
    )
    return _global_config


def _set_global_config(cfg: PolicyConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = PolicyConfig()
