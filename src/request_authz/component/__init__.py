"""Controller component — action resolution, per-action gates and enforcement."""

from request_authz.component._actions import resolve_action
from request_authz.component._component import AuthorizationComponent
from request_authz.component._gate import check_action

__all__ = ["AuthorizationComponent", "check_action", "resolve_action"]
