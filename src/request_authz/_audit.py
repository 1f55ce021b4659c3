"""Audit logging for authorization decisions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from request_authz.policy._base import PolicyRegistration

__all__ = [
    "log_decision",
    "log_policy_evaluation",
    "log_skip",
    "log_unchecked_request",
]

logger = logging.getLogger("request_authz")


def log_policy_evaluation(
    *,
    entity: type,
    action: str,
    actor: Any,
    policies: Sequence[PolicyRegistration],
    result: object,
) -> None:
    """Log a policy evaluation inside the resolver.

    Logging levels:
    - INFO: Summary (entity, action, policy count)
    - DEBUG: Detailed (which policies matched, the outcome)
    - WARNING: No policy found (deny-by-default triggered)

    Example::

        log_policy_evaluation(
            entity=Article,
            action="edit",
            actor=current_user,
            policies=matched_policies,
            result=True,
        )
    """
    entity_name = entity.__name__
    policy_count = len(policies)

    if policy_count == 0:
        logger.warning(
            "No policy registered for (%s, %r) — deny-by-default applied",
            entity_name,
            action,
        )
        return

    logger.info(
        "Policy evaluation: %s.%s — %d policy(ies) applied for actor %r",
        entity_name,
        action,
        policy_count,
        actor,
    )

    if logger.isEnabledFor(logging.DEBUG):
        policy_names = [p.name for p in policies]
        logger.debug(
            "Policies matched for %s.%s: %s — result: %s",
            entity_name,
            action,
            policy_names,
            result,
        )


def log_decision(*, action: str, resource_type: str, allowed: bool) -> None:
    """Log the outcome of a component-level ``authorize`` call."""
    if allowed:
        logger.info("Authorized `%s` on %s", action, resource_type)
    else:
        logger.warning("Denied `%s` on %s", action, resource_type)


def log_skip(*, action: str | None) -> None:
    """Log an explicit authorization skip to the ``request_authz.skip`` sub-logger.

    Skips get their own logger so operators can audit them separately.
    """
    skip_logger = logging.getLogger("request_authz.skip")
    skip_logger.info("Authorization skipped for action %s", action if action else "<unknown>")


def log_unchecked_request(*, action: str | None) -> None:
    """Log a request that finished without any authorization decision."""
    logger.warning(
        "Request for action %s finished without an authorization check",
        action if action else "<unknown>",
    )
