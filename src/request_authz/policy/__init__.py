"""Policy engine — registration, lookup and resolution of authorization policies."""

from request_authz.policy._base import PolicyRegistration
from request_authz.policy._decorator import policy, scope
from request_authz.policy._predicate import Predicate, always_allow, always_deny, predicate
from request_authz.policy._registry import PolicyRegistry, get_default_registry
from request_authz.policy._resolver import PolicyResolver, resource_type_of

__all__ = [
    "Predicate",
    "PolicyRegistration",
    "PolicyRegistry",
    "PolicyResolver",
    "always_allow",
    "always_deny",
    "get_default_registry",
    "policy",
    "predicate",
    "resource_type_of",
    "scope",
]
