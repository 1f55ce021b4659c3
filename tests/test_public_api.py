"""Tests for public API surface — verifies all __init__.py re-exports.

Every documented symbol must be importable from its package, and every
``__all__`` list must be complete and match the actual module attributes.
"""

from __future__ import annotations

import importlib
import inspect

import pytest

EXPECTED_EXPORTS: dict[str, set[str]] = {
    "request_authz": {
        "__version__",
        "ALL",
        "AuthorizationComponent",
        "AuthorizationDenied",
        "AuthorizationMiddleware",
        "AuthorizationRequiredError",
        "AuthorizationService",
        "AuthorizationServiceLike",
        "AuthorizationState",
        "AuthzError",
        "ComponentConfig",
        "Controller",
        "EventDispatcher",
        "Identity",
        "IdentityLike",
        "InvalidConfiguration",
        "MissingIdentity",
        "NoPolicyError",
        "PolicyConfig",
        "PolicyRegistry",
        "PolicyResolver",
        "RequestContext",
        "RequestLike",
        "check_action",
        "configure",
        "policy",
        "resolve_action",
        "scope",
    },
    "request_authz.policy": {
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
    },
    "request_authz.component": {
        "AuthorizationComponent",
        "check_action",
        "resolve_action",
    },
    "request_authz.config": {
        "ComponentConfig",
        "PolicyConfig",
        "configure",
        "get_global_config",
    },
    "request_authz.middleware": {
        "AuthorizationMiddleware",
        "ExceptionHandler",
        "SuppressHandler",
        "UnauthorizedHandler",
        "create_handler",
        "register_handler",
    },
    "request_authz.testing": {
        "MockActor",
        "MockIdentity",
        "MockService",
        "assert_authorized",
        "assert_denied",
        "assert_skipped",
        "authz_registry",
        "authz_service",
        "isolated_authz",
        "isolated_authz_state",
        "make_admin",
        "make_user",
    },
    "request_authz.integrations.flask": {"AuthzExtension"},
    "request_authz.integrations.fastapi": {
        "AuthzDep",
        "get_identity",
        "install_authorization_check",
        "install_error_handlers",
    },
}


@pytest.mark.parametrize("module_name", sorted(EXPECTED_EXPORTS))
class TestExports:
    def test_all_is_complete(self, module_name: str) -> None:
        module = importlib.import_module(module_name)
        actual = set(module.__all__)
        expected = EXPECTED_EXPORTS[module_name]
        assert actual == expected, (
            f"{module_name}.__all__ mismatch.\n"
            f"  Missing: {expected - actual}\n"
            f"  Extra:   {actual - expected}"
        )

    def test_all_matches_module_attrs(self, module_name: str) -> None:
        module = importlib.import_module(module_name)
        for name in module.__all__:
            assert hasattr(module, name), (
                f"{module_name}.__all__ lists {name!r} but it is not an attribute"
            )


class TestTopLevelSymbols:
    def test_version_is_string(self) -> None:
        import request_authz

        assert isinstance(request_authz.__version__, str)

    def test_class_symbols_are_classes(self) -> None:
        import request_authz

        for name in [
            "AuthorizationComponent",
            "AuthorizationMiddleware",
            "AuthorizationService",
            "ComponentConfig",
            "Controller",
            "Identity",
            "PolicyRegistry",
            "RequestContext",
        ]:
            assert inspect.isclass(getattr(request_authz, name)), f"{name} should be a class"

    def test_errors_share_base(self) -> None:
        import request_authz

        for name in [
            "AuthorizationDenied",
            "AuthorizationRequiredError",
            "InvalidConfiguration",
            "MissingIdentity",
            "NoPolicyError",
        ]:
            assert issubclass(getattr(request_authz, name), request_authz.AuthzError)

    def test_wildcard_key(self) -> None:
        from request_authz import ALL

        assert ALL == "*"
