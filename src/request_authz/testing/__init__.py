"""request-authz testing utilities — doubles, assertions, and fixtures.

Provides test helpers for verifying authorization behavior:

- **Doubles**: ``MockIdentity``, ``MockService``, ``MockActor``.
- **Assertion helpers**: ``assert_authorized``, ``assert_denied``,
  ``assert_skipped``.
- **Fixtures**: ``authz_registry``, ``authz_service``,
  ``isolated_authz_state``.

Example::

    from request_authz.testing import MockIdentity, assert_denied

    def test_guest_cannot_edit(make_component, article):
        authz = make_component(identity=MockIdentity(allow=False))
        assert_denied(authz, article, "edit")
"""

from request_authz.testing._assertions import assert_authorized, assert_denied, assert_skipped
from request_authz.testing._doubles import (
    MockActor,
    MockIdentity,
    MockService,
    make_admin,
    make_user,
)
from request_authz.testing._fixtures import authz_registry, authz_service, isolated_authz_state
from request_authz.testing._isolation import isolated_authz

__all__ = [
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
]
