"""Exception hierarchy for request-authz."""

from __future__ import annotations

__all__ = [
    "AuthorizationDenied",
    "AuthorizationRequiredError",
    "AuthzError",
    "HandlerNotFound",
    "InvalidConfiguration",
    "InvalidHandler",
    "MissingIdentity",
    "NoPolicyError",
]


class AuthzError(Exception):
    """Base exception for all request-authz errors."""


class AuthorizationDenied(AuthzError):  # noqa: N818
    """The identity is not allowed to perform the requested action.

    Attributes:
        action: The action that was attempted.
        resource_type: The runtime type name of the resource involved.

    Example::

        try:
            component.authorize(article, "edit")
        except AuthorizationDenied as exc:
            print(f"cannot {exc.action} {exc.resource_type}")
    """

    def __init__(
        self,
        *,
        action: str,
        resource_type: str,
        message: str | None = None,
    ) -> None:
        self.action = action
        self.resource_type = resource_type
        if message is None:
            message = f"Identity is not authorized to perform `{action}` on `{resource_type}`"
        super().__init__(message)


class MissingIdentity(AuthzError):  # noqa: N818
    """No identity is present in the request context.

    Attributes:
        attribute: The request attribute the identity was expected under.
    """

    def __init__(self, *, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(f"An identity is required under the `{attribute}` request attribute")


class InvalidConfiguration(AuthzError):  # noqa: N818
    """A configured value does not have the required shape.

    Raised for request attributes holding the wrong kind of object and for
    ``action_map`` entries that are not strings. This is a setup error, not
    a request-data error.

    Attributes:
        key: The attribute key or action name that holds the bad value.
        expected: Description of the expected contract.
        actual_type: Name of the runtime type that was found.
    """

    def __init__(
        self,
        *,
        key: str,
        expected: str,
        actual_type: str,
        message: str | None = None,
    ) -> None:
        self.key = key
        self.expected = expected
        self.actual_type = actual_type
        if message is None:
            message = f"Expected that `{key}` would be {expected}, but got {actual_type}"
        super().__init__(message)


class NoPolicyError(AuthzError):
    """No policy registered for (resource_type, action).

    Raised when ``PolicyConfig.on_missing_policy`` is ``"raise"`` instead
    of the default deny behavior, and for scoping of plain resources that
    have no scope registered.

    Attributes:
        resource_type: The resource type with no policy.
        action: The action with no policy.
    """

    def __init__(self, *, resource_type: str, action: str) -> None:
        self.resource_type = resource_type
        self.action = action
        super().__init__(f"No policy registered for ({resource_type}, {action!r})")


class AuthorizationRequiredError(AuthzError):
    """The request finished without an authorization check or explicit skip.

    Attributes:
        action: The routed action of the unchecked request, if known.
    """

    def __init__(self, *, action: str | None = None) -> None:
        self.action = action
        target = f"`{action}`" if action else "the request"
        super().__init__(
            f"Authorization was not checked for {target}. "
            "Call authorize(), apply_scope() or skip_authorization()."
        )


class HandlerNotFound(AuthzError):  # noqa: N818
    """No unauthorized-request handler is registered under the given name."""

    def __init__(self, *, name: str) -> None:
        self.name = name
        super().__init__(f"Handler `{name}` does not exist.")


class InvalidHandler(AuthzError):
    """A registered unauthorized-request handler does not satisfy the protocol."""

    def __init__(self, *, name: str, actual_type: str) -> None:
        self.name = name
        self.actual_type = actual_type
        super().__init__(
            f"Handler `{name}` should implement `UnauthorizedHandler`, got `{actual_type}`."
        )
