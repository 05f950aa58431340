"""Exception hierarchy for identity toolkit operations."""

from typing import Any


class IdentityToolkitError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(IdentityToolkitError, ValueError):
    """A caller-supplied value failed local validation.

    Raised before any request is sent.
    """


class CredentialsError(IdentityToolkitError):
    """Credentials could not be loaded or exchanged for an access token."""


class UserManagerError(IdentityToolkitError):
    """
    The remote call completed but did not report success.

    Attributes:
        response: Raw decoded response body, kept for diagnostics
    """

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class CreateUserError(UserManagerError):
    """User account could not be created."""


class UpdateUserError(UserManagerError):
    """User account could not be updated."""


class ListUsersError(UserManagerError):
    """User accounts could not be listed."""


class SetCustomClaimsError(UserManagerError):
    """Custom claims could not be set on a user account."""
