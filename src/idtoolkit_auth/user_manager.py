"""User account management against the identity toolkit REST API.

All operations are scoped to one project. Inputs are validated locally
before any request is sent; write operations re-read the user afterwards
and return the server's authoritative record.
"""

from collections.abc import Sequence
from typing import Any

from .config import ID_TOOLKIT_URL, IdentityToolkitSettings
from .credentials import BaseCredentials
from .exceptions import (
    CreateUserError,
    InvalidArgumentError,
    ListUsersError,
    SetCustomClaimsError,
    UpdateUserError,
    UserManagerError,
)
from .http_client import HTTPClient, HTTPResponse
from .models import UserRecord
from .utils.validators import (
    compact,
    to_boolean,
    validate_custom_claims,
    validate_display_name,
    validate_email,
    validate_password,
    validate_phone_number,
    validate_photo_url,
    validate_uid,
    validate_uids,
)

MAX_LIST_USERS_RESULTS = 1000


class UserManager:
    """
    Manages user accounts of a single project.

    Example usage:
        manager = UserManager("my-project", credentials, logger=logger)

        user = manager.create_user(email="jane@example.com", password="secret123")
        user = manager.get_user_by(email="jane@example.com")
        manager.set_custom_claims(user.uid, {"admin": True})
        manager.delete_user(user.uid)
    """

    def __init__(
        self,
        project_id: str,
        credentials: BaseCredentials,
        url_override: str | None = None,
        *,
        timeout: float | None = None,
        http_client: HTTPClient | None = None,
        logger=None,
    ):
        """
        Initialize a user manager. No request is sent.

        Args:
            project_id: Project whose users are managed
            credentials: Credentials used to sign requests
            url_override: Base URL to use instead of the identity toolkit URL
            timeout: Request timeout in seconds
            http_client: Preconfigured client (takes precedence over url_override/timeout)
            logger: Optional structured logger instance

        Raises:
            InvalidArgumentError: If project_id is empty
        """
        if not isinstance(project_id, str) or not project_id:
            raise InvalidArgumentError("project_id must be a non-empty string")

        self.project_id = project_id
        self.logger = logger
        self._client = http_client or HTTPClient(
            f"{url_override or ID_TOOLKIT_URL}/",
            credentials,
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: IdentityToolkitSettings, logger=None) -> "UserManager":
        """
        Build a user manager from settings.

        Args:
            settings: Identity toolkit settings
            logger: Optional structured logger instance

        Returns:
            UserManager bound to the configured project and endpoint

        Raises:
            CredentialsError: If no credential source is configured
        """
        return cls(
            settings.project_id,
            settings.get_credentials(),
            settings.identity_toolkit_url,
            timeout=settings.timeout,
            logger=logger,
        )

    def close(self) -> None:
        """Release the HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> "UserManager":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ==================== ACCOUNT LIFECYCLE ====================

    def create_user(
        self,
        *,
        uid: str | None = None,
        display_name: str | None = None,
        email: str | None = None,
        email_verified: bool | None = None,
        phone_number: str | None = None,
        photo_url: str | None = None,
        password: str | None = None,
        disabled: bool | None = None,
    ) -> UserRecord | None:
        """
        Create a new user account with the specified properties.

        Args:
            uid: Id to assign to the new user (generated by the server if omitted)
            display_name: User's display name
            email: User's primary email
            email_verified: Whether the primary email is verified
            phone_number: User's primary phone number (E.164)
            photo_url: User's photo URL
            password: User's raw, unhashed password
            disabled: Whether the account is disabled

        Returns:
            The created user, as re-read from the server

        Raises:
            InvalidArgumentError: If any attribute is invalid
            CreateUserError: If the server did not return a user id
        """
        payload = compact(
            localId=validate_uid(uid),
            displayName=validate_display_name(display_name),
            email=validate_email(email),
            phoneNumber=validate_phone_number(phone_number),
            photoUrl=validate_photo_url(photo_url),
            password=validate_password(password),
            emailVerified=to_boolean(email_verified),
            disabled=to_boolean(disabled),
        )

        body = self._client.post(self._with_path("accounts"), payload).body
        new_uid = self._local_id(body)
        if new_uid is None:
            raise CreateUserError(f"Failed to create user: {body}", response=body)

        if self.logger:
            self.logger.info("Created user", uid=new_uid, project_id=self.project_id)

        return self.get_user_by(uid=new_uid)

    def update_user(
        self,
        uid: str,
        *,
        display_name: str | None = None,
        email: str | None = None,
        email_verified: bool | None = None,
        phone_number: str | None = None,
        photo_url: str | None = None,
        password: str | None = None,
        disabled: bool | None = None,
    ) -> UserRecord | None:
        """
        Update an existing user account. Omitted attributes are left unchanged.

        Args:
            uid: Id of the user to update
            display_name: New display name
            email: New primary email
            email_verified: Whether the primary email is verified
            phone_number: New primary phone number (E.164)
            photo_url: New photo URL
            password: New raw, unhashed password
            disabled: Whether the account is disabled

        Returns:
            The updated user, as re-read from the server

        Raises:
            InvalidArgumentError: If uid or any attribute is invalid
            UpdateUserError: If the server did not return the user id
        """
        payload = compact(
            localId=validate_uid(uid, required=True),
            displayName=validate_display_name(display_name),
            email=validate_email(email),
            phoneNumber=validate_phone_number(phone_number),
            photoUrl=validate_photo_url(photo_url),
            password=validate_password(password),
            emailVerified=to_boolean(email_verified),
            disabled=to_boolean(disabled),
        )
        return self._patch_user(payload, UpdateUserError, "update user")

    def set_custom_claims(self, uid: str, claims: Any) -> UserRecord | None:
        """
        Set custom claims on a user account, replacing any existing claims.

        Args:
            uid: Id of the user
            claims: Any JSON-serializable value

        Returns:
            The user, as re-read from the server

        Raises:
            InvalidArgumentError: If uid is invalid or claims are not serializable
            SetCustomClaimsError: If the server did not return the user id
        """
        payload = compact(
            localId=validate_uid(uid, required=True),
            customAttributes=validate_custom_claims(claims),
        )
        return self._patch_user(payload, SetCustomClaimsError, "set claims for user")

    def list_users(self) -> list[UserRecord]:
        """
        List the first page of user accounts (up to 1000).

        Returns:
            Users in server order; empty list if there are none

        Raises:
            ListUsersError: If the server returned a non-success status
        """
        response = self._client.get(
            self._with_path("accounts:batchGet"),
            {"maxResults": MAX_LIST_USERS_RESULTS},
        )
        if not response.success:
            raise ListUsersError(
                f"Failed to list users ({response.status_code}): {response.body}",
                response=response.body,
            )

        users = (response.body or {}).get("users") or []
        return [UserRecord.from_response(user) for user in users]

    # ==================== LOOKUP ====================

    def get_user_by(
        self,
        *,
        uid: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> UserRecord | None:
        """
        Get the user matching one identifying key.

        Keys are checked in the order uid, email, phone_number; the first one
        given is used and the others are ignored.

        Args:
            uid: User id
            email: Email address
            phone_number: Phone number (E.164)

        Returns:
            The user, or None if no user matches

        Raises:
            InvalidArgumentError: If no key is given or the selected key is invalid
        """
        if uid is not None:
            key, payload = "uid", {"localId": [validate_uid(uid, required=True)]}
        elif email is not None:
            key, payload = "email", {"email": [validate_email(email, required=True)]}
        elif phone_number is not None:
            key, payload = "phone_number", {
                "phoneNumber": [validate_phone_number(phone_number, required=True)]
            }
        else:
            raise InvalidArgumentError(
                "Unsupported query: one of uid, email or phone_number is required"
            )

        if self.logger:
            self.logger.debug("Looking up user", key=key, project_id=self.project_id)

        body = self._client.post(self._with_path("accounts:lookup"), payload).body
        users = body.get("users") if isinstance(body, dict) else None
        if isinstance(users, list) and users:
            return UserRecord.from_response(users[0])
        return None

    def get_user(self, uid: str) -> UserRecord | None:
        """Get a user by id."""
        return self.get_user_by(uid=uid)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        """Get a user by email address."""
        return self.get_user_by(email=email)

    def get_user_by_phone_number(self, phone_number: str) -> UserRecord | None:
        """Get a user by phone number."""
        return self.get_user_by(phone_number=phone_number)

    # ==================== DELETION ====================

    def delete_user(self, uid: str) -> HTTPResponse:
        """
        Delete the user with the given id.

        Args:
            uid: Id of the user

        Returns:
            Raw response; check ``success`` for the outcome

        Raises:
            InvalidArgumentError: If uid is invalid
        """
        payload = {"localId": validate_uid(uid, required=True)}
        response = self._client.post(self._with_path("accounts:delete"), payload)

        if self.logger:
            self.logger.info(
                "Deleted user",
                uid=uid,
                status_code=response.status_code,
                project_id=self.project_id,
            )

        return response

    def delete_users(self, uids: Sequence[str]) -> HTTPResponse:
        """
        Delete several users in one request.

        Accounts are force-deleted, whether or not they are disabled.

        Args:
            uids: Ids of the users (at most 1000)

        Returns:
            Raw response; check ``success`` and any per-uid ``errors`` in the body

        Raises:
            InvalidArgumentError: If the batch or any uid is invalid
        """
        payload = {"localIds": validate_uids(uids), "force": True}
        response = self._client.post(self._with_path("accounts:batchDelete"), payload)

        if self.logger:
            self.logger.info(
                "Deleted users",
                count=len(payload["localIds"]),
                status_code=response.status_code,
                project_id=self.project_id,
            )

        return response

    # ==================== INTERNALS ====================

    def _patch_user(
        self,
        payload: dict[str, Any],
        error_cls: type[UserManagerError],
        action: str,
    ) -> UserRecord | None:
        """Send an accounts:update call and re-read the user on success."""
        body = self._client.post(self._with_path("accounts:update"), payload).body
        uid = self._local_id(body)
        if uid is None:
            raise error_cls(f"Failed to {action}: {body}", response=body)

        if self.logger:
            self.logger.info("Updated user", action=action, uid=uid, project_id=self.project_id)

        return self.get_user_by(uid=uid)

    @staticmethod
    def _local_id(body: Any) -> str | None:
        if isinstance(body, dict):
            return body.get("localId")
        return None

    def _with_path(self, path: str) -> str:
        return f"projects/{self.project_id}/{path}"
