"""Base credentials interface."""

from abc import ABC, abstractmethod


class BaseCredentials(ABC):
    """
    Base interface for credentials used to sign identity toolkit requests.

    All credential types (service account, static token, emulator) must
    implement this interface so the HTTP client can attach a bearer token
    to every request without knowing how it was obtained.
    """

    @abstractmethod
    def get_access_token(self) -> str:
        """
        Return a valid OAuth 2.0 access token.

        Returns:
            Bearer token string

        Raises:
            CredentialsError: If a token cannot be obtained
        """
        pass

    @property
    def project_id(self) -> str | None:
        """Project id the credentials belong to, if known."""
        return None


class StaticTokenCredentials(BaseCredentials):
    """Credentials backed by an access token obtained elsewhere."""

    def __init__(self, token: str):
        if not token:
            raise ValueError("token must be a non-empty string")
        self._token = token

    def get_access_token(self) -> str:
        return self._token


class EmulatorCredentials(BaseCredentials):
    """
    Credentials for the local auth emulator.

    The emulator accepts the fixed token "owner" as an administrator token.
    """

    def get_access_token(self) -> str:
        return "owner"
