"""Identity toolkit configuration settings."""

from typing import TypeVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .credentials import (
    BaseCredentials,
    EmulatorCredentials,
    ServiceAccountCredentials,
    StaticTokenCredentials,
)
from .exceptions import CredentialsError

# Base url for the Google Identity Toolkit
ID_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"

T = TypeVar("T", bound="IdentityToolkitSettings")


class IdentityToolkitSettings(BaseSettings):
    """
    Identity toolkit client settings with configurable environment prefix.

    Configuration precedence (highest to lowest):
    1. Environment variables ({PREFIX}*)
    2. .env file
    3. Default values

    Example usage:
        # Default (uses IDTOOLKIT_* environment variables)
        settings = IdentityToolkitSettings()

        # Custom prefix (uses MYAPP_AUTH_* environment variables)
        settings = IdentityToolkitSettings.with_prefix("MYAPP_AUTH_")

    Example .env file:
        IDTOOLKIT_PROJECT_ID=my-project
        IDTOOLKIT_CREDENTIALS_FILE=/secrets/service-account.json
        IDTOOLKIT_TIMEOUT=30

        # Local emulator (takes precedence over credentials)
        IDTOOLKIT_EMULATOR_HOST=localhost:9099
    """

    model_config = SettingsConfigDict(
        env_prefix="IDTOOLKIT_",  # Default prefix, can be overridden
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== PROJECT SETTINGS ====================

    project_id: str = Field(
        default="",
        description="Project whose user accounts are managed",
    )

    base_url: str = Field(
        default=ID_TOOLKIT_URL,
        description="Identity toolkit service root. Override for proxies or testing.",
    )

    timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    # ==================== CREDENTIAL SETTINGS ====================

    credentials_file: str | None = Field(
        default=None,
        description="Path to a service account JSON key file",
    )

    access_token: str | None = Field(
        default=None,
        description="Pre-obtained OAuth 2.0 access token (used when no key file is set)",
    )

    # ==================== EMULATOR SETTINGS ====================

    emulator_host: str | None = Field(
        default=None,
        description="host:port of a local auth emulator. When set, requests go to the emulator.",
    )

    # ==================== CLASS METHODS ====================

    @classmethod
    def with_prefix(cls: type[T], prefix: str) -> T:
        """
        Create settings instance with custom environment prefix.

        Args:
            prefix: Environment variable prefix (e.g., "MYAPP_AUTH_")

        Returns:
            IdentityToolkitSettings instance configured with the specified prefix
        """

        # Create a new class with custom config
        class _PrefixedSettings(cls):
            model_config = SettingsConfigDict(
                env_prefix=prefix,
                env_file=".env",
                env_file_encoding="utf-8",
                case_sensitive=False,
                extra="ignore",
            )

        return _PrefixedSettings()

    # ==================== COMPUTED PROPERTIES ====================

    @property
    def use_emulator(self) -> bool:
        """Check whether requests should go to a local emulator."""
        return bool(self.emulator_host)

    @property
    def identity_toolkit_url(self) -> str:
        """
        Get the identity toolkit base URL.

        Returns:
            Emulator URL if an emulator host is set, otherwise base_url
        """
        if self.use_emulator:
            return f"http://{self.emulator_host}/identitytoolkit.googleapis.com/v1"
        return self.base_url

    def get_credentials(self) -> BaseCredentials:
        """
        Build credentials from the configured source.

        Precedence: emulator, service account file, static access token.

        Returns:
            Credentials instance

        Raises:
            CredentialsError: If no credential source is configured
        """
        if self.use_emulator:
            return EmulatorCredentials()
        if self.credentials_file:
            return ServiceAccountCredentials.from_file(self.credentials_file)
        if self.access_token:
            return StaticTokenCredentials(self.access_token)
        raise CredentialsError(
            "No credentials configured. Set CREDENTIALS_FILE, ACCESS_TOKEN or EMULATOR_HOST."
        )

    def validate_config(self) -> list[str]:
        """
        Validate configuration before building a client.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.project_id:
            errors.append("PROJECT_ID is required")

        if not self.use_emulator and not (self.credentials_file or self.access_token):
            errors.append("CREDENTIALS_FILE or ACCESS_TOKEN is required unless EMULATOR_HOST is set")

        if not self.base_url.startswith(("http://", "https://")):
            errors.append("BASE_URL must be an http(s) URL")

        return errors
