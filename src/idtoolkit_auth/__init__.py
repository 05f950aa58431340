"""idtoolkit-auth: Server-side user management for the Google Identity Toolkit.

This package provides:
- User account lifecycle (create, look up, update, list, delete)
- Custom claims management
- Local validation of user attributes before any request is sent
- Service account, static token and emulator credentials
- Configurable environment prefixes
"""

from importlib.metadata import PackageNotFoundError, version

from .config import ID_TOOLKIT_URL, IdentityToolkitSettings
from .credentials import (
    BaseCredentials,
    EmulatorCredentials,
    ServiceAccountCredentials,
    StaticTokenCredentials,
)
from .exceptions import (
    CreateUserError,
    CredentialsError,
    IdentityToolkitError,
    InvalidArgumentError,
    ListUsersError,
    SetCustomClaimsError,
    UpdateUserError,
    UserManagerError,
)
from .http_client import HTTPClient, HTTPResponse
from .models import UserInfo, UserMetadata, UserRecord
from .user_manager import UserManager

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("idtoolkit-auth")
except PackageNotFoundError:
    # Package is not installed, fallback for development
    __version__ = "0.0.0+dev"

__all__ = [
    # Configuration
    "ID_TOOLKIT_URL",
    "IdentityToolkitSettings",
    # Credentials
    "BaseCredentials",
    "EmulatorCredentials",
    "ServiceAccountCredentials",
    "StaticTokenCredentials",
    # HTTP
    "HTTPClient",
    "HTTPResponse",
    # User management
    "UserManager",
    "UserRecord",
    "UserInfo",
    "UserMetadata",
    # Errors
    "IdentityToolkitError",
    "InvalidArgumentError",
    "CredentialsError",
    "UserManagerError",
    "CreateUserError",
    "UpdateUserError",
    "ListUsersError",
    "SetCustomClaimsError",
    # Version
    "__version__",
]
