"""Service account credentials.

Implements the OAuth 2.0 JWT bearer grant used by Google service accounts:
1. Sign a short-lived assertion with the service account's private key
2. Exchange it at the token endpoint for an access token
"""

import json
import threading
import time
from pathlib import Path
from typing import Any

import httpx
import jwt
from pydantic import ValidationError

from ..exceptions import CredentialsError
from ..models import OAuthTokenResponse, ServiceAccountInfo
from .base import BaseCredentials

SCOPES = (
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/datastore",
    "https://www.googleapis.com/auth/devstorage.read_write",
    "https://www.googleapis.com/auth/firebase",
    "https://www.googleapis.com/auth/identitytoolkit",
    "https://www.googleapis.com/auth/userinfo.email",
)

JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"

ASSERTION_LIFETIME_SECONDS = 3600
EXPIRY_MARGIN_SECONDS = 60


class ServiceAccountCredentials(BaseCredentials):
    """
    Credentials for a Google service account.

    Tokens are cached and refreshed shortly before they expire. The cache
    is guarded by a lock so one instance can be shared between threads.

    Example usage:
        credentials = ServiceAccountCredentials.from_file("service-account.json")
        token = credentials.get_access_token()
    """

    def __init__(
        self,
        info: dict[str, Any],
        scopes: tuple[str, ...] = SCOPES,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize service account credentials.

        Args:
            info: Parsed service account key file
            scopes: OAuth scopes requested for the access token
            http_client: Optional httpx client for the token exchange

        Raises:
            CredentialsError: If the key file is not a valid service account key
        """
        try:
            self.info = ServiceAccountInfo(**info)
        except ValidationError as e:
            raise CredentialsError(f"Invalid service account info: {e}") from e
        if self.info.type != "service_account":
            raise CredentialsError(
                f'Invalid service account info: type must be "service_account", got "{self.info.type}"'
            )

        self.scopes = scopes
        self._http_client = http_client
        self._lock = threading.Lock()
        self._token: str | None = None
        self._expires_at = 0.0

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> "ServiceAccountCredentials":
        """
        Load credentials from a service account JSON key file.

        Raises:
            CredentialsError: If the file cannot be read or parsed
        """
        try:
            info = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CredentialsError(f"Failed to load service account file {path}: {e}") from e
        return cls(info, **kwargs)

    @property
    def project_id(self) -> str | None:
        return self.info.project_id

    @property
    def service_account_email(self) -> str:
        return self.info.client_email

    def get_access_token(self) -> str:
        with self._lock:
            if self._token is None or time.time() >= self._expires_at - EXPIRY_MARGIN_SECONDS:
                token = self._fetch_token()
                self._token = token.access_token
                self._expires_at = time.time() + token.expires_in
            return self._token

    def _build_assertion(self) -> str:
        """
        Sign the JWT assertion presented to the token endpoint.

        Returns:
            RS256-signed JWT string
        """
        now = int(time.time())
        payload = {
            "iss": self.info.client_email,
            "scope": " ".join(self.scopes),
            "aud": self.info.token_uri,
            "iat": now,
            "exp": now + ASSERTION_LIFETIME_SECONDS,
        }
        headers = {"kid": self.info.private_key_id} if self.info.private_key_id else None

        try:
            return jwt.encode(payload, self.info.private_key, algorithm="RS256", headers=headers)
        except (ValueError, TypeError, jwt.PyJWTError) as e:
            raise CredentialsError(f"Failed to sign service account assertion: {e}") from e

    def _fetch_token(self) -> OAuthTokenResponse:
        """
        Exchange a signed assertion for an access token.

        Raises:
            CredentialsError: If the token endpoint rejects the assertion
        """
        data = {
            "grant_type": JWT_BEARER_GRANT_TYPE,
            "assertion": self._build_assertion(),
        }

        client = self._http_client or httpx.Client()
        try:
            response = client.post(
                self.info.token_uri,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            return OAuthTokenResponse(**response.json())
        except httpx.HTTPStatusError as e:
            raise CredentialsError(
                f"Token exchange failed with status {e.response.status_code}: {e.response.text}"
            ) from e
        except ValidationError as e:
            raise CredentialsError(f"Unexpected token response: {e}") from e
        finally:
            if self._http_client is None:
                client.close()
