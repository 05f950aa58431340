"""Authenticated HTTP client for the identity toolkit REST API."""

from collections.abc import Generator, Mapping
from typing import Any

import httpx
from pydantic import BaseModel, Field

from .credentials import BaseCredentials

USER_AGENT = "idtoolkit-auth-python"
DEFAULT_TIMEOUT_SECONDS = 5.0


class HTTPResponse(BaseModel):
    """
    Response returned by HTTPClient.

    Only the status and decoded body are kept; the body is None when the
    server returned no content.
    """

    status_code: int = Field(..., description="HTTP status code")
    body: Any = Field(None, description="Decoded JSON body")

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300


class CredentialsAuth(httpx.Auth):
    """httpx auth flow that attaches a bearer token from credentials."""

    def __init__(self, credentials: BaseCredentials):
        self.credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.credentials.get_access_token()}"
        yield request


class HTTPClient:
    """
    Signed HTTP client bound to a base URL.

    Transport errors (httpx.HTTPError) and undecodable bodies propagate to
    the caller unchanged. Non-2xx responses are returned, not raised, so
    callers can inspect the body.

    Example usage:
        client = HTTPClient("https://identitytoolkit.googleapis.com/v1/", credentials)
        response = client.post("projects/my-project/accounts:lookup", {"localId": ["u1"]})
        if response.success:
            users = response.body.get("users", [])
    """

    def __init__(
        self,
        base_url: str,
        credentials: BaseCredentials,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            base_url: URL every request path is resolved against
            credentials: Credentials used to sign each request
            timeout: Request timeout in seconds (5 seconds if None)
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url
        self.credentials = credentials
        self._client = httpx.Client(
            base_url=base_url,
            auth=CredentialsAuth(credentials),
            headers={"User-Agent": USER_AGENT},
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS,
            transport=transport,
        )

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> HTTPResponse:
        """
        Send a GET request.

        Args:
            path: Path relative to the base URL
            params: Query parameters

        Returns:
            HTTPResponse with status and decoded body
        """
        response = self._client.get(path, params=params)
        return self._to_response(response)

    def post(self, path: str, payload: Mapping[str, Any] | None = None) -> HTTPResponse:
        """
        Send a POST request with a JSON body.

        Args:
            path: Path relative to the base URL
            payload: JSON body

        Returns:
            HTTPResponse with status and decoded body
        """
        response = self._client.post(path, json=payload)
        return self._to_response(response)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _to_response(response: httpx.Response) -> HTTPResponse:
        body = response.json() if response.content else None
        return HTTPResponse(status_code=response.status_code, body=body)
