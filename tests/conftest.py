"""Shared test fixtures and configuration."""

import json
import os
from unittest.mock import MagicMock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from idtoolkit_auth import (
    HTTPResponse,
    IdentityToolkitSettings,
    StaticTokenCredentials,
    UserManager,
)

PROJECT_ID = "test-project"


def make_response(body=None, status_code: int = 200) -> HTTPResponse:
    """Build an HTTPResponse as returned by HTTPClient."""
    return HTTPResponse(status_code=status_code, body=body)


@pytest.fixture
def settings() -> IdentityToolkitSettings:
    """Create test settings."""
    return IdentityToolkitSettings(
        project_id=PROJECT_ID,
        access_token="test-access-token",
        timeout=10,
    )


@pytest.fixture
def credentials() -> StaticTokenCredentials:
    """Create static token credentials."""
    return StaticTokenCredentials("test-access-token")


@pytest.fixture
def mock_http_client():
    """Create a mock HTTP client with no canned responses."""
    client = MagicMock()
    client.get = MagicMock(return_value=make_response({}))
    client.post = MagicMock(return_value=make_response({}))
    return client


@pytest.fixture
def mock_logger():
    """Create a mock structured logger."""
    return MagicMock()


@pytest.fixture
def user_manager(credentials, mock_http_client, mock_logger) -> UserManager:
    """Create a user manager bound to the mock HTTP client."""
    return UserManager(
        PROJECT_ID,
        credentials,
        http_client=mock_http_client,
        logger=mock_logger,
    )


@pytest.fixture
def sample_user() -> dict:
    """Decoded user object as returned by accounts:lookup."""
    return {
        "localId": "u1",
        "email": "jane@example.com",
        "emailVerified": True,
        "displayName": "Jane Doe",
        "phoneNumber": "+15551234567",
        "photoUrl": "https://example.com/jane.png",
        "disabled": False,
        "customAttributes": '{"admin": true}',
        "validSince": "1700000000",
        "createdAt": "1699999999000",
        "lastLoginAt": "1700000100000",
        "lastRefreshAt": "2023-11-14T22:15:00.000Z",
        "providerUserInfo": [
            {
                "providerId": "password",
                "rawId": "jane@example.com",
                "email": "jane@example.com",
                "displayName": "Jane Doe",
            }
        ],
    }


@pytest.fixture(scope="session")
def rsa_private_key_pem() -> str:
    """Generate a throwaway RSA private key in PEM format."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def service_account_info(rsa_private_key_pem: str) -> dict:
    """Create service account key file contents."""
    return {
        "type": "service_account",
        "project_id": PROJECT_ID,
        "private_key_id": "key-1",
        "private_key": rsa_private_key_pem,
        "client_email": "admin@test-project.iam.gserviceaccount.com",
        "token_uri": "https://oauth2.example.com/token",
    }


@pytest.fixture
def service_account_file(tmp_path, service_account_info: dict):
    """Write service account info to a temporary key file."""
    path = tmp_path / "service-account.json"
    path.write_text(json.dumps(service_account_info), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
