"""Tests for credential implementations."""

from urllib.parse import parse_qs

import httpx
import jwt
import pytest

from idtoolkit_auth import (
    CredentialsError,
    EmulatorCredentials,
    ServiceAccountCredentials,
    StaticTokenCredentials,
)
from idtoolkit_auth.credentials.service_account import JWT_BEARER_GRANT_TYPE


def token_endpoint(sent, status_code=200, expires_in=3600):
    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"error": "invalid_grant"})
        return httpx.Response(
            200,
            json={"access_token": f"token-{len(sent)}", "token_type": "Bearer", "expires_in": expires_in},
        )

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_static_token():
    assert StaticTokenCredentials("abc").get_access_token() == "abc"
    with pytest.raises(ValueError):
        StaticTokenCredentials("")


def test_emulator_token():
    assert EmulatorCredentials().get_access_token() == "owner"


class TestServiceAccountCredentials:
    def test_exchanges_signed_assertion(self, service_account_info, rsa_private_key_pem):
        sent = []
        credentials = ServiceAccountCredentials(
            service_account_info, http_client=token_endpoint(sent)
        )

        assert credentials.get_access_token() == "token-1"

        (request,) = sent
        assert str(request.url) == service_account_info["token_uri"]
        form = parse_qs(request.content.decode())
        assert form["grant_type"] == [JWT_BEARER_GRANT_TYPE]

        assertion = form["assertion"][0]
        assert jwt.get_unverified_header(assertion)["kid"] == "key-1"
        claims = jwt.decode(assertion, options={"verify_signature": False})
        assert claims["iss"] == service_account_info["client_email"]
        assert claims["aud"] == service_account_info["token_uri"]
        assert "https://www.googleapis.com/auth/identitytoolkit" in claims["scope"].split()
        assert claims["exp"] - claims["iat"] == 3600

    def test_caches_token_until_expiry(self, service_account_info):
        sent = []
        credentials = ServiceAccountCredentials(
            service_account_info, http_client=token_endpoint(sent)
        )

        assert credentials.get_access_token() == "token-1"
        assert credentials.get_access_token() == "token-1"
        assert len(sent) == 1

    def test_refreshes_token_near_expiry(self, service_account_info):
        sent = []
        credentials = ServiceAccountCredentials(
            service_account_info, http_client=token_endpoint(sent, expires_in=30)
        )

        assert credentials.get_access_token() == "token-1"
        assert credentials.get_access_token() == "token-2"

    def test_rejected_exchange_raises(self, service_account_info):
        credentials = ServiceAccountCredentials(
            service_account_info, http_client=token_endpoint([], status_code=400)
        )

        with pytest.raises(CredentialsError, match="400"):
            credentials.get_access_token()

    def test_from_file(self, service_account_file):
        credentials = ServiceAccountCredentials.from_file(service_account_file)

        assert credentials.project_id == "test-project"
        assert credentials.service_account_email == "admin@test-project.iam.gserviceaccount.com"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CredentialsError):
            ServiceAccountCredentials.from_file(tmp_path / "missing.json")

    def test_wrong_type_raises(self, service_account_info):
        with pytest.raises(CredentialsError, match="service_account"):
            ServiceAccountCredentials({**service_account_info, "type": "authorized_user"})

    def test_missing_fields_raise(self):
        with pytest.raises(CredentialsError):
            ServiceAccountCredentials({"type": "service_account"})

    def test_bad_private_key_raises(self, service_account_info):
        credentials = ServiceAccountCredentials(
            {**service_account_info, "private_key": "not a key"},
            http_client=token_endpoint([]),
        )

        with pytest.raises(CredentialsError):
            credentials.get_access_token()
