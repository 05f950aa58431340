"""Credential and OAuth token models.

These are DTO models for service account files and the Google OAuth 2.0
token exchange.
"""

from pydantic import BaseModel, ConfigDict, Field

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class ServiceAccountInfo(BaseModel):
    """
    Service account key file contents.

    Only the fields needed to sign a token assertion are validated; the
    rest of the key file is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., description="Key type, must be 'service_account'")
    project_id: str | None = Field(None, description="Project the service account belongs to")
    private_key_id: str | None = Field(None, description="Id of the signing key")
    private_key: str = Field(..., description="PEM-encoded RSA private key")
    client_email: str = Field(..., description="Service account email")
    token_uri: str = Field(GOOGLE_TOKEN_URI, description="OAuth 2.0 token endpoint")


class OAuthTokenResponse(BaseModel):
    """
    OAuth 2.0 token endpoint response.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(3600, description="Token lifetime in seconds")
