"""Identity toolkit models."""

from .token import GOOGLE_TOKEN_URI, OAuthTokenResponse, ServiceAccountInfo
from .user import UserInfo, UserMetadata, UserRecord

__all__ = [
    # Credential models
    "GOOGLE_TOKEN_URI",
    "OAuthTokenResponse",
    "ServiceAccountInfo",
    # User models
    "UserInfo",
    "UserMetadata",
    "UserRecord",
]
