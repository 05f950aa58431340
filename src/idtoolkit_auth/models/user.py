"""User record models.

These are read-only views over user objects returned by the identity
toolkit. They are built from decoded response payloads only.
"""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class UserInfo(BaseModel):
    """Identity provider data linked to a user account."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    uid: str | None = Field(None, alias="rawId", description="Provider-specific user id")
    provider_id: str = Field(..., alias="providerId", description="Provider id, e.g. 'password'")
    email: str | None = None
    display_name: str | None = Field(None, alias="displayName")
    phone_number: str | None = Field(None, alias="phoneNumber")
    photo_url: str | None = Field(None, alias="photoUrl")


class UserMetadata(BaseModel):
    """Account timestamps. Epoch values are in milliseconds."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    creation_timestamp: int | None = Field(None, alias="createdAt")
    last_sign_in_timestamp: int | None = Field(None, alias="lastLoginAt")
    last_refresh_timestamp: datetime | None = Field(None, alias="lastRefreshAt")


class UserRecord(BaseModel):
    """
    A user account as stored by the identity toolkit.

    Example usage:
        record = UserRecord.from_response({"localId": "u1", "email": "a@b.com"})
        record.uid  # "u1"
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    uid: str = Field(..., alias="localId", description="User id")
    email: str | None = None
    email_verified: bool = Field(False, alias="emailVerified")
    display_name: str | None = Field(None, alias="displayName")
    phone_number: str | None = Field(None, alias="phoneNumber")
    photo_url: str | None = Field(None, alias="photoUrl")
    disabled: bool = False
    tenant_id: str | None = Field(None, alias="tenantId")
    custom_claims: Any = Field(None, alias="customAttributes", description="Decoded custom claims")
    tokens_valid_after_timestamp: int | None = Field(
        None,
        alias="validSince",
        description="Time before which issued ID tokens are invalid (ms since epoch)",
    )
    user_metadata: UserMetadata = Field(default_factory=UserMetadata)
    provider_data: list[UserInfo] = Field(default_factory=list, alias="providerUserInfo")

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "UserRecord":
        """
        Build a record from one decoded user object.

        Args:
            data: User mapping from an identity toolkit response

        Returns:
            UserRecord view over the mapping
        """
        return cls.model_validate(dict(data))

    @model_validator(mode="before")
    @classmethod
    def _collect_metadata(cls, data: Any) -> Any:
        # Timestamps arrive as top-level fields of the user object
        if isinstance(data, dict) and "user_metadata" not in data:
            metadata = {
                key: data[key]
                for key in ("createdAt", "lastLoginAt", "lastRefreshAt")
                if key in data
            }
            data = {**data, "user_metadata": metadata}
        return data

    @field_validator("custom_claims", mode="before")
    @classmethod
    def _parse_custom_claims(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = json.loads(value) if value else None
        return value or None

    @field_validator("tokens_valid_after_timestamp", mode="before")
    @classmethod
    def _seconds_to_millis(cls, value: Any) -> Any:
        if value is None:
            return None
        return int(value) * 1000
