"""Validators for user attributes.

Every validator is a pure function of its input. ``None`` means the
attribute was not provided and is returned unchanged, unless the caller
passes ``required=True``. Present but invalid values raise
``InvalidArgumentError``.
"""

import json
import re
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlsplit

from ..exceptions import InvalidArgumentError

MAX_UID_LENGTH = 128
MIN_PASSWORD_LENGTH = 6
MAX_BATCH_SIZE = 1000

_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+")
_PHONE_PATTERN = re.compile(r"\+[1-9]\d{0,14}")


def _missing(name: str, value: Any, required: bool) -> bool:
    if value is None:
        if required:
            raise InvalidArgumentError(f"{name} is required")
        return True
    return False


def validate_uid(uid: Any, required: bool = False) -> str | None:
    """
    Validate a user id.

    Args:
        uid: User id to check
        required: Raise if the uid is missing

    Returns:
        The uid, or None if absent

    Raises:
        InvalidArgumentError: If the uid is not a non-empty string of at most 128 characters
    """
    if _missing("uid", uid, required):
        return None
    if not isinstance(uid, str) or not uid or len(uid) > MAX_UID_LENGTH:
        raise InvalidArgumentError(
            f"Invalid uid: {uid!r}. uid must be a non-empty string with at most "
            f"{MAX_UID_LENGTH} characters."
        )
    return uid


def validate_display_name(display_name: Any, required: bool = False) -> str | None:
    """Validate a display name (non-empty string)."""
    if _missing("display_name", display_name, required):
        return None
    if not isinstance(display_name, str) or not display_name:
        raise InvalidArgumentError(
            f"Invalid display name: {display_name!r}. Display name must be a non-empty string."
        )
    return display_name


def validate_email(email: Any, required: bool = False) -> str | None:
    """
    Validate an email address.

    Only the basic ``local@domain`` shape is checked; the server performs
    the authoritative validation.
    """
    if _missing("email", email, required):
        return None
    if not isinstance(email, str) or not _EMAIL_PATTERN.fullmatch(email):
        raise InvalidArgumentError(f"Malformed email address string: {email!r}.")
    return email


def validate_phone_number(phone_number: Any, required: bool = False) -> str | None:
    """
    Validate an E.164 phone number.

    Args:
        phone_number: Phone number such as "+15551234567"
        required: Raise if the phone number is missing

    Returns:
        The phone number, or None if absent

    Raises:
        InvalidArgumentError: If the value is not "+" followed by up to 15 digits
    """
    if _missing("phone_number", phone_number, required):
        return None
    if not isinstance(phone_number, str) or not _PHONE_PATTERN.fullmatch(phone_number):
        raise InvalidArgumentError(
            f"Invalid phone number: {phone_number!r}. Phone number must be a valid, "
            "E.164 compliant identifier."
        )
    return phone_number


def validate_photo_url(photo_url: Any, required: bool = False) -> str | None:
    """Validate that a photo URL is absolute (has a scheme and a host)."""
    if _missing("photo_url", photo_url, required):
        return None
    if not isinstance(photo_url, str) or not photo_url:
        raise InvalidArgumentError(f"Invalid photo URL: {photo_url!r}.")
    try:
        parsed = urlsplit(photo_url)
    except ValueError as e:
        raise InvalidArgumentError(f"Malformed photo URL: {photo_url!r}.") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgumentError(f"Malformed photo URL: {photo_url!r}.")
    return photo_url


def validate_password(password: Any, required: bool = False) -> str | None:
    """Validate a raw password (string of at least 6 characters)."""
    if _missing("password", password, required):
        return None
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidArgumentError(
            f"Invalid password. Password must be a string at least "
            f"{MIN_PASSWORD_LENGTH} characters long."
        )
    return password


def to_boolean(value: Any) -> bool | None:
    """Normalize a truthy/falsy value to a strict bool, keeping None as None."""
    if value is None:
        return None
    return bool(value)


def validate_custom_claims(claims: Any) -> str:
    """
    Serialize custom claims to a JSON string.

    No schema is enforced; any JSON-serializable value is accepted.

    Raises:
        InvalidArgumentError: If the claims cannot be serialized to JSON
    """
    try:
        return json.dumps(claims, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Custom claims must be JSON serializable: {e}") from e


def validate_uids(uids: Any) -> list[str]:
    """
    Validate a batch of user ids.

    Args:
        uids: Sequence of user ids

    Returns:
        List of validated uids, in the given order

    Raises:
        InvalidArgumentError: If the batch is empty, too large, or any uid is invalid
    """
    if isinstance(uids, str) or not isinstance(uids, Sequence):
        raise InvalidArgumentError(f"uids must be a sequence of strings, got {type(uids).__name__}.")
    if not uids:
        raise InvalidArgumentError("uids must contain at least one uid.")
    if len(uids) > MAX_BATCH_SIZE:
        raise InvalidArgumentError(
            f"uids must not contain more than {MAX_BATCH_SIZE} elements."
        )
    return [validate_uid(uid, required=True) for uid in uids]


def compact(**fields: Any) -> dict[str, Any]:
    """Build a payload from keyword fields, dropping those whose value is None."""
    return {key: value for key, value in fields.items() if value is not None}
