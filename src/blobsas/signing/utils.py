"""
Utility functions for Service SAS signing

This module provides timestamp handling, account key decoding, the
HMAC-SHA256 primitive and the encodings used when placing values in a
SAS query string.
"""

import base64
import binascii
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from cryptography.hazmat.primitives import hashes, hmac

from .types import (
    SigningError,
    SigningErrorCodes,
    Timestamp,
)


ISO8601_FORMAT = '%Y-%m-%dT%H:%M:%SZ'

# Characters left literal in query values besides the unreserved set
QUERY_SAFE_CHARS = ':,'

_SIGNATURE_ESCAPES = str.maketrans({'+': '%2B', '/': '%2F', '=': '%3D'})


def utc_now() -> datetime:
    """
    Get the current time.

    Returns:
        datetime: Timezone-aware current UTC time
    """
    return datetime.now(timezone.utc)


def to_utc_datetime(value: Timestamp) -> datetime:
    """
    Normalize a timestamp to an aware UTC datetime.

    Naive datetimes are taken to already be in UTC. Integers and floats are
    Unix epoch seconds.

    Args:
        value: Datetime or epoch seconds

    Returns:
        datetime: Aware datetime in UTC

    Raises:
        SigningError: If the value is not a supported timestamp
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise SigningError(
                f"Timestamp out of range: {value}",
                SigningErrorCodes.INVALID_TIMESTAMP,
                {"timestamp": value, "original_error": str(e)}
            )

    raise SigningError(
        f"Unsupported timestamp type: {type(value).__name__}",
        SigningErrorCodes.INVALID_TIMESTAMP,
        {"timestamp_type": type(value).__name__}
    )


def format_iso8601_timestamp(value: Timestamp) -> str:
    """
    Format a timestamp for the string-to-sign and query string.

    Args:
        value: Datetime or epoch seconds

    Returns:
        str: UTC timestamp as ``yyyy-MM-ddTHH:mm:ssZ`` (sub-second part dropped)
    """
    return to_utc_datetime(value).strftime(ISO8601_FORMAT)


def format_optional_timestamp(value: Optional[Timestamp]) -> str:
    """Format a timestamp, mapping None to an empty string."""
    if value is None:
        return ''
    return format_iso8601_timestamp(value)


def decode_account_key(account_key: str) -> bytes:
    """
    Decode a base64 account key.

    Args:
        account_key: Base64-encoded account key

    Returns:
        bytes: Raw key material

    Raises:
        SigningError: If the key is not valid, padded base64 or is empty
    """
    if not isinstance(account_key, str):
        raise SigningError(
            "Account key must be a base64 string",
            SigningErrorCodes.INVALID_KEY,
            {"key_type": type(account_key).__name__}
        )

    try:
        key_bytes = base64.b64decode(account_key, validate=True)
    except (binascii.Error, ValueError):
        # The key itself must never reach the error details
        raise SigningError(
            "Account key is not valid base64",
            SigningErrorCodes.INVALID_KEY
        )

    if not key_bytes:
        raise SigningError(
            "Account key is empty",
            SigningErrorCodes.INVALID_KEY
        )

    return key_bytes


def hmac_sha256(key: bytes, message: str) -> bytes:
    """
    Compute HMAC-SHA256 over the UTF-8 bytes of a message.

    Args:
        key: Raw key material
        message: Message to authenticate

    Returns:
        bytes: 32-byte authentication code
    """
    mac = hmac.HMAC(key, hashes.SHA256())
    mac.update(message.encode('utf-8'))
    return mac.finalize()


def compute_signature(string_to_sign: str, account_key: str) -> bytes:
    """
    Sign a string-to-sign with a base64 account key.

    The key is decoded before any cryptographic work so that a malformed key
    fails with INVALID_KEY.

    Args:
        string_to_sign: Canonical string to sign
        account_key: Base64-encoded account key

    Returns:
        bytes: Raw HMAC-SHA256 signature

    Raises:
        SigningError: If the key is invalid
    """
    key_bytes = decode_account_key(account_key)
    return hmac_sha256(key_bytes, string_to_sign)


def encode_signature(signature: bytes) -> str:
    """
    Encode a raw signature for the ``sig`` query parameter.

    The base64 text is percent-encoded by substituting ``+``, ``/`` and ``=``
    only; the result is placed in the query string as-is.

    Args:
        signature: Raw signature bytes

    Returns:
        str: Query-safe base64 signature
    """
    return base64.b64encode(signature).decode('ascii').translate(_SIGNATURE_ESCAPES)


def encode_query_value(value: str) -> str:
    """
    Percent-encode a query parameter value.

    Args:
        value: Raw value

    Returns:
        str: Encoded value
    """
    return quote(value, safe=QUERY_SAFE_CHARS)


def encode_url_path(path: str) -> str:
    """Percent-encode a URL path, keeping ``/`` separators."""
    return quote(path, safe='/')
