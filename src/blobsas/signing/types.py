"""
Type definitions for Service SAS signing

This module provides the enumerations, permission flag set and data classes
that make up the inputs and outputs of a blob Service SAS signing operation.
"""

from datetime import datetime
from enum import Enum, IntFlag
from typing import Dict, Iterable, Optional, Tuple, Union, Callable, Any
from dataclasses import dataclass, field

from ..exceptions import BlobSASError


class Permission(IntFlag):
    """
    Capabilities that can be granted by a Service SAS.

    Members combine with ``|`` and are tested with ``in``. The wire
    representation comes from ``canonical_string()``, which follows
    PERMISSION_ORDER rather than bit order.
    """
    READ = 1 << 0
    WRITE = 1 << 1
    DELETE = 1 << 2
    LIST = 1 << 3
    ADD = 1 << 4
    CREATE = 1 << 5
    UPDATE = 1 << 6
    PROCESS = 1 << 7
    DELETE_VERSION = 1 << 8
    PERMANENT_DELETE = 1 << 9
    TAGS = 1 << 10
    MOVE = 1 << 11
    EXECUTE = 1 << 12
    OWNERSHIP = 1 << 13
    PERMISSION_MANAGEMENT = 1 << 14
    IMMUTABILITY_POLICY = 1 << 15

    def canonical_string(self) -> str:
        """
        Serialize the set bits to their SAS letters.

        Returns:
            str: Letters of the set capabilities in canonical order, or an
            empty string when no capability is set
        """
        return "".join(letter for flag, letter in PERMISSION_ORDER if flag in self)

    @classmethod
    def none(cls) -> 'Permission':
        """Return the empty permission set."""
        return cls(0)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'Permission':
        """
        Build a permission set from capability names.

        Args:
            names: Names such as "read" or "delete_version" (case-insensitive)

        Returns:
            Permission: Union of the named capabilities

        Raises:
            ValueError: If a name does not match any capability
        """
        result = cls(0)
        for name in names:
            key = name.strip().upper().replace("-", "_")
            try:
                result |= cls[key]
            except KeyError:
                raise ValueError(f"Unknown permission name: {name}")
        return result


# Order of letters in the signed permission string. PROCESS and
# PERMISSION_MANAGEMENT share "p".
PERMISSION_ORDER: Tuple[Tuple[Permission, str], ...] = (
    (Permission.READ, "r"),
    (Permission.WRITE, "w"),
    (Permission.DELETE, "d"),
    (Permission.LIST, "l"),
    (Permission.ADD, "a"),
    (Permission.CREATE, "c"),
    (Permission.UPDATE, "u"),
    (Permission.PROCESS, "p"),
    (Permission.DELETE_VERSION, "x"),
    (Permission.PERMANENT_DELETE, "y"),
    (Permission.TAGS, "t"),
    (Permission.MOVE, "m"),
    (Permission.EXECUTE, "e"),
    (Permission.OWNERSHIP, "o"),
    (Permission.PERMISSION_MANAGEMENT, "p"),
    (Permission.IMMUTABILITY_POLICY, "i"),
)


class Resource(str, Enum):
    """Signed resource kinds (``sr``)"""
    BLOB = "b"
    CONTAINER = "c"
    FILE = "f"
    QUEUE = "q"
    TABLE = "t"


class HttpProtocol(str, Enum):
    """Protocols a SAS may be used over (``spr``)"""
    HTTPS_ONLY = "https"
    HTTPS_AND_HTTP = "https,http"


class ServiceVersion(str, Enum):
    """Storage service versions (``sv``)"""
    V2025_01_05 = "2025-01-05"
    V2024_11_04 = "2024-11-04"
    V2022_11_02 = "2022-11-02"
    V2020_04_08 = "2020-04-08"
    V2018_03_28 = "2018-03-28"


DEFAULT_SERVICE_VERSION = ServiceVersion.V2024_11_04

# Timestamps are datetimes (naive means UTC) or Unix epoch seconds
Timestamp = Union[datetime, int, float]
Clock = Callable[[], datetime]


@dataclass(frozen=True)
class ResponseHeaders:
    """
    Response header overrides carried by a SAS

    Attributes:
        cache_control: Cache-Control override (rscc)
        content_disposition: Content-Disposition override (rscd)
        content_encoding: Content-Encoding override (rsce)
        content_language: Content-Language override (rscl)
        content_type: Content-Type override (rsct)
    """
    cache_control: Optional[str] = None
    content_disposition: Optional[str] = None
    content_encoding: Optional[str] = None
    content_language: Optional[str] = None
    content_type: Optional[str] = None

    def is_empty(self) -> bool:
        """Return True when no override is set."""
        return all(
            value is None for value in (
                self.cache_control,
                self.content_disposition,
                self.content_encoding,
                self.content_language,
                self.content_type,
            )
        )


@dataclass(frozen=True)
class SigningConfiguration:
    """
    Storage account credentials used for signing

    Attributes:
        account_name: Storage account name
        account_key: Base64-encoded account key, decoded only when signing
    """
    account_name: str
    account_key: str = field(repr=False)


@dataclass(frozen=True)
class ServiceSASParameters:
    """
    Inputs to a single Service SAS signing operation

    Attributes:
        permissions: Capabilities granted by the token
        expiry: Instant after which the token is rejected
        resource: Signed resource kind
        start: Optional instant before which the token is rejected
        identifier: Optional stored access policy identifier
        ip_range: Optional allowed client IP or IP range
        protocol: Allowed protocols
        version: Service version governing the string-to-sign layout
        response_headers: Optional response header overrides
    """
    permissions: Permission
    expiry: Timestamp
    resource: Resource = Resource.BLOB
    start: Optional[Timestamp] = None
    identifier: Optional[str] = None
    ip_range: Optional[str] = None
    protocol: HttpProtocol = HttpProtocol.HTTPS_ONLY
    version: ServiceVersion = DEFAULT_SERVICE_VERSION
    response_headers: Optional[ResponseHeaders] = None


@dataclass(frozen=True)
class SignedBlobURL:
    """
    Result of signing a blob URL

    Attributes:
        url: Complete signed URL
        base_url: URL without the SAS query string
        query_string: Encoded SAS query string (without leading ``?``)
        expiry: Expiry of the token as written to ``se``
    """
    url: str
    base_url: str
    query_string: str
    expiry: str

    def __str__(self) -> str:
        return self.url


class SigningError(BlobSASError):
    """
    Error class for signing operations

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)
        self.code = code

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"

    def __repr__(self) -> str:
        return f"SigningError(message='{self.message}', code='{self.code}', details={self.details})"


class SigningErrorCodes:
    """Standard error codes for signing operations"""

    # Parameter errors
    INVALID_PERMISSIONS = "INVALID_PERMISSIONS"
    INVALID_EXPIRY = "INVALID_EXPIRY"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"

    # Credential errors
    INVALID_KEY = "INVALID_KEY"

    # Output errors
    INVALID_URL = "INVALID_URL"

    # Anything unexpected at the signer boundary
    SIGNING_FAILED = "SIGNING_FAILED"


# Ordered (name, value) query parameters
QueryItems = Tuple[Tuple[str, str], ...]
