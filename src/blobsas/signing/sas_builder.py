"""
Builder for Service SAS signing parameters

This module provides a fluent builder for ServiceSASParameters so callers
can assemble optional fields step by step.
"""

from datetime import timedelta
from typing import Optional

from .types import (
    Permission,
    Resource,
    ResponseHeaders,
    ServiceSASParameters,
    ServiceVersion,
    HttpProtocol,
    SigningError,
    SigningErrorCodes,
    Timestamp,
    DEFAULT_SERVICE_VERSION,
)
from .utils import to_utc_datetime, utc_now


class SASParametersBuilder:
    """
    Builder for creating Service SAS parameters with fluent API
    """

    def __init__(self):
        self._permissions: Permission = Permission(0)
        self._expiry: Optional[Timestamp] = None
        self._start: Optional[Timestamp] = None
        self._resource: Resource = Resource.BLOB
        self._identifier: Optional[str] = None
        self._ip_range: Optional[str] = None
        self._protocol: HttpProtocol = HttpProtocol.HTTPS_ONLY
        self._version: ServiceVersion = DEFAULT_SERVICE_VERSION
        self._headers = {}

    def permissions(self, permissions: Permission) -> 'SASParametersBuilder':
        """
        Replace the permission set.

        Args:
            permissions: Capabilities to grant

        Returns:
            SASParametersBuilder: Self for method chaining
        """
        self._permissions = permissions
        return self

    def add_permission(self, permission: Permission) -> 'SASParametersBuilder':
        """
        Add capabilities to the permission set.

        Args:
            permission: Capabilities to add

        Returns:
            SASParametersBuilder: Self for method chaining
        """
        self._permissions |= permission
        return self

    def start(self, start: Optional[Timestamp]) -> 'SASParametersBuilder':
        """Set the token start (None clears it)."""
        self._start = start
        return self

    def expiry(self, expiry: Timestamp) -> 'SASParametersBuilder':
        """Set the token expiry."""
        self._expiry = expiry
        return self

    def expires_in(self, seconds: float, now: Optional[Timestamp] = None) -> 'SASParametersBuilder':
        """
        Set the expiry relative to a reference time.

        Args:
            seconds: Validity period in seconds
            now: Reference time (current UTC time if None)

        Returns:
            SASParametersBuilder: Self for method chaining
        """
        reference = to_utc_datetime(now) if now is not None else utc_now()
        self._expiry = reference + timedelta(seconds=seconds)
        return self

    def resource(self, resource: Resource) -> 'SASParametersBuilder':
        self._resource = resource
        return self

    def identifier(self, identifier: Optional[str]) -> 'SASParametersBuilder':
        """Set the stored access policy identifier."""
        self._identifier = identifier
        return self

    def ip_range(self, ip_range: Optional[str]) -> 'SASParametersBuilder':
        """Set the allowed IP address or range, e.g. ``168.1.5.60-168.1.5.70``."""
        self._ip_range = ip_range
        return self

    def protocol(self, protocol: HttpProtocol) -> 'SASParametersBuilder':
        self._protocol = protocol
        return self

    def version(self, version: ServiceVersion) -> 'SASParametersBuilder':
        self._version = version
        return self

    def response_headers(self, headers: Optional[ResponseHeaders]) -> 'SASParametersBuilder':
        """
        Replace all response header overrides.

        Args:
            headers: Overrides, or None to clear them

        Returns:
            SASParametersBuilder: Self for method chaining
        """
        self._headers = {}
        if headers is not None:
            self._headers = {
                'cache_control': headers.cache_control,
                'content_disposition': headers.content_disposition,
                'content_encoding': headers.content_encoding,
                'content_language': headers.content_language,
                'content_type': headers.content_type,
            }
        return self

    def cache_control(self, value: str) -> 'SASParametersBuilder':
        self._headers['cache_control'] = value
        return self

    def content_disposition(self, value: str) -> 'SASParametersBuilder':
        self._headers['content_disposition'] = value
        return self

    def content_encoding(self, value: str) -> 'SASParametersBuilder':
        self._headers['content_encoding'] = value
        return self

    def content_language(self, value: str) -> 'SASParametersBuilder':
        self._headers['content_language'] = value
        return self

    def content_type(self, value: str) -> 'SASParametersBuilder':
        self._headers['content_type'] = value
        return self

    def build(self) -> ServiceSASParameters:
        """
        Build the signing parameters.

        Permissions and expiry are checked against the clock by the signer,
        not here.

        Returns:
            ServiceSASParameters: Immutable parameters

        Raises:
            SigningError: If no expiry was set
        """
        if self._expiry is None:
            raise SigningError(
                "Expiry is required",
                SigningErrorCodes.INVALID_EXPIRY
            )

        headers = ResponseHeaders(**self._headers)

        return ServiceSASParameters(
            permissions=self._permissions,
            expiry=self._expiry,
            resource=self._resource,
            start=self._start,
            identifier=self._identifier,
            ip_range=self._ip_range,
            protocol=self._protocol,
            version=self._version,
            response_headers=None if headers.is_empty() else headers
        )


def create_sas_parameters() -> SASParametersBuilder:
    """
    Create a new Service SAS parameters builder.

    Returns:
        SASParametersBuilder: New builder instance
    """
    return SASParametersBuilder()
