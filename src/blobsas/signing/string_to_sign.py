"""
String-to-sign construction for blob Service SAS

This module canonicalizes signing parameters into the newline-joined
string-to-sign whose field order is fixed by the service version.
"""

from typing import Callable, Dict, List, Optional

from .types import (
    ResponseHeaders,
    ServiceSASParameters,
    ServiceVersion,
    SigningError,
    SigningErrorCodes,
)
from .utils import (
    format_iso8601_timestamp,
    format_optional_timestamp,
)


FIELD_SEPARATOR = '\n'


def canonicalized_resource(account_name: str, container: str, blob: str) -> str:
    """
    Build the canonicalized resource path for a blob.

    Names are used verbatim; callers must match the service's
    canonicalization rules themselves.

    Args:
        account_name: Storage account name
        container: Container name
        blob: Blob name

    Returns:
        str: ``/blob/{account}/{container}/{blob}``
    """
    return f"/blob/{account_name}/{container}/{blob}"


class StringToSignBuilder:
    """
    String-to-sign builder for blob Service SAS
    """

    def __init__(
        self,
        params: ServiceSASParameters,
        account_name: str,
        container: str,
        blob: str
    ):
        """
        Initialize string-to-sign builder.

        Args:
            params: Signing parameters
            account_name: Storage account name
            container: Container name
            blob: Blob name
        """
        self.params = params
        self.resource_path = canonicalized_resource(account_name, container, blob)

    def build(self) -> str:
        """
        Build the string-to-sign for the parameters' service version.

        Returns:
            str: Newline-joined string-to-sign

        Raises:
            SigningError: If the version has no layout or a timestamp is invalid
        """
        layout = LAYOUTS.get(self.params.version)
        if layout is None:
            raise SigningError(
                f"No string-to-sign layout for service version {self.params.version.value}",
                SigningErrorCodes.UNSUPPORTED_VERSION,
                {
                    "version": self.params.version.value,
                    "supported_versions": [v.value for v in LAYOUTS],
                }
            )

        return FIELD_SEPARATOR.join(layout(self))

    def _fields_2024_11_04(self) -> List[str]:
        """
        Fields of the 2024-11-04 layout.

        Returns:
            list: Sixteen fields in signing order
        """
        params = self.params
        headers = params.response_headers

        return [
            params.permissions.canonical_string(),
            format_optional_timestamp(params.start),
            format_iso8601_timestamp(params.expiry),
            self.resource_path,
            params.identifier or '',
            params.ip_range or '',
            params.protocol.value,
            params.version.value,
            params.resource.value,
            '',  # signed snapshot time
            '',  # signed encryption scope
            _header_field(headers, 'cache_control'),
            _header_field(headers, 'content_disposition'),
            _header_field(headers, 'content_encoding'),
            _header_field(headers, 'content_language'),
            _header_field(headers, 'content_type'),
        ]


def _header_field(headers: Optional[ResponseHeaders], name: str) -> str:
    """Response header override by attribute name, or an empty field when unset."""
    if headers is None:
        return ''
    return getattr(headers, name) or ''


LAYOUTS: Dict[ServiceVersion, Callable[[StringToSignBuilder], List[str]]] = {
    ServiceVersion.V2024_11_04: StringToSignBuilder._fields_2024_11_04,
}


def build_string_to_sign(
    params: ServiceSASParameters,
    account_name: str,
    container: str,
    blob: str
) -> str:
    """
    Build the string-to-sign for a blob Service SAS.

    Args:
        params: Signing parameters
        account_name: Storage account name
        container: Container name
        blob: Blob name

    Returns:
        str: String-to-sign

    Raises:
        SigningError: If construction fails
    """
    builder = StringToSignBuilder(params, account_name, container, blob)
    return builder.build()


def supported_versions() -> List[ServiceVersion]:
    """Service versions with a registered string-to-sign layout."""
    return list(LAYOUTS)


def count_string_to_sign_fields(string_to_sign: str) -> int:
    """
    Count the fields of a string-to-sign.

    Args:
        string_to_sign: String-to-sign

    Returns:
        int: Number of newline-separated fields (empty fields included)
    """
    return len(string_to_sign.split(FIELD_SEPARATOR))
