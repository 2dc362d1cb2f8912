"""
SAS query string assembly and signed URL construction
"""

from typing import List, Tuple
from urllib.parse import urlsplit

from requests.exceptions import InvalidURL
from requests.models import PreparedRequest

from .types import (
    QueryItems,
    ServiceSASParameters,
    SigningError,
    SigningErrorCodes,
)
from .utils import (
    encode_query_value,
    encode_url_path,
    format_iso8601_timestamp,
)


class QueryStringConstants:
    """Query parameter names understood by the storage service"""
    SIGNED_VERSION = 'sv'
    SIGNED_RESOURCE = 'sr'
    SIGNED_PERMISSION = 'sp'
    SIGNED_EXPIRY = 'se'
    SIGNED_PROTOCOL = 'spr'
    SIGNED_SIGNATURE = 'sig'
    SIGNED_START = 'st'
    SIGNED_IP = 'sip'
    SIGNED_IDENTIFIER = 'si'
    SIGNED_CACHE_CONTROL = 'rscc'
    SIGNED_CONTENT_DISPOSITION = 'rscd'
    SIGNED_CONTENT_ENCODING = 'rsce'
    SIGNED_CONTENT_LANGUAGE = 'rscl'
    SIGNED_CONTENT_TYPE = 'rsct'


MANDATORY_PARAMETERS = (
    QueryStringConstants.SIGNED_VERSION,
    QueryStringConstants.SIGNED_RESOURCE,
    QueryStringConstants.SIGNED_PERMISSION,
    QueryStringConstants.SIGNED_EXPIRY,
    QueryStringConstants.SIGNED_PROTOCOL,
    QueryStringConstants.SIGNED_SIGNATURE,
)

OPTIONAL_PARAMETERS = (
    QueryStringConstants.SIGNED_START,
    QueryStringConstants.SIGNED_IP,
    QueryStringConstants.SIGNED_IDENTIFIER,
    QueryStringConstants.SIGNED_CACHE_CONTROL,
    QueryStringConstants.SIGNED_CONTENT_DISPOSITION,
    QueryStringConstants.SIGNED_CONTENT_ENCODING,
    QueryStringConstants.SIGNED_CONTENT_LANGUAGE,
    QueryStringConstants.SIGNED_CONTENT_TYPE,
)

BLOB_ENDPOINT_SUFFIX = 'blob.core.windows.net'


def build_query_items(params: ServiceSASParameters, encoded_signature: str) -> QueryItems:
    """
    Build the ordered SAS query parameters.

    Values are raw except ``sig``, which is expected to be encoded already
    (see ``encode_signature``).

    Args:
        params: Signing parameters
        encoded_signature: Query-safe signature

    Returns:
        tuple: Ordered (name, value) pairs, mandatory parameters first
    """
    items: List[Tuple[str, str]] = [
        (QueryStringConstants.SIGNED_VERSION, params.version.value),
        (QueryStringConstants.SIGNED_RESOURCE, params.resource.value),
        (QueryStringConstants.SIGNED_PERMISSION, params.permissions.canonical_string()),
        (QueryStringConstants.SIGNED_EXPIRY, format_iso8601_timestamp(params.expiry)),
        (QueryStringConstants.SIGNED_PROTOCOL, params.protocol.value),
        (QueryStringConstants.SIGNED_SIGNATURE, encoded_signature),
    ]

    if params.start is not None:
        items.append((QueryStringConstants.SIGNED_START, format_iso8601_timestamp(params.start)))
    if params.ip_range is not None:
        items.append((QueryStringConstants.SIGNED_IP, params.ip_range))
    if params.identifier is not None:
        items.append((QueryStringConstants.SIGNED_IDENTIFIER, params.identifier))

    headers = params.response_headers
    if headers is not None:
        for name, value in (
            (QueryStringConstants.SIGNED_CACHE_CONTROL, headers.cache_control),
            (QueryStringConstants.SIGNED_CONTENT_DISPOSITION, headers.content_disposition),
            (QueryStringConstants.SIGNED_CONTENT_ENCODING, headers.content_encoding),
            (QueryStringConstants.SIGNED_CONTENT_LANGUAGE, headers.content_language),
            (QueryStringConstants.SIGNED_CONTENT_TYPE, headers.content_type),
        ):
            if value is not None:
                items.append((name, value))

    return tuple(items)


def encode_query_string(items: QueryItems) -> str:
    """
    Join query parameters into a query string.

    Args:
        items: Ordered (name, value) pairs

    Returns:
        str: ``name=value`` pairs joined by ``&``
    """
    parts = []
    for name, value in items:
        if name == QueryStringConstants.SIGNED_SIGNATURE:
            parts.append(f"{name}={value}")
        else:
            parts.append(f"{name}={encode_query_value(value)}")
    return '&'.join(parts)


def blob_base_url(account_name: str, container: str, blob: str) -> str:
    """
    Build the unsigned URL of a blob.

    Args:
        account_name: Storage account name
        container: Container name
        blob: Blob name

    Returns:
        str: ``https://{account}.blob.core.windows.net/{container}/{blob}``
    """
    path = encode_url_path(f"/{container}/{blob}")
    return f"https://{account_name}.{BLOB_ENDPOINT_SUFFIX}{path}"


def build_signed_url(account_name: str, container: str, blob: str, query_string: str) -> str:
    """
    Build the signed URL of a blob and check it still names that blob.

    URL preparation may reinterpret delimiters in the account name or remove
    dot segments from the path, so the prepared host and path must match
    what was signed.

    Args:
        account_name: Storage account name
        container: Container name
        blob: Blob name
        query_string: Encoded SAS query string

    Returns:
        str: Signed URL

    Raises:
        SigningError: If the result is not a well-formed URL for the blob
    """
    base_url = blob_base_url(account_name, container, blob)
    url = f"{base_url}?{query_string}"

    prepared = PreparedRequest()
    try:
        prepared.prepare_url(url, None)
    except InvalidURL as e:
        raise SigningError(
            f"Could not build a valid URL: {e}",
            SigningErrorCodes.INVALID_URL,
            {"base_url": base_url}
        )

    parts = urlsplit(prepared.url)
    expected_host = f"{account_name}.{BLOB_ENDPOINT_SUFFIX}".lower()
    expected_path = encode_url_path(f"/{container}/{blob}")

    if parts.hostname != expected_host:
        raise SigningError(
            f"Account name does not form the host {expected_host}",
            SigningErrorCodes.INVALID_URL,
            {"expected_host": expected_host, "host": parts.hostname}
        )

    if parts.path != expected_path:
        raise SigningError(
            "Blob path changed during URL preparation",
            SigningErrorCodes.INVALID_URL,
            {"expected_path": expected_path, "path": parts.path}
        )

    return prepared.url
