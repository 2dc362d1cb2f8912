"""
blobsas - Service SAS signing module

Blob Service Shared Access Signature generation: string-to-sign
canonicalization, HMAC-SHA256 signing with the account key and signed URL
assembly.
"""

from .types import (
    Permission,
    PERMISSION_ORDER,
    Resource,
    HttpProtocol,
    ServiceVersion,
    DEFAULT_SERVICE_VERSION,
    ResponseHeaders,
    SigningConfiguration,
    ServiceSASParameters,
    SignedBlobURL,
    SigningError,
    SigningErrorCodes,
)

from .signer import (
    BlobSASSigner,
    create_signer,
    generate_blob_sas_url,
)

from .sas_builder import (
    SASParametersBuilder,
    create_sas_parameters,
)

from .string_to_sign import (
    StringToSignBuilder,
    build_string_to_sign,
    canonicalized_resource,
    count_string_to_sign_fields,
    supported_versions,
)

from .query import (
    QueryStringConstants,
    MANDATORY_PARAMETERS,
    OPTIONAL_PARAMETERS,
    build_query_items,
    encode_query_string,
    build_signed_url,
    blob_base_url,
)

from .utils import (
    compute_signature,
    encode_signature,
    decode_account_key,
    format_iso8601_timestamp,
    hmac_sha256,
    utc_now,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'BlobSASSigner',
    'create_signer',
    'generate_blob_sas_url',
    # Types
    'Permission',
    'PERMISSION_ORDER',
    'Resource',
    'HttpProtocol',
    'ServiceVersion',
    'DEFAULT_SERVICE_VERSION',
    'ResponseHeaders',
    'SigningConfiguration',
    'ServiceSASParameters',
    'SignedBlobURL',
    'SigningError',
    'SigningErrorCodes',
    # Parameters builder
    'SASParametersBuilder',
    'create_sas_parameters',
    # String-to-sign
    'StringToSignBuilder',
    'build_string_to_sign',
    'canonicalized_resource',
    'count_string_to_sign_fields',
    'supported_versions',
    # Query assembly
    'QueryStringConstants',
    'MANDATORY_PARAMETERS',
    'OPTIONAL_PARAMETERS',
    'build_query_items',
    'encode_query_string',
    'build_signed_url',
    'blob_base_url',
    # Utilities
    'compute_signature',
    'encode_signature',
    'decode_account_key',
    'format_iso8601_timestamp',
    'hmac_sha256',
    'utc_now',
]
