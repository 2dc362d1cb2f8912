"""
blobsas
Blob Service Shared Access Signature generation
"""

from .version import __version__
from .exceptions import (
    BlobSASError,
    ConfigError,
)
from .signing import (
    # Core signing functionality
    BlobSASSigner,
    create_signer,
    generate_blob_sas_url,
    # Types
    Permission,
    Resource,
    HttpProtocol,
    ServiceVersion,
    ResponseHeaders,
    SigningConfiguration,
    ServiceSASParameters,
    SignedBlobURL,
    SigningError,
    SigningErrorCodes,
    # Parameters builder
    SASParametersBuilder,
    create_sas_parameters,
    # String-to-sign
    build_string_to_sign,
)
from .config import (
    SASConfigManager,
    load_sas_config_from_json,
    load_sas_config_from_file,
    load_default_sas_config,
)

__all__ = [
    '__version__',
    # Exceptions
    'BlobSASError',
    'ConfigError',
    # Signing - Core
    'BlobSASSigner',
    'create_signer',
    'generate_blob_sas_url',
    # Signing - Types
    'Permission',
    'Resource',
    'HttpProtocol',
    'ServiceVersion',
    'ResponseHeaders',
    'SigningConfiguration',
    'ServiceSASParameters',
    'SignedBlobURL',
    'SigningError',
    'SigningErrorCodes',
    # Signing - Builder
    'SASParametersBuilder',
    'create_sas_parameters',
    'build_string_to_sign',
    # Configuration
    'SASConfigManager',
    'load_sas_config_from_json',
    'load_sas_config_from_file',
    'load_default_sas_config',
]
