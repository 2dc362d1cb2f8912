"""
Blob Service SAS signer

This module provides the signer that validates signing parameters, builds the
string-to-sign, computes the HMAC-SHA256 signature with the account key and
assembles the signed blob URL.
"""

import logging
from typing import Optional

from .types import (
    Clock,
    Permission,
    ResponseHeaders,
    Resource,
    ServiceSASParameters,
    SignedBlobURL,
    SigningConfiguration,
    SigningError,
    SigningErrorCodes,
    Timestamp,
    DEFAULT_SERVICE_VERSION,
    HttpProtocol,
)
from .utils import (
    compute_signature,
    encode_signature,
    format_iso8601_timestamp,
    to_utc_datetime,
    utc_now,
)
from .string_to_sign import build_string_to_sign
from .query import (
    build_query_items,
    build_signed_url,
    encode_query_string,
)

logger = logging.getLogger(__name__)


class BlobSASSigner:
    """
    Service SAS signer for individual blobs

    A signer holds only immutable credentials and a clock, so one instance can
    be shared between threads.
    """

    def __init__(self, config: SigningConfiguration, clock: Optional[Clock] = None):
        """
        Initialize the signer.

        Args:
            config: Account credentials
            clock: Optional callable returning the current UTC time, used for
                expiry validation
        """
        self.config = config
        self.clock = clock or utc_now

    def signed_url(
        self,
        container: str,
        blob: str,
        permissions: Permission,
        expiry: Timestamp,
        start: Optional[Timestamp] = None,
        response_headers: Optional[ResponseHeaders] = None
    ) -> SignedBlobURL:
        """
        Sign a URL granting access to one blob over HTTPS.

        Args:
            container: Container name
            blob: Blob name
            permissions: Capabilities to grant
            expiry: Token expiry
            start: Optional token start
            response_headers: Optional response header overrides

        Returns:
            SignedBlobURL: Signed URL

        Raises:
            SigningError: If validation, signing or URL construction fails
        """
        params = ServiceSASParameters(
            permissions=permissions,
            expiry=expiry,
            resource=Resource.BLOB,
            start=start,
            identifier=None,
            ip_range=None,
            protocol=HttpProtocol.HTTPS_ONLY,
            version=DEFAULT_SERVICE_VERSION,
            response_headers=response_headers
        )
        return self.sign_parameters(params, container, blob)

    def sign_parameters(
        self,
        params: ServiceSASParameters,
        container: str,
        blob: str
    ) -> SignedBlobURL:
        """
        Sign a blob URL from a full parameter set.

        Args:
            params: Signing parameters
            container: Container name
            blob: Blob name

        Returns:
            SignedBlobURL: Signed URL

        Raises:
            SigningError: If validation, signing or URL construction fails
        """
        try:
            self.validate(params)

            string_to_sign = build_string_to_sign(
                params, self.config.account_name, container, blob
            )
            signature = encode_signature(
                compute_signature(string_to_sign, self.config.account_key)
            )

            query_string = encode_query_string(build_query_items(params, signature))
            url = build_signed_url(self.config.account_name, container, blob, query_string)
            base_url = url.partition('?')[0]

            logger.debug(
                f"Signed /{container}/{blob} for account {self.config.account_name} "
                f"(sp={params.permissions.canonical_string()}, "
                f"se={format_iso8601_timestamp(params.expiry)}, sv={params.version.value})"
            )

            return SignedBlobURL(
                url=url,
                base_url=base_url,
                query_string=query_string,
                expiry=format_iso8601_timestamp(params.expiry)
            )

        except SigningError:
            raise
        except Exception as e:
            raise SigningError(
                f"Blob SAS signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            )

    def validate(self, params: ServiceSASParameters) -> None:
        """
        Validate signing parameters against the current time.

        The clock is read on every call, so parameters built earlier are
        re-checked when they are validated.

        Args:
            params: Signing parameters

        Raises:
            SigningError: If the permissions are empty or the expiry is not
                strictly in the future
        """
        if not params.permissions.canonical_string():
            logger.warning("Rejected SAS parameters: empty permission set")
            raise SigningError(
                "Permission set must grant at least one capability",
                SigningErrorCodes.INVALID_PERMISSIONS,
                {"permissions": int(params.permissions)}
            )

        expiry = to_utc_datetime(params.expiry)
        now = to_utc_datetime(self.clock())
        if expiry <= now:
            logger.warning(f"Rejected SAS parameters: expiry {expiry.isoformat()} is not after {now.isoformat()}")
            raise SigningError(
                "Expiry must be in the future",
                SigningErrorCodes.INVALID_EXPIRY,
                {"expiry": expiry.isoformat(), "now": now.isoformat()}
            )

    def string_to_sign(
        self,
        params: ServiceSASParameters,
        container: str,
        blob: str
    ) -> str:
        """
        Build the string-to-sign for parameters without signing it.

        Args:
            params: Signing parameters
            container: Container name
            blob: Blob name

        Returns:
            str: String-to-sign
        """
        return build_string_to_sign(params, self.config.account_name, container, blob)

    def compute_signature(self, string_to_sign: str) -> bytes:
        """
        Sign a string-to-sign with this signer's account key.

        Args:
            string_to_sign: String to sign

        Returns:
            bytes: Raw HMAC-SHA256 signature

        Raises:
            SigningError: If the account key is not valid base64
        """
        return compute_signature(string_to_sign, self.config.account_key)


def create_signer(config: SigningConfiguration, clock: Optional[Clock] = None) -> BlobSASSigner:
    """
    Create a new blob SAS signer.

    Args:
        config: Account credentials
        clock: Optional clock for expiry validation

    Returns:
        BlobSASSigner: Configured signer instance
    """
    return BlobSASSigner(config, clock)


def generate_blob_sas_url(
    account_name: str,
    account_key: str,
    container: str,
    blob: str,
    permissions: Permission,
    expiry: Timestamp,
    start: Optional[Timestamp] = None,
    response_headers: Optional[ResponseHeaders] = None,
    clock: Optional[Clock] = None
) -> SignedBlobURL:
    """
    Generate a signed URL for a single blob.

    Args:
        account_name: Storage account name
        account_key: Base64-encoded account key
        container: Container name
        blob: Blob name
        permissions: Capabilities to grant
        expiry: Token expiry
        start: Optional token start
        response_headers: Optional response header overrides
        clock: Optional clock for expiry validation

    Returns:
        SignedBlobURL: Signed URL

    Raises:
        SigningError: If validation, signing or URL construction fails
    """
    signer = create_signer(SigningConfiguration(account_name, account_key), clock)
    return signer.signed_url(
        container,
        blob,
        permissions,
        expiry,
        start=start,
        response_headers=response_headers
    )
