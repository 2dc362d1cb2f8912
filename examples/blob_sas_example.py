#!/usr/bin/env python3
"""
blobsas - Blob SAS Example

This example shows how to sign a read-only download link for a blob and how
to use the parameters builder for tokens with response header overrides.
"""

import base64
import os
import sys
from datetime import datetime, timedelta, timezone

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from blobsas import (
    BlobSASSigner,
    Permission,
    SigningConfiguration,
    SigningError,
    create_sas_parameters,
    generate_blob_sas_url,
)


ACCOUNT_NAME = "exampleaccount"
# Demo key only; real keys come from the storage account
ACCOUNT_KEY = base64.b64encode(b"example-account-key").decode("ascii")


def basic_sas_example():
    """Sign a one-hour read link"""
    print("=== Basic Blob SAS Example ===")

    now = datetime.now(timezone.utc)
    signed = generate_blob_sas_url(
        ACCOUNT_NAME,
        ACCOUNT_KEY,
        container="reports",
        blob="2024/summary.pdf",
        permissions=Permission.READ,
        start=now,
        expiry=now + timedelta(hours=1),
    )

    print(f"   Expires: {signed.expiry}")
    print(f"   URL: {signed.url}")


def builder_sas_example():
    """Sign a download link that forces a file name and content type"""
    print("\n=== Parameters Builder Example ===")

    signer = BlobSASSigner(SigningConfiguration(ACCOUNT_NAME, ACCOUNT_KEY))
    params = (create_sas_parameters()
              .permissions(Permission.READ)
              .expires_in(15 * 60)
              .content_disposition("attachment; filename=summary.pdf")
              .content_type("application/pdf")
              .build())

    signed = signer.sign_parameters(params, "reports", "2024/summary.pdf")
    print(f"   Query: {signed.query_string}")


def error_handling_example():
    """Show how signing failures surface"""
    print("\n=== Error Handling Example ===")

    try:
        generate_blob_sas_url(
            ACCOUNT_NAME,
            ACCOUNT_KEY,
            container="reports",
            blob="summary.pdf",
            permissions=Permission(0),
            expiry=datetime.now(timezone.utc) + timedelta(hours=1),
        )
    except SigningError as e:
        print(f"   Refused: {e}")


if __name__ == "__main__":
    basic_sas_example()
    builder_sas_example()
    error_handling_example()
