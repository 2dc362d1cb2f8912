"""
Shared fixtures for blobsas tests
"""

import base64
from datetime import datetime, timezone

import pytest

from blobsas.signing import (
    BlobSASSigner,
    Permission,
    ServiceSASParameters,
    SigningConfiguration,
)


@pytest.fixture
def fixed_now():
    """Reference instant used as the signer's current time"""
    return datetime(2023, 12, 31, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def account_key():
    return base64.b64encode(b"testkey1234567890").decode("ascii")


@pytest.fixture
def signing_config(account_key):
    return SigningConfiguration("account1", account_key)


@pytest.fixture
def signer(signing_config, clock):
    return BlobSASSigner(signing_config, clock=clock)


@pytest.fixture
def worked_params():
    """Parameters of the reference read/write scenario"""
    return ServiceSASParameters(
        permissions=Permission.READ | Permission.WRITE,
        start=datetime(2024, 1, 1, tzinfo=timezone.utc),
        expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )
