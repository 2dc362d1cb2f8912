"""
Test suite for string-to-sign construction
"""

from datetime import datetime, timedelta, timezone

import pytest

from blobsas.signing import (
    Permission,
    ResponseHeaders,
    ServiceSASParameters,
    ServiceVersion,
    HttpProtocol,
    SigningError,
    SigningErrorCodes,
    build_string_to_sign,
    canonicalized_resource,
    count_string_to_sign_fields,
    supported_versions,
    format_iso8601_timestamp,
)


WORKED_STRING_TO_SIGN = (
    "rw\n2024-01-01T00:00:00Z\n2024-01-02T00:00:00Z\n/blob/account1/c/b.txt"
    "\n\n\nhttps\n2024-11-04\nb\n\n\n\n\n\n\n"
)


class TestTimestampFormatting:
    """Test UTC timestamp formatting"""

    def test_aware_utc(self):
        value = datetime(2024, 1, 1, 12, 30, 5, tzinfo=timezone.utc)
        assert format_iso8601_timestamp(value) == "2024-01-01T12:30:05Z"

    def test_other_timezone_converted(self):
        value = datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=1)))
        assert format_iso8601_timestamp(value) == "2024-01-01T00:00:00Z"

    def test_naive_is_utc(self):
        assert format_iso8601_timestamp(datetime(2024, 1, 2)) == "2024-01-02T00:00:00Z"

    def test_epoch_seconds(self):
        assert format_iso8601_timestamp(1704067200) == "2024-01-01T00:00:00Z"

    def test_subsecond_truncated(self):
        value = datetime(2024, 1, 1, 0, 0, 0, 999999, tzinfo=timezone.utc)
        assert format_iso8601_timestamp(value) == "2024-01-01T00:00:00Z"

    def test_invalid_type(self):
        with pytest.raises(SigningError) as exc_info:
            format_iso8601_timestamp("2024-01-01")
        assert exc_info.value.code == SigningErrorCodes.INVALID_TIMESTAMP


class TestStringToSign:
    """Test the 2024-11-04 string-to-sign layout"""

    def test_worked_scenario(self, worked_params):
        """Reference scenario matches byte for byte"""
        result = build_string_to_sign(worked_params, "account1", "c", "b.txt")
        assert result == WORKED_STRING_TO_SIGN

    def test_canonicalized_resource(self):
        """Names are used verbatim, without case folding"""
        assert canonicalized_resource("Account", "Photos", "dir/Pic 1.jpg") == "/blob/Account/Photos/dir/Pic 1.jpg"

    def test_field_count_minimal(self):
        """Only mandatory fields still produce sixteen fields"""
        params = ServiceSASParameters(
            permissions=Permission.READ,
            expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
        )
        result = build_string_to_sign(params, "acct", "c", "b")
        assert count_string_to_sign_fields(result) == 16

        fields = result.split("\n")
        assert fields[0] == "r"
        assert fields[1] == ""
        assert fields[2] == "2024-01-02T00:00:00Z"

    def test_field_count_full(self):
        """All optional fields populated still produce sixteen fields"""
        params = ServiceSASParameters(
            permissions=Permission.READ | Permission.CREATE,
            start=datetime(2024, 1, 1, tzinfo=timezone.utc),
            expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
            identifier="policy-1",
            ip_range="168.1.5.60-168.1.5.70",
            protocol=HttpProtocol.HTTPS_AND_HTTP,
            response_headers=ResponseHeaders(
                cache_control="no-cache",
                content_disposition="attachment; filename=a.txt",
                content_encoding="gzip",
                content_language="en-US",
                content_type="text/plain",
            ),
        )
        result = build_string_to_sign(params, "acct", "c", "b")
        fields = result.split("\n")

        assert len(fields) == 16
        assert fields == [
            "rc",
            "2024-01-01T00:00:00Z",
            "2024-01-02T00:00:00Z",
            "/blob/acct/c/b",
            "policy-1",
            "168.1.5.60-168.1.5.70",
            "https,http",
            "2024-11-04",
            "b",
            "",
            "",
            "no-cache",
            "attachment; filename=a.txt",
            "gzip",
            "en-US",
            "text/plain",
        ]

    def test_partial_response_headers(self):
        """Each header override occupies its own slot"""
        params = ServiceSASParameters(
            permissions=Permission.READ,
            expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
            response_headers=ResponseHeaders(content_type="image/png"),
        )
        fields = build_string_to_sign(params, "acct", "c", "b").split("\n")

        assert len(fields) == 16
        assert fields[11:15] == ["", "", "", ""]
        assert fields[15] == "image/png"

    def test_empty_permissions_not_rejected_here(self):
        """Validation belongs to the signer, not the canonicalizer"""
        params = ServiceSASParameters(
            permissions=Permission(0),
            expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
        )
        fields = build_string_to_sign(params, "acct", "c", "b").split("\n")
        assert fields[0] == ""
        assert len(fields) == 16

    def test_unsupported_version(self):
        """Versions without a registered layout are refused"""
        params = ServiceSASParameters(
            permissions=Permission.READ,
            expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
            version=ServiceVersion.V2020_04_08,
        )
        with pytest.raises(SigningError) as exc_info:
            build_string_to_sign(params, "acct", "c", "b")

        assert exc_info.value.code == SigningErrorCodes.UNSUPPORTED_VERSION
        assert "2024-11-04" in exc_info.value.details["supported_versions"]

    def test_supported_versions(self):
        assert supported_versions() == [ServiceVersion.V2024_11_04]
