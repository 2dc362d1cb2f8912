"""
Tests for SAS configuration loading
"""

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from blobsas import ConfigError, BlobSASError, Permission
from blobsas.config import (
    SASConfigManager,
    LoggingConfig,
    load_sas_config_from_json,
    load_sas_config_from_file,
    load_default_sas_config,
)
from blobsas.signing import HttpProtocol, ServiceVersion, SigningConfiguration


def make_config_dict(account_key):
    return {
        "config_format_version": "1.0",
        "defaults": {"account": "primary", "protocol": "https,http", "version": "2024-11-04"},
        "accounts": {
            "primary": {"account_name": "account1", "account_key": account_key},
            "archive": {"account_name": "archive1", "account_key": account_key},
        },
        "logging": {"level": "debug"},
    }


class TestSASConfigLoading:
    """Test loading configuration documents"""

    def test_from_json(self, account_key):
        manager = load_sas_config_from_json(json.dumps(make_config_dict(account_key)))

        assert manager.list_accounts() == ["primary", "archive"]
        assert manager.get_account() == SigningConfiguration("account1", account_key)
        assert manager.get_account("archive").account_name == "archive1"
        assert manager.get_config().defaults.protocol == HttpProtocol.HTTPS_AND_HTTP
        assert manager.get_config().defaults.version == ServiceVersion.V2024_11_04

    def test_optional_sections(self, account_key):
        data = make_config_dict(account_key)
        del data["logging"]
        data["defaults"] = {"account": "primary"}

        manager = SASConfigManager.from_json(json.dumps(data))

        assert manager.get_logging_config().level == "WARNING"
        assert manager.get_config().defaults.protocol == HttpProtocol.HTTPS_ONLY

    def test_from_file(self, tmp_path, account_key):
        path = tmp_path / "blobsas.json"
        path.write_text(json.dumps(make_config_dict(account_key)), encoding="utf-8")

        manager = load_sas_config_from_file(path)
        assert manager.get_account().account_name == "account1"

    def test_load_default(self, tmp_path, monkeypatch, account_key):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "blobsas.json").write_text(
            json.dumps(make_config_dict(account_key)), encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        manager = load_default_sas_config()
        assert manager.get_account().account_name == "account1"

    def test_load_default_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError) as exc_info:
            load_default_sas_config()
        assert exc_info.value.code == "FILE_NOT_FOUND"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_file(tmp_path / "absent.json")
        assert exc_info.value.code == "FILE_ERROR"

    def test_invalid_json(self):
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_json("{not json")
        assert exc_info.value.code == "PARSE_ERROR"

    def test_missing_section(self, account_key):
        data = make_config_dict(account_key)
        del data["accounts"]
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_json(json.dumps(data))
        assert exc_info.value.code == "INVALID_FORMAT"

    def test_unknown_version(self, account_key):
        data = make_config_dict(account_key)
        data["defaults"]["version"] = "1999-01-01"
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_json(json.dumps(data))
        assert exc_info.value.code == "INVALID_FORMAT"

    @pytest.mark.parametrize("section,value", [
        ("accounts", []),
        ("accounts", "primary"),
        ("defaults", "x"),
        ("defaults", ["primary"]),
    ])
    def test_wrong_section_type(self, account_key, section, value):
        """Sections of the wrong JSON type are format errors"""
        data = make_config_dict(account_key)
        data[section] = value
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_json(json.dumps(data))
        assert exc_info.value.code == "INVALID_FORMAT"

    @pytest.mark.parametrize("level", ["VERBOSE", "", 10])
    def test_unknown_logging_level(self, account_key, level):
        data = make_config_dict(account_key)
        data["logging"] = {"level": level}
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_json(json.dumps(data))
        assert exc_info.value.code == "INVALID_FORMAT"

    def test_unknown_default_account(self, account_key):
        data = make_config_dict(account_key)
        data["defaults"]["account"] = "missing"
        with pytest.raises(ConfigError) as exc_info:
            load_sas_config_from_json(json.dumps(data))
        assert exc_info.value.code == "INVALID_DEFAULT_ACCOUNT"

    def test_unknown_account(self, account_key):
        manager = load_sas_config_from_json(json.dumps(make_config_dict(account_key)))
        with pytest.raises(ConfigError) as exc_info:
            manager.get_account("nope")
        assert exc_info.value.code == "ACCOUNT_NOT_FOUND"
        assert isinstance(exc_info.value, BlobSASError)

    def test_account_key_hidden_from_repr(self, account_key):
        manager = load_sas_config_from_json(json.dumps(make_config_dict(account_key)))
        assert account_key not in repr(manager.get_config())


class TestSASConfigUsage:
    """Test signers and builders derived from configuration"""

    def test_to_signer(self, account_key, clock, fixed_now):
        manager = load_sas_config_from_json(json.dumps(make_config_dict(account_key)))
        signer = manager.to_signer(clock=clock)

        result = signer.signed_url("c", "b.txt", Permission.READ, fixed_now + timedelta(hours=1))
        assert result.url.startswith("https://account1.blob.core.windows.net/c/b.txt?")

    def test_parameters_builder_uses_defaults(self, account_key):
        manager = load_sas_config_from_json(json.dumps(make_config_dict(account_key)))
        params = (manager.new_parameters_builder()
                  .permissions(Permission.READ)
                  .expiry(datetime(2024, 1, 2, tzinfo=timezone.utc))
                  .build())

        assert params.protocol == HttpProtocol.HTTPS_AND_HTTP
        assert params.version == ServiceVersion.V2024_11_04

    def test_logging_config_apply(self):
        logger = logging.getLogger("blobsas")
        previous = logger.level
        try:
            LoggingConfig(level="debug").apply()
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)
