"""
SAS configuration management

Loads named storage accounts, signing defaults and logging settings from a
JSON configuration document.
"""

import json
import logging
from typing import Dict, List, Optional, Any, Union
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import ConfigError
from ..signing.types import (
    HttpProtocol,
    ServiceVersion,
    SigningConfiguration,
    Clock,
    DEFAULT_SERVICE_VERSION,
)
from ..signing.signer import BlobSASSigner
from ..signing.sas_builder import SASParametersBuilder


DEFAULT_CONFIG_PATHS = [
    Path("config/blobsas.json"),
    Path("../config/blobsas.json"),
    Path("../../config/blobsas.json"),
]


@dataclass
class AccountConfig:
    """Storage account credentials"""
    account_name: str
    account_key: str = field(repr=False)


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"

    def apply(self, logger_name: str = "blobsas") -> None:
        """Set the level of the package logger."""
        logging.getLogger(logger_name).setLevel(self.level.upper())


@dataclass
class DefaultConfig:
    """Default configuration values"""
    account: str
    protocol: HttpProtocol = HttpProtocol.HTTPS_ONLY
    version: ServiceVersion = DEFAULT_SERVICE_VERSION


@dataclass
class SASConfig:
    """SAS configuration structure"""
    config_format_version: str
    accounts: Dict[str, AccountConfig]
    defaults: DefaultConfig
    logging: LoggingConfig


class SASConfigManager:
    """Configuration manager for blob SAS signing"""

    def __init__(self, config: SASConfig):
        self.config = config
        self._validate()

    @classmethod
    def from_json(cls, json_string: str) -> 'SASConfigManager':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
            config = cls._parse_config_dict(data)
            return cls(config)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT")

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'SASConfigManager':
        """Load configuration from file"""
        try:
            path = Path(file_path)
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
            return cls.from_json(json_string)
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR")

    @classmethod
    def load_default(cls) -> 'SASConfigManager':
        """Load configuration from the first default location that exists"""
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path)

        raise ConfigError("Default configuration file not found", "FILE_NOT_FOUND")

    def get_account(self, name: Optional[str] = None) -> SigningConfiguration:
        """
        Get signing credentials for a named account.

        Args:
            name: Account entry name (default account if None)

        Returns:
            SigningConfiguration: Credentials for the account

        Raises:
            ConfigError: If the account is not configured
        """
        account_name = name or self.config.defaults.account
        account = self.config.accounts.get(account_name)
        if not account:
            raise ConfigError(f"Account '{account_name}' not found", "ACCOUNT_NOT_FOUND")
        return SigningConfiguration(account.account_name, account.account_key)

    def to_signer(self, name: Optional[str] = None, clock: Optional[Clock] = None) -> BlobSASSigner:
        """Create a signer for a named account"""
        return BlobSASSigner(self.get_account(name), clock)

    def new_parameters_builder(self) -> SASParametersBuilder:
        """Create a parameters builder seeded with the configured defaults"""
        return (SASParametersBuilder()
                .protocol(self.config.defaults.protocol)
                .version(self.config.defaults.version))

    def list_accounts(self) -> List[str]:
        """List configured account entries"""
        return list(self.config.accounts.keys())

    def get_logging_config(self) -> LoggingConfig:
        return self.config.logging

    def get_config(self) -> SASConfig:
        """Get the full configuration"""
        return self.config

    def _validate(self) -> None:
        """Validate the configuration"""
        if self.config.defaults.account not in self.config.accounts:
            raise ConfigError(
                f"Default account '{self.config.defaults.account}' not found",
                "INVALID_DEFAULT_ACCOUNT"
            )

        for entry_name, account in self.config.accounts.items():
            if not account.account_name:
                raise ConfigError(
                    f"Account '{entry_name}' has an empty account_name",
                    "INVALID_FORMAT"
                )

        level = self.config.logging.level
        if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
            raise ConfigError(f"Unknown logging level '{level}'", "INVALID_FORMAT")

    @staticmethod
    def _parse_config_dict(data: Dict[str, Any]) -> SASConfig:
        """Parse configuration dictionary into structured objects"""

        accounts = {}
        for entry_name, account_data in data['accounts'].items():
            accounts[entry_name] = AccountConfig(**account_data)

        defaults_data = data['defaults']
        defaults = DefaultConfig(
            account=defaults_data['account'],
            protocol=HttpProtocol(defaults_data.get('protocol', HttpProtocol.HTTPS_ONLY.value)),
            version=ServiceVersion(defaults_data.get('version', DEFAULT_SERVICE_VERSION.value))
        )

        logging_config = LoggingConfig(**data.get('logging', {}))

        return SASConfig(
            config_format_version=data['config_format_version'],
            accounts=accounts,
            defaults=defaults,
            logging=logging_config
        )


def create_sas_config(config: SASConfig) -> SASConfigManager:
    """Create configuration manager from configuration object"""
    return SASConfigManager(config)


def load_sas_config_from_json(json_string: str) -> SASConfigManager:
    """Load configuration from JSON string"""
    return SASConfigManager.from_json(json_string)


def load_sas_config_from_file(file_path: Union[str, Path]) -> SASConfigManager:
    """Load configuration from file"""
    return SASConfigManager.from_file(file_path)


def load_default_sas_config() -> SASConfigManager:
    """Load default configuration"""
    return SASConfigManager.load_default()
