"""
Configuration management for blobsas

This module loads named storage accounts, signing defaults and logging
settings from JSON configuration.
"""

from .sas_config import (
    SASConfig,
    SASConfigManager,
    AccountConfig,
    LoggingConfig,
    DefaultConfig,
    create_sas_config,
    load_sas_config_from_json,
    load_sas_config_from_file,
    load_default_sas_config,
)

__all__ = [
    'SASConfig',
    'SASConfigManager',
    'AccountConfig',
    'LoggingConfig',
    'DefaultConfig',
    'create_sas_config',
    'load_sas_config_from_json',
    'load_sas_config_from_file',
    'load_default_sas_config',
]
