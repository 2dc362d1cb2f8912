"""
Exception classes for the blobsas package
"""

from typing import Optional, Dict, Any


class BlobSASError(Exception):
    """Base exception for all blobsas errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigError(BlobSASError):
    """Exception raised when SAS configuration cannot be loaded or is invalid"""

    def __init__(self, message: str, code: str = "CONFIG_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, details)
        self.code = code
