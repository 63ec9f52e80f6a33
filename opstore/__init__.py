"""
opstore: persistence for proxy operational state.

Cookies, API keys, request logs and settings stored on a generic key-value
backend.
"""

from .exceptions import (
    OpStoreError,
    ConfigurationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__version__ = "1.0.0"

__all__ = [
    "OpStoreError",
    "ConfigurationError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
