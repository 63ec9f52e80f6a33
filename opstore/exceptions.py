"""
Exception hierarchy for opstore.

All errors raised by the storage layer derive from OpStoreError and carry a
machine-readable error code plus optional context for logging.
"""

from datetime import datetime
from typing import Any, Dict, Optional


def create_error_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an error context dictionary, dropping empty values."""
    context = {key: value for key, value in kwargs.items() if value is not None}
    context["timestamp"] = datetime.utcnow().isoformat()
    return context


class OpStoreError(Exception):
    """Base exception for opstore."""

    def __init__(
        self,
        message: str,
        error_code: str = "OPSTORE_ERROR",
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.user_message = user_message or message

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for structured logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "context": self.context,
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(OpStoreError):
    """Raised when the store configuration is invalid."""

    def __init__(self, message: str, error_code: str = "CONFIG_INVALID", **kwargs: Any):
        super().__init__(message, error_code=error_code, **kwargs)


class StorageError(OpStoreError):
    """Raised when the key-value backend fails."""

    def __init__(self, message: str, error_code: str = "STORAGE_ERROR", **kwargs: Any):
        super().__init__(message, error_code=error_code, **kwargs)


class StorageReadError(StorageError):
    """A read against the backend failed (distinct from a missing record)."""

    def __init__(self, message: str, error_code: str = "STORAGE_READ_FAILED", **kwargs: Any):
        super().__init__(message, error_code=error_code, **kwargs)


class StorageWriteError(StorageError):
    """A write against the backend failed."""

    def __init__(self, message: str, error_code: str = "STORAGE_WRITE_FAILED", **kwargs: Any):
        super().__init__(message, error_code=error_code, **kwargs)
