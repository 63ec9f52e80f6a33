"""
Abstract key-value backend interface.

Every repository in this package is built on this minimal contract: point
get, upsert and delete by exact key, plus a literal string-prefix scan.
Keys passed to a backend are already encoded (see keys.py); values are
JSON-compatible structures.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple


class KVStore(ABC):
    """Abstract key-value backend.

    Implementations must raise StorageReadError / StorageWriteError on backend
    failure; a missing key is reported as None, never as an error.
    """

    async def connect(self) -> None:
        """Open backend resources. No-op by default."""

    async def disconnect(self) -> None:
        """Release backend resources. No-op by default."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Fetch the value stored at a key.

        Args:
            key: Encoded key

        Returns:
            The stored value, or None if the key is absent
        """
        pass

    @abstractmethod
    async def upsert(self, key: str, value: Any) -> None:
        """
        Insert or replace the value at a key.

        Args:
            key: Encoded key
            value: JSON-compatible value
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a key. Deleting an absent key is not an error.

        Args:
            key: Encoded key
        """
        pass

    @abstractmethod
    async def scan_prefix(self, prefix: str) -> List[Tuple[str, Any]]:
        """
        Return every (key, value) pair whose key starts with prefix.

        Args:
            prefix: Literal string prefix; no wildcard characters are interpreted

        Returns:
            List of (key, value) pairs in ascending key order
        """
        pass
