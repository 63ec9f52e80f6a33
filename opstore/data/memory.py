"""
In-process key-value backend.

Useful for tests and for embedding the repositories without a database.
Each operation yields to the event loop once before touching the data, so
concurrent callers interleave the same way they would against a remote
backend.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from .base import KVStore

logger = logging.getLogger(__name__)


class MemoryKVStore(KVStore):
    """Dictionary-backed KVStore.

    Values are deep-copied on the way in and out so callers can never mutate
    stored state through a returned reference.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        await asyncio.sleep(0)
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def upsert(self, key: str, value: Any) -> None:
        await asyncio.sleep(0)
        self._data[key] = copy.deepcopy(value)
        logger.debug(f"Upserted {key}")

    async def delete(self, key: str) -> None:
        await asyncio.sleep(0)
        self._data.pop(key, None)
        logger.debug(f"Deleted {key}")

    async def scan_prefix(self, prefix: str) -> List[Tuple[str, Any]]:
        await asyncio.sleep(0)
        return [
            (key, copy.deepcopy(self._data[key]))
            for key in sorted(self._data)
            if key.startswith(prefix)
        ]

    def __len__(self) -> int:
        return len(self._data)
