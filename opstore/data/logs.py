"""
Bounded-retention request log store.

Logs are written at ``[logs, timestamp, id]`` so a prefix scan returns them
in time order. After every append the collection is trimmed back to the
configured cap by deleting the oldest entries.
"""

import logging
from typing import Any, List, Optional

from .base import KVStore
from .keys import encode_key
from ..exceptions import StorageReadError, create_error_context
from ..models.base import generate_id, now_ms
from ..models.request_log import RequestLog

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUEST_RECORD_NUM = 1000


class LogRetentionStore:
    """Append-only request log collection with a hard size cap."""

    prefix = "logs"

    def __init__(self, store: KVStore, max_records: int = DEFAULT_MAX_REQUEST_RECORD_NUM):
        """
        Initialize the log store.

        Args:
            store: Key-value backend
            max_records: Maximum number of log entries kept after each append
        """
        if max_records < 1:
            raise ValueError(f"max_records must be at least 1, got {max_records}")
        self.store = store
        self.max_records = max_records

    def _key(self, log: RequestLog) -> str:
        return encode_key([self.prefix, log.timestamp, log.id])

    async def _scan(self) -> List[RequestLog]:
        rows = await self.store.scan_prefix(encode_key([self.prefix]))
        logs = []
        for key, value in rows:
            try:
                logs.append(RequestLog.from_dict(value))
            except (TypeError, AttributeError) as e:
                raise StorageReadError(
                    message=f"Stored request log at {key} cannot be decoded: {e}",
                    error_code="CORRUPT_RECORD",
                    context=create_error_context(operation="decode", key=key),
                ) from e
        return logs

    @staticmethod
    def _newest_first(logs: List[RequestLog]) -> List[RequestLog]:
        return sorted(logs, key=lambda log: log.timestamp, reverse=True)

    async def append(self, path: str, timestamp: Optional[int] = None, **fields: Any) -> RequestLog:
        """Store a request log and evict entries beyond the cap.

        Args:
            path: Request path
            timestamp: Milliseconds since the epoch; defaults to now
            **fields: Remaining RequestLog fields (method, status_code, ...)

        Returns:
            The stored log entry
        """
        if "id" in fields:
            raise ValueError("RequestLog ids are assigned by the store")
        unknown = set(fields) - RequestLog.field_names()
        if unknown:
            raise ValueError(f"Unknown RequestLog fields: {sorted(unknown)}")
        checked = dict(fields, path=path)
        if timestamp is not None:
            checked["timestamp"] = timestamp
        RequestLog.check_types(checked)

        log = RequestLog(
            id=generate_id(),
            timestamp=now_ms() if timestamp is None else timestamp,
            path=path,
            **fields,
        )
        await self.store.upsert(self._key(log), log.to_dict())
        logger.debug(f"Logged {log.method or ''} {path} at {log.timestamp}")

        await self.evict()
        return log

    async def add(self, log: RequestLog) -> RequestLog:
        """Append a prepared log entry; its id is replaced with a fresh one."""
        fields = log.to_dict()
        fields.pop("id")
        return await self.append(**fields)

    async def evict(self) -> int:
        """Delete every entry older than the newest ``max_records``.

        Returns:
            Number of entries deleted
        """
        logs = await self._scan()
        if len(logs) <= self.max_records:
            return 0

        expired = self._newest_first(logs)[self.max_records:]
        for log in expired:
            await self.store.delete(self._key(log))

        logger.info(f"Evicted {len(expired)} request logs (cap {self.max_records})")
        return len(expired)

    async def recent(self, limit: Optional[int] = None) -> List[RequestLog]:
        """Return the newest log entries, newest first.

        Args:
            limit: Maximum entries to return; defaults to the retention cap
        """
        if limit is None:
            limit = self.max_records
        return self._newest_first(await self._scan())[:max(limit, 0)]

    async def count(self) -> int:
        return len(await self.store.scan_prefix(encode_key([self.prefix])))

    async def count_by_path(self, path: str) -> int:
        return sum(1 for log in await self._scan() if log.path == path)

    async def clear(self) -> int:
        """Delete all request logs and return how many were removed."""
        logs = await self._scan()
        for log in logs:
            await self.store.delete(self._key(log))
        logger.info(f"Cleared {len(logs)} request logs")
        return len(logs)

    get_recent = recent
