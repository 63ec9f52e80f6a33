"""
SQLite implementation of the key-value backend using aiosqlite.

All entities live in a single ``kv_data`` table mapping a unique text key to
a JSON-encoded value. The connection pool mirrors a remote backend client:
any number of coroutines may issue operations concurrently and each call is a
separate round-trip with its own commit.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import aiosqlite

from .base import KVStore
from ..exceptions import StorageReadError, StorageWriteError, create_error_context

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_data (
    k TEXT PRIMARY KEY,
    v TEXT NOT NULL
)
"""


class SQLiteKVStore(KVStore):
    """SQLite key-value backend with connection pooling."""

    def __init__(self, db_path: str, pool_size: int = 5):
        if db_path == ":memory:":
            # every :memory: connection opens a separate database
            pool_size = 1
        self.db_path = db_path
        self.pool_size = pool_size
        self._connections: List[aiosqlite.Connection] = []
        self._available: asyncio.Queue = asyncio.Queue(maxsize=pool_size)
        self._lock = asyncio.Lock()
        self._initialized = False

    async def connect(self) -> None:
        """Establish database connection pool and create the table."""
        async with self._lock:
            if self._initialized:
                return

            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            try:
                for _ in range(self.pool_size):
                    conn = await aiosqlite.connect(self.db_path)
                    # WAL lets readers proceed while another connection writes
                    await conn.execute("PRAGMA journal_mode=WAL")
                    self._connections.append(conn)
                    await self._available.put(conn)

                conn = self._connections[0]
                await conn.execute(SCHEMA)
                await conn.commit()
            except aiosqlite.Error as e:
                logger.error(f"Failed to open SQLite store at {self.db_path}: {e}")
                raise StorageWriteError(
                    message=f"Failed to open database: {e}",
                    error_code="STORAGE_CONNECT_FAILED",
                    context=create_error_context(operation="connect", db_path=self.db_path),
                ) from e

            self._initialized = True
            logger.info(f"SQLite store connected at {self.db_path} (pool size {self.pool_size})")

    async def disconnect(self) -> None:
        """Close all database connections."""
        async with self._lock:
            if not self._initialized:
                return

            for conn in self._connections:
                await conn.close()

            self._connections.clear()
            self._available = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
            logger.info(f"SQLite store at {self.db_path} disconnected")

    @asynccontextmanager
    async def _get_connection(self):
        """Get a connection from the pool."""
        if not self._initialized:
            await self.connect()

        conn = await self._available.get()
        try:
            yield conn
        finally:
            await self._available.put(conn)

    async def get(self, key: str) -> Optional[Any]:
        try:
            async with self._get_connection() as conn:
                cursor = await conn.execute("SELECT v FROM kv_data WHERE k = ?", (key,))
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error(f"Read of {key} failed: {e}")
            raise StorageReadError(
                message=f"Failed to read key {key}: {e}",
                context=create_error_context(operation="get", key=key),
            ) from e

        if row is None:
            return None
        return self._decode(key, row[0])

    async def upsert(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Value for {key} is not JSON serializable: {e}")
            raise StorageWriteError(
                message=f"Value for key {key} cannot be serialized: {e}",
                error_code="UNSERIALIZABLE_VALUE",
                context=create_error_context(operation="upsert", key=key),
            ) from e

        try:
            async with self._get_connection() as conn:
                await conn.execute(
                    "INSERT INTO kv_data (k, v) VALUES (?, ?) "
                    "ON CONFLICT(k) DO UPDATE SET v = excluded.v",
                    (key, payload),
                )
                await conn.commit()
        except aiosqlite.Error as e:
            logger.error(f"Write of {key} failed: {e}")
            raise StorageWriteError(
                message=f"Failed to write key {key}: {e}",
                context=create_error_context(operation="upsert", key=key),
            ) from e

    async def delete(self, key: str) -> None:
        try:
            async with self._get_connection() as conn:
                await conn.execute("DELETE FROM kv_data WHERE k = ?", (key,))
                await conn.commit()
        except aiosqlite.Error as e:
            logger.error(f"Delete of {key} failed: {e}")
            raise StorageWriteError(
                message=f"Failed to delete key {key}: {e}",
                context=create_error_context(operation="delete", key=key),
            ) from e

    async def scan_prefix(self, prefix: str) -> List[Tuple[str, Any]]:
        # substr comparison instead of LIKE so '%' and '_' in keys stay literal
        query = "SELECT k, v FROM kv_data WHERE substr(k, 1, ?) = ? ORDER BY k"
        try:
            async with self._get_connection() as conn:
                cursor = await conn.execute(query, (len(prefix), prefix))
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error(f"Prefix scan of {prefix!r} failed: {e}")
            raise StorageReadError(
                message=f"Failed to scan prefix {prefix!r}: {e}",
                context=create_error_context(operation="scan_prefix", prefix=prefix),
            ) from e

        return [(row[0], self._decode(row[0], row[1])) for row in rows]

    @staticmethod
    def _decode(key: str, raw: str) -> Any:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(
                message=f"Stored value for {key} is not valid JSON: {e}",
                error_code="CORRUPT_RECORD",
                context=create_error_context(operation="decode", key=key),
            ) from e

    def stats(self) -> Dict[str, Any]:
        """Pool statistics for diagnostics."""
        return {
            "db_path": self.db_path,
            "pool_size": self.pool_size,
            "available": self._available.qsize(),
            "connected": self._initialized,
        }
