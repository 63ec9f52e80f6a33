"""
Tests for the key-value backends.
"""

import asyncio

import pytest

from opstore.data import MemoryKVStore, SQLiteKVStore, encode_key
from opstore.exceptions import StorageReadError, StorageWriteError


class TestMemoryKVStore:
    """Tests for the in-process backend."""

    @pytest.mark.asyncio
    async def test_round_trip(self):
        store = MemoryKVStore()
        value = {"id": "1", "nested": {"items": [1, 2, 3]}}
        await store.upsert("cookies:1:", value)
        assert await store.get("cookies:1:") == value

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        store = MemoryKVStore()
        assert await store.get("missing:") is None

    @pytest.mark.asyncio
    async def test_delete_then_get(self):
        store = MemoryKVStore()
        await store.upsert("a:", 1)
        await store.delete("a:")
        assert await store.get("a:") is None
        # deleting an absent key is fine
        await store.delete("a:")

    @pytest.mark.asyncio
    async def test_returned_values_are_copies(self):
        store = MemoryKVStore()
        await store.upsert("a:", {"n": 1})
        value = await store.get("a:")
        value["n"] = 2
        assert await store.get("a:") == {"n": 1}

    @pytest.mark.asyncio
    async def test_prefix_isolation(self):
        store = MemoryKVStore()
        await store.upsert(encode_key(["cookies", "1"]), "one")
        await store.upsert(encode_key(["cookies", "10"]), "ten")
        await store.upsert(encode_key(["apikeys", "1"]), "key")

        rows = await store.scan_prefix(encode_key(["cookies", "1"]))
        assert rows == [("cookies:1:", "one")]

        rows = await store.scan_prefix(encode_key(["cookies"]))
        assert {value for _, value in rows} == {"one", "ten"}


class TestSQLiteKVStore:
    """Tests for the aiosqlite backend."""

    @pytest.mark.asyncio
    async def test_round_trip_and_delete(self, tmp_path):
        store = SQLiteKVStore(str(tmp_path / "kv.db"), pool_size=2)
        await store.connect()
        try:
            value = {"id": "1", "is_valid": True, "fail_count": 0}
            await store.upsert("cookies:1:", value)
            assert await store.get("cookies:1:") == value

            await store.upsert("cookies:1:", {"id": "1", "is_valid": False})
            assert await store.get("cookies:1:") == {"id": "1", "is_valid": False}

            await store.delete("cookies:1:")
            assert await store.get("cookies:1:") is None
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_prefix_scan_is_literal(self, tmp_path):
        store = SQLiteKVStore(str(tmp_path / "kv.db"))
        try:
            await store.upsert("a%b:1:", "percent")
            await store.upsert("axb:1:", "x")
            await store.upsert("a_b:1:", "underscore")

            assert await store.scan_prefix("a%b:") == [("a%b:1:", "percent")]
            assert await store.scan_prefix("a_b:") == [("a_b:1:", "underscore")]
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_scan_is_key_ordered(self, tmp_path):
        store = SQLiteKVStore(str(tmp_path / "kv.db"))
        try:
            for ts in (30, 10, 20):
                await store.upsert(encode_key(["logs", ts, "x"]), ts)
            rows = await store.scan_prefix(encode_key(["logs"]))
            assert [value for _, value in rows] == [10, 20, 30]
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_data_survives_reconnect(self, tmp_path):
        path = str(tmp_path / "kv.db")
        store = SQLiteKVStore(path)
        await store.upsert("settings:system:", {"max_fail_num": 5})
        await store.disconnect()

        reopened = SQLiteKVStore(path)
        try:
            assert await reopened.get("settings:system:") == {"max_fail_num": 5}
        finally:
            await reopened.disconnect()

    @pytest.mark.asyncio
    async def test_corrupt_value_is_read_error_not_absence(self, tmp_path):
        store = SQLiteKVStore(str(tmp_path / "kv.db"), pool_size=1)
        await store.connect()
        try:
            async with store._get_connection() as conn:
                await conn.execute("INSERT INTO kv_data (k, v) VALUES (?, ?)", ("bad:", "{not json"))
                await conn.commit()

            with pytest.raises(StorageReadError) as exc_info:
                await store.get("bad:")
            assert exc_info.value.error_code == "CORRUPT_RECORD"
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_unserializable_value_is_write_error(self, tmp_path):
        store = SQLiteKVStore(str(tmp_path / "kv.db"), pool_size=1)
        try:
            with pytest.raises(StorageWriteError) as exc_info:
                await store.upsert("a:", {"x": object()})
            assert exc_info.value.error_code == "UNSERIALIZABLE_VALUE"
            assert await store.get("a:") is None
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_concurrent_writers(self, tmp_path):
        store = SQLiteKVStore(str(tmp_path / "kv.db"), pool_size=3)
        try:
            await asyncio.gather(*(store.upsert(encode_key(["n", i]), i) for i in range(20)))
            rows = await store.scan_prefix(encode_key(["n"]))
            assert [value for _, value in rows] == list(range(20))
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_memory_database_uses_single_connection(self):
        store = SQLiteKVStore(":memory:", pool_size=5)
        try:
            await store.upsert("a:", 1)
            assert await store.get("a:") == 1
            assert store.stats()["pool_size"] == 1
        finally:
            await store.disconnect()
