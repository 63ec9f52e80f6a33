"""
Tests for cookie health tracking.
"""

import pytest

from opstore.data import CookieRepository, MemoryKVStore


@pytest.fixture
def cookies():
    return CookieRepository(MemoryKVStore(), max_fail_threshold=3)


class TestCookieHealth:
    """Tests for the failure-count state machine."""

    @pytest.mark.asyncio
    async def test_new_cookie_is_valid(self, cookies):
        cookie = await cookies.add_cookie("session=1")
        assert cookie.is_valid
        assert cookie.fail_count == 0

    @pytest.mark.asyncio
    async def test_threshold_invalidates_and_reset_restores(self, cookies):
        cookie = await cookies.add_cookie("session=1")

        first = await cookies.record_failure(cookie.id)
        assert (first.fail_count, first.is_valid) == (1, True)
        second = await cookies.record_failure(cookie.id)
        assert (second.fail_count, second.is_valid) == (2, True)
        third = await cookies.record_failure(cookie.id)
        assert (third.fail_count, third.is_valid) == (3, False)

        stored = await cookies.get(cookie.id)
        assert stored.fail_count == 3
        assert not stored.is_valid

        assert await cookies.reset(cookie.id)
        stored = await cookies.get(cookie.id)
        assert stored.fail_count == 0
        assert stored.is_valid

    @pytest.mark.asyncio
    async def test_invalid_stays_invalid_on_further_failures(self, cookies):
        cookie = await cookies.add_cookie("session=1")
        for _ in range(5):
            await cookies.increment_fail_count(cookie.id)
        stored = await cookies.get(cookie.id)
        assert stored.fail_count == 5
        assert not stored.is_valid

    @pytest.mark.asyncio
    async def test_record_failure_on_missing_cookie(self, cookies):
        assert await cookies.record_failure("missing") is None
        assert not await cookies.reset_fail_count("missing")

    @pytest.mark.asyncio
    async def test_valid_cookies_excludes_invalid(self, cookies):
        good = await cookies.add_cookie("good")
        bad = await cookies.add_cookie("bad")
        for _ in range(3):
            await cookies.record_failure(bad.id)

        valid = await cookies.get_valid_cookies()
        assert [c.id for c in valid] == [good.id]

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            CookieRepository(MemoryKVStore(), max_fail_threshold=0)
