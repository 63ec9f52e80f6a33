"""
Cookie repository with failure-count health tracking.

A cookie is Valid while ``fail_count < max_fail_threshold``. Each recorded
failure increments the count and recomputes validity; once the threshold is
reached the cookie stays Invalid until ``reset()``.
"""

import logging
from typing import List, Optional

from .base import KVStore
from .entity import EntityRepository
from ..models.cookie import Cookie

logger = logging.getLogger(__name__)

DEFAULT_MAX_FAIL_NUM = 3


class CookieRepository(EntityRepository[Cookie]):
    """Stores cookies at ``cookies:<id>:`` and tracks their health."""

    prefix = "cookies"
    model = Cookie

    def __init__(self, store: KVStore, max_fail_threshold: int = DEFAULT_MAX_FAIL_NUM):
        super().__init__(store)
        if max_fail_threshold < 1:
            raise ValueError(f"max_fail_threshold must be at least 1, got {max_fail_threshold}")
        self.max_fail_threshold = max_fail_threshold

    async def add_cookie(self, value: str, is_default: bool = False) -> Cookie:
        """Store a new cookie in the Valid state."""
        return await self.add(value=value, is_valid=True, fail_count=0, is_default=is_default)

    async def list_valid(self) -> List[Cookie]:
        """Return valid cookies, oldest first."""
        return [cookie for cookie in await self.get_all() if cookie.is_valid]

    async def record_failure(self, cookie_id: str) -> Optional[Cookie]:
        """Count one failure against a cookie.

        Returns:
            The updated cookie, or None if it does not exist
        """
        cookie = await self.get(cookie_id)
        if cookie is None:
            return None

        fail_count = cookie.fail_count + 1
        is_valid = fail_count < self.max_fail_threshold
        await self.update(cookie_id, {"fail_count": fail_count, "is_valid": is_valid})

        if cookie.is_valid and not is_valid:
            logger.warning(
                f"Cookie {cookie_id} invalidated after {fail_count} failures "
                f"(threshold {self.max_fail_threshold})"
            )

        return await self.get(cookie_id)

    async def reset(self, cookie_id: str) -> bool:
        """Return a cookie to the Valid state with a zero failure count."""
        reset = await self.update(cookie_id, {"fail_count": 0, "is_valid": True})
        if reset:
            logger.info(f"Cookie {cookie_id} reset")
        return reset

    # Names used by the proxy's cookie rotation
    get_valid_cookies = list_valid
    increment_fail_count = record_failure
    reset_fail_count = reset
