"""
Startup seeding of default cookies and API keys.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from .api_keys import ApiKeyRepository
from .cookies import CookieRepository

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """Outcome of a bootstrap run."""
    cookies_seeded: int = 0
    api_keys_seeded: int = 0

    @property
    def seeded(self) -> bool:
        return bool(self.cookies_seeded or self.api_keys_seeded)


async def seed_defaults(
    cookies: CookieRepository,
    api_keys: ApiKeyRepository,
    default_cookies: Sequence[str],
    default_api_keys: Sequence[str],
) -> BootstrapResult:
    """Seed default cookies and API keys into empty collections.

    A collection is seeded only when it holds no entries at all. A collection
    that still contains non-default entries is left alone even if every
    default was removed from it.

    Args:
        cookies: Cookie repository
        api_keys: API key repository
        default_cookies: Cookie values to seed as protected defaults
        default_api_keys: API key values to seed as protected defaults

    Returns:
        Counts of seeded entries
    """
    result = BootstrapResult()

    if default_cookies and not await cookies.get_all():
        for value in default_cookies:
            await cookies.add_cookie(value, is_default=True)
        result.cookies_seeded = len(default_cookies)
        logger.info(f"Seeded {result.cookies_seeded} default cookies")

    if default_api_keys and not await api_keys.get_all():
        for key in default_api_keys:
            await api_keys.add_key(key, is_enabled=True, is_default=True)
        result.api_keys_seeded = len(default_api_keys)
        logger.info(f"Seeded {result.api_keys_seeded} default API keys")

    if not result.seeded:
        logger.debug("Bootstrap found existing data, nothing seeded")

    return result
