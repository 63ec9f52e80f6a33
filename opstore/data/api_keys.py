"""
API key repository with request counting.
"""

import logging
from typing import Any, Dict, List, Optional

from .entity import EntityRepository
from ..models.api_key import ApiKey

logger = logging.getLogger(__name__)


class ApiKeyRepository(EntityRepository[ApiKey]):
    """Stores API keys at ``apikeys:<id>:``.

    The ``key`` value is expected to be unique but this is not enforced by
    storage; lookups by key return the oldest match.
    """

    prefix = "apikeys"
    model = ApiKey
    server_fields = frozenset({"id", "created_at", "request_count"})

    def _check_update(self, existing: ApiKey, changes: Dict[str, Any]) -> None:
        count = changes.get("request_count", existing.request_count)
        if count < existing.request_count:
            raise ValueError(
                f"request_count of ApiKey {existing.id} cannot decrease "
                f"({existing.request_count} -> {count})"
            )

    async def add_key(
        self,
        key: str,
        is_enabled: bool = True,
        is_default: bool = False,
        name: Optional[str] = None,
    ) -> ApiKey:
        """Store a new API key with a zero request count."""
        return await self.add(key=key, is_enabled=is_enabled, is_default=is_default, name=name)

    async def get_by_key(self, key: str) -> Optional[ApiKey]:
        """Find an API key by its secret value (linear scan)."""
        for api_key in await self.get_all():
            if api_key.key == key:
                return api_key
        return None

    async def list_enabled(self) -> List[ApiKey]:
        """Return enabled keys, oldest first."""
        return [api_key for api_key in await self.get_all() if api_key.is_enabled]

    async def record_use(self, key: str) -> bool:
        """Increment the request count of the key with this value.

        Returns:
            True if the key exists and was updated
        """
        api_key = await self.get_by_key(key)
        if api_key is None:
            logger.debug("Request count not recorded, unknown API key")
            return False

        return await self.update(api_key.id, {"request_count": api_key.request_count + 1})

    get_enabled_keys = list_enabled
    increment_request_count = record_use
