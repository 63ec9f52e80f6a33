"""
Repository factory.

Builds every repository over one explicit backend handle and configuration,
so nothing reads ambient global state.
"""

import logging
from typing import Optional

from ..base import KVStore
from ..memory import MemoryKVStore
from ..sqlite import SQLiteKVStore
from ..cookies import CookieRepository
from ..api_keys import ApiKeyRepository
from ..logs import LogRetentionStore
from ..settings import SystemSettingsStore, ModelMappingStore
from ..bootstrap import BootstrapResult, seed_defaults
from ...config.settings import StoreConfig, BackendType

logger = logging.getLogger(__name__)


def create_store(config: StoreConfig) -> KVStore:
    """Create the key-value backend named by the configuration."""
    if config.backend == BackendType.MEMORY:
        return MemoryKVStore()
    elif config.backend == BackendType.SQLITE:
        return SQLiteKVStore(config.db_path, config.pool_size)
    else:
        raise ValueError(f"Unsupported backend: {config.backend}")


class RepositoryFactory:
    """Factory for creating repository instances."""

    def __init__(self, store: KVStore, config: Optional[StoreConfig] = None):
        """
        Initialize repository factory.

        Args:
            store: Key-value backend shared by all repositories
            config: Retention cap, failure threshold and seed lists
        """
        self.store = store
        self.config = config or StoreConfig()
        self._cookies: Optional[CookieRepository] = None
        self._api_keys: Optional[ApiKeyRepository] = None
        self._logs: Optional[LogRetentionStore] = None
        self._settings: Optional[SystemSettingsStore] = None
        self._model_mappings: Optional[ModelMappingStore] = None
        self._initialized = False

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RepositoryFactory":
        return cls(create_store(config), config)

    @property
    def cookies(self) -> CookieRepository:
        if self._cookies is None:
            self._cookies = CookieRepository(self.store, self.config.max_fail_num)
        return self._cookies

    @property
    def api_keys(self) -> ApiKeyRepository:
        if self._api_keys is None:
            self._api_keys = ApiKeyRepository(self.store)
        return self._api_keys

    @property
    def logs(self) -> LogRetentionStore:
        if self._logs is None:
            self._logs = LogRetentionStore(self.store, self.config.max_request_record_num)
        return self._logs

    @property
    def settings(self) -> SystemSettingsStore:
        if self._settings is None:
            self._settings = SystemSettingsStore(self.store)
        return self._settings

    @property
    def model_mappings(self) -> ModelMappingStore:
        if self._model_mappings is None:
            self._model_mappings = ModelMappingStore(self.store)
        return self._model_mappings

    async def initialize_database(self) -> BootstrapResult:
        """Connect the backend and seed defaults.

        Must be awaited once before any other repository is used.
        """
        await self.store.connect()
        result = await seed_defaults(
            self.cookies,
            self.api_keys,
            self.config.default_cookies,
            self.config.default_api_keys,
        )
        self._initialized = True
        logger.info(
            f"Database initialized ({type(self.store).__name__}): "
            f"{result.cookies_seeded} cookies, {result.api_keys_seeded} API keys seeded"
        )
        return result

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def close(self) -> None:
        """Close backend connections."""
        await self.store.disconnect()
        self._initialized = False


# Singleton instance for easy access
_default_factory: Optional[RepositoryFactory] = None


def initialize_repositories(
    config: StoreConfig,
    store: Optional[KVStore] = None,
) -> RepositoryFactory:
    """
    Initialize the default repository factory.

    Args:
        config: Store configuration
        store: Backend to use instead of the one named by config

    Returns:
        Initialized repository factory
    """
    global _default_factory
    _default_factory = RepositoryFactory(store or create_store(config), config)
    return _default_factory


def get_repository_factory() -> RepositoryFactory:
    """
    Get the default repository factory instance.

    Raises:
        RuntimeError: If repositories have not been initialized
    """
    if _default_factory is None:
        raise RuntimeError(
            "Repositories not initialized. Call initialize_repositories() first."
        )
    return _default_factory


async def initialize_database() -> BootstrapResult:
    """Connect and seed the default factory's backend."""
    return await get_repository_factory().initialize_database()


async def close_repositories() -> None:
    """Close and forget the default factory."""
    global _default_factory
    if _default_factory is not None:
        await _default_factory.close()
        _default_factory = None
