"""
Data access layer for opstore.

Repositories for cookies, API keys, request logs and settings, all built on a
minimal key-value backend contract (point get/upsert/delete plus prefix scan).

Example Usage:
    ```python
    from opstore.config import StoreConfig
    from opstore.data import initialize_repositories

    factory = initialize_repositories(StoreConfig(db_path="data/opstore.db"))
    await factory.initialize_database()

    cookies = await factory.cookies.get_valid_cookies()
    await factory.logs.append("/v1/chat/completions", method="POST", status_code=200)
    ```
"""

from .keys import KEY_DELIMITER, encode_key, decode_key, is_descendant
from .base import KVStore
from .memory import MemoryKVStore
from .sqlite import SQLiteKVStore
from .entity import EntityRepository
from .cookies import CookieRepository
from .api_keys import ApiKeyRepository
from .logs import LogRetentionStore
from .settings import SystemSettingsStore, ModelMappingStore
from .bootstrap import BootstrapResult, seed_defaults
from .repositories import (
    RepositoryFactory,
    create_store,
    initialize_repositories,
    get_repository_factory,
    initialize_database,
    close_repositories,
)

__all__ = [
    # Key encoding
    "KEY_DELIMITER",
    "encode_key",
    "decode_key",
    "is_descendant",

    # Backends
    "KVStore",
    "MemoryKVStore",
    "SQLiteKVStore",

    # Repositories
    "EntityRepository",
    "CookieRepository",
    "ApiKeyRepository",
    "LogRetentionStore",
    "SystemSettingsStore",
    "ModelMappingStore",

    # Bootstrap
    "BootstrapResult",
    "seed_defaults",

    # Repository factory
    "RepositoryFactory",
    "create_store",
    "initialize_repositories",
    "get_repository_factory",
    "initialize_database",
    "close_repositories",
]
