"""
Configuration settings for opstore.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BackendType(Enum):
    """Supported key-value backends."""
    MEMORY = "memory"
    SQLITE = "sqlite"


@dataclass
class StoreConfig:
    """Configuration for the storage layer and its repositories."""
    backend: BackendType = BackendType.SQLITE
    db_path: str = "data/opstore.db"
    pool_size: int = 5
    max_fail_num: int = 3
    max_request_record_num: int = 1000
    default_cookies: List[str] = field(default_factory=list)
    default_api_keys: List[str] = field(default_factory=list)
    log_level: LogLevel = LogLevel.INFO
