"""
Process wiring for services embedding opstore.

Loads configuration, sets up logging and initializes the repositories before
any traffic is served.
"""

import logging
import sys
from typing import Optional

from .config import EnvironmentLoader, LogLevel, StoreConfig
from .data import RepositoryFactory, initialize_repositories

logger = logging.getLogger(__name__)


def setup_logging(level: LogLevel = LogLevel.INFO) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=level.value,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level.value)


async def start(config: Optional[StoreConfig] = None) -> RepositoryFactory:
    """Load configuration, initialize repositories and seed defaults.

    Args:
        config: Configuration to use instead of the environment

    Returns:
        The initialized default repository factory
    """
    if config is None:
        config = EnvironmentLoader.load_validated_config()

    setup_logging(config.log_level)
    logger.info(f"Starting opstore with {config.backend.value} backend")

    factory = initialize_repositories(config)
    await factory.initialize_database()
    return factory
