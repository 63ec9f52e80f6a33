"""
Environment variable handling for opstore configuration.
"""

import os
from typing import List

from dotenv import find_dotenv, load_dotenv

from .settings import StoreConfig, BackendType, LogLevel
from .validation import ConfigValidator
from ..exceptions import ConfigurationError, create_error_context


class EnvironmentLoader:
    """Loads configuration from environment variables."""

    @staticmethod
    def load_config() -> StoreConfig:
        """Load configuration from environment variables."""
        # Load .env from the working directory if present; real environment wins
        load_dotenv(find_dotenv(usecwd=True))

        backend_str = os.getenv('OPSTORE_BACKEND', 'sqlite').lower()
        try:
            backend = BackendType(backend_str)
        except ValueError:
            raise ConfigurationError(
                message=f"Unsupported backend: {backend_str}",
                error_code="CONFIG_UNKNOWN_BACKEND",
                context=create_error_context(operation="load_config", backend=backend_str),
            )

        log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
        log_level = LogLevel.INFO  # default
        try:
            log_level = LogLevel(log_level_str)
        except ValueError:
            pass  # Use default

        return StoreConfig(
            backend=backend,
            db_path=os.getenv('OPSTORE_DB_PATH', 'data/opstore.db'),
            pool_size=EnvironmentLoader._get_int('OPSTORE_POOL_SIZE', 5),
            max_fail_num=EnvironmentLoader._get_int('MAX_FAIL_NUM', 3),
            max_request_record_num=EnvironmentLoader._get_int('MAX_REQUEST_RECORD_NUM', 1000),
            default_cookies=EnvironmentLoader._parse_list(os.getenv('DEFAULT_COOKIES', '')),
            default_api_keys=EnvironmentLoader._parse_list(os.getenv('DEFAULT_API_KEYS', '')),
            log_level=log_level,
        )

    @staticmethod
    def load_validated_config() -> StoreConfig:
        """Load configuration and raise if it fails validation."""
        config = EnvironmentLoader.load_config()
        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigurationError(
                message="Invalid configuration: " + "; ".join(errors),
                context=create_error_context(operation="load_validated_config"),
            )
        return config

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Read an integer environment variable."""
        value = os.getenv(key)
        if value is None or value.strip() == '':
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(
                message=f"Environment variable {key} must be an integer, got {value!r}",
                error_code="CONFIG_NOT_AN_INTEGER",
                context=create_error_context(operation="load_config", key=key),
            )

    @staticmethod
    def _parse_list(value: str, delimiter: str = ',') -> List[str]:
        """Parse a comma-separated string into a list."""
        if not value:
            return []
        return [item.strip() for item in value.split(delimiter) if item.strip()]
