"""
Configuration validation for opstore.
"""

from typing import List

from .settings import StoreConfig, BackendType


class ConfigValidator:
    """Validates configuration settings."""

    @staticmethod
    def validate_config(config: StoreConfig) -> List[str]:
        """Validate the entire store configuration."""
        errors = []

        errors.extend(ConfigValidator._validate_backend(config))
        errors.extend(ConfigValidator._validate_numeric_ranges(config))
        errors.extend(ConfigValidator._validate_defaults(config))

        return errors

    @staticmethod
    def _validate_backend(config: StoreConfig) -> List[str]:
        """Validate backend-specific settings."""
        errors = []

        if config.backend == BackendType.SQLITE:
            if not config.db_path:
                errors.append("SQLite backend requires a database path")
            if config.pool_size < 1:
                errors.append(f"Pool size must be at least 1, got {config.pool_size}")

        return errors

    @staticmethod
    def _validate_numeric_ranges(config: StoreConfig) -> List[str]:
        """Validate numeric configuration values are in acceptable ranges."""
        errors = []

        if config.max_fail_num < 1:
            errors.append(f"MAX_FAIL_NUM must be at least 1, got {config.max_fail_num}")

        if config.max_request_record_num < 1:
            errors.append(
                f"MAX_REQUEST_RECORD_NUM must be at least 1, got {config.max_request_record_num}"
            )

        return errors

    @staticmethod
    def _validate_defaults(config: StoreConfig) -> List[str]:
        """Validate the seed lists used at bootstrap."""
        errors = []

        if len(set(config.default_api_keys)) != len(config.default_api_keys):
            errors.append("DEFAULT_API_KEYS contains duplicate keys")

        return errors
