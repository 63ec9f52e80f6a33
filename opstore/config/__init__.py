"""
Configuration management for opstore.
"""

from .settings import StoreConfig, BackendType, LogLevel
from .environment import EnvironmentLoader
from .validation import ConfigValidator
from .defaults import (
    DEFAULT_MODEL_MAPPINGS,
    get_default_system_settings,
    get_default_model_mappings,
)

__all__ = [
    'StoreConfig',
    'BackendType',
    'LogLevel',
    'EnvironmentLoader',
    'ConfigValidator',
    'DEFAULT_MODEL_MAPPINGS',
    'get_default_system_settings',
    'get_default_model_mappings',
]
