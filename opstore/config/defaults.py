"""
Static defaults returned when a settings record has never been written.
"""

from typing import List

from ..models.settings import ModelMapping, SystemSettings

DEFAULT_MODEL_MAPPINGS = [
    {"name": "claude-sonnet-4", "target": "claude-sonnet-4-20250514"},
    {"name": "claude-opus-4", "target": "claude-opus-4-20250514"},
    {"name": "claude-3-7-sonnet", "target": "claude-3-7-sonnet-20250219"},
]


def get_default_system_settings() -> SystemSettings:
    """Return a fresh copy of the default system settings."""
    return SystemSettings()


def get_default_model_mappings() -> List[ModelMapping]:
    """Return a fresh copy of the default model mappings."""
    return [ModelMapping(**mapping) for mapping in DEFAULT_MODEL_MAPPINGS]
