"""
Data models for opstore.

Stored entities are dataclasses with dictionary serialization; admin-editable
settings are pydantic models.
"""

from .base import BaseModel, generate_id, now_ms
from .cookie import Cookie
from .api_key import ApiKey
from .request_log import RequestLog
from .settings import SystemSettings, ModelMapping

__all__ = [
    'BaseModel',
    'generate_id',
    'now_ms',
    'Cookie',
    'ApiKey',
    'RequestLog',
    'SystemSettings',
    'ModelMapping',
]
