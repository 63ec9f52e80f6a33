"""
API key model.
"""

from dataclasses import dataclass, field
from typing import Optional

from .base import BaseModel, generate_id, now_ms


@dataclass
class ApiKey(BaseModel):
    """A client API key with a running request counter."""
    id: str = field(default_factory=generate_id)
    key: str = ""
    name: Optional[str] = None  # Display label for admin views
    is_enabled: bool = True
    is_default: bool = False
    created_at: int = field(default_factory=now_ms)
    request_count: int = 0
