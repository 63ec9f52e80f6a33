"""
Authentication cookie model.
"""

from dataclasses import dataclass, field

from .base import BaseModel, generate_id, now_ms


@dataclass
class Cookie(BaseModel):
    """A rotating upstream authentication cookie.

    ``is_valid`` tracks whether ``fail_count`` is still below the configured
    failure threshold. Default cookies are seeded at startup and can never be
    deleted.
    """
    id: str = field(default_factory=generate_id)
    value: str = ""
    is_valid: bool = True
    fail_count: int = 0
    is_default: bool = False
    created_at: int = field(default_factory=now_ms)
    updated_at: int = field(default_factory=now_ms)
