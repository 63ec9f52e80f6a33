"""
Request log model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .base import BaseModel, generate_id, now_ms


@dataclass
class RequestLog(BaseModel):
    """A single served request. Logs are append-only."""
    id: str = field(default_factory=generate_id)
    timestamp: int = field(default_factory=now_ms)
    path: str = ""
    method: Optional[str] = None
    status_code: Optional[int] = None
    model: Optional[str] = None
    duration_ms: Optional[int] = None
    cookie_id: Optional[str] = None
    api_key_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
