"""
Mutable settings models.

These are edited through admin tooling, so they are pydantic models and every
stored or patched value is type-checked on the way in.
"""

from pydantic import BaseModel, ConfigDict, Field


class SystemSettings(BaseModel):
    """Global runtime settings, stored as a single record."""
    model_config = ConfigDict(extra="forbid")

    max_fail_num: int = Field(default=3, ge=1)
    max_request_record_num: int = Field(default=1000, ge=1)
    enable_request_log: bool = True
    stream_enabled: bool = True
    default_model: str = "claude-sonnet-4"


class ModelMapping(BaseModel):
    """Maps a client-facing model name onto an upstream model."""
    model_config = ConfigDict(extra="forbid")

    name: str
    target: str
    enabled: bool = True
