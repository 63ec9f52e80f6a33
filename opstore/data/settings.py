"""
Single-record settings stores.

Settings live at one fixed key and are absent until first written. Reads of
an absent record return a static default without writing it back.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from .base import KVStore
from .keys import encode_key
from ..config.defaults import get_default_model_mappings, get_default_system_settings
from ..exceptions import StorageReadError, create_error_context
from ..models.settings import ModelMapping, SystemSettings

logger = logging.getLogger(__name__)

SYSTEM_SETTINGS_KEY = encode_key(["settings", "system"])
MODEL_MAPPINGS_KEY = encode_key(["settings", "models"])


class SystemSettingsStore:
    """Stores SystemSettings as a single record with merge-patch updates."""

    def __init__(self, store: KVStore):
        self.store = store

    async def get(self) -> SystemSettings:
        """Return stored settings, or the defaults if none were written."""
        value = await self.store.get(SYSTEM_SETTINGS_KEY)
        if value is None:
            return get_default_system_settings()
        try:
            return SystemSettings.model_validate(value)
        except ValidationError as e:
            raise StorageReadError(
                message=f"Stored system settings are invalid: {e}",
                error_code="CORRUPT_RECORD",
                context=create_error_context(operation="decode", key=SYSTEM_SETTINGS_KEY),
            ) from e

    async def update(self, changes: Dict[str, Any]) -> SystemSettings:
        """Merge changes over the current settings and store the result.

        Raises:
            pydantic.ValidationError: If a field is unknown or has the wrong type
        """
        current = await self.get()
        merged = SystemSettings.model_validate({**current.model_dump(), **changes})
        await self.store.upsert(SYSTEM_SETTINGS_KEY, merged.model_dump())
        logger.info(f"System settings updated: {sorted(changes)}")
        return merged


class ModelMappingStore:
    """Stores the model mapping list as a single record."""

    def __init__(self, store: KVStore):
        self.store = store

    async def get(self) -> List[ModelMapping]:
        """Return stored mappings, or the defaults if none were written."""
        value = await self.store.get(MODEL_MAPPINGS_KEY)
        if value is None:
            return get_default_model_mappings()
        try:
            return [ModelMapping.model_validate(item) for item in value]
        except (TypeError, ValidationError) as e:
            raise StorageReadError(
                message=f"Stored model mappings are invalid: {e}",
                error_code="CORRUPT_RECORD",
                context=create_error_context(operation="decode", key=MODEL_MAPPINGS_KEY),
            ) from e

    async def update(self, mappings: List[Any]) -> List[ModelMapping]:
        """Replace the whole mapping list.

        Args:
            mappings: ModelMapping instances or dictionaries

        Returns:
            The stored mappings
        """
        validated = [ModelMapping.model_validate(item) for item in mappings]
        await self.store.upsert(
            MODEL_MAPPINGS_KEY, [mapping.model_dump() for mapping in validated]
        )
        logger.info(f"Model mappings replaced ({len(validated)} entries)")
        return validated

    async def resolve(self, name: str) -> str:
        """Map a client-facing model name to its upstream target.

        Unknown or disabled names pass through unchanged.
        """
        for mapping in await self.get():
            if mapping.enabled and mapping.name == name:
                return mapping.target
        return name
