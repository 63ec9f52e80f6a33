"""
Generic repository for id-addressed entity collections.

Each entity lives at ``[prefix, id]``. Listing is a full prefix scan sorted
by ``created_at``; there is no secondary index.

Updates and deletes are read-then-write with no version check. Two concurrent
``update()`` calls on the same id can interleave so that the second write
discards fields changed by the first. Callers that need strict consistency
must serialize externally.
"""

import logging
from typing import Any, Dict, FrozenSet, Generic, List, Optional, Type, TypeVar

from .base import KVStore
from .keys import encode_key
from ..exceptions import StorageReadError, create_error_context
from ..models.base import BaseModel, now_ms

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class EntityRepository(Generic[T]):
    """Base repository with get_all, get, add, update and delete.

    Subclasses set ``prefix`` and ``model``. ``server_fields`` are assigned
    on creation and can never be supplied by callers of ``add()``.
    """

    prefix: str = ""
    model: Type[T]
    server_fields: FrozenSet[str] = frozenset({"id", "created_at", "updated_at"})

    def __init__(self, store: KVStore):
        self.store = store

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _key(self, entity_id: str) -> str:
        return encode_key([self.prefix, entity_id])

    def _decode(self, key: str, value: Any) -> T:
        """Convert a stored value into an entity."""
        if not isinstance(value, dict):
            raise StorageReadError(
                message=f"Stored {self.entity_name} at {key} is not a record",
                error_code="CORRUPT_RECORD",
                context=create_error_context(operation="decode", key=key),
            )
        try:
            return self.model.from_dict(value)
        except TypeError as e:
            raise StorageReadError(
                message=f"Stored {self.entity_name} at {key} cannot be decoded: {e}",
                error_code="CORRUPT_RECORD",
                context=create_error_context(operation="decode", key=key),
            ) from e

    async def get_all(self) -> List[T]:
        """Return every entity in the collection, oldest first."""
        rows = await self.store.scan_prefix(encode_key([self.prefix]))
        entities = [self._decode(key, value) for key, value in rows]
        return sorted(entities, key=lambda entity: entity.created_at)

    async def get(self, entity_id: str) -> Optional[T]:
        """Return a single entity by id, or None."""
        try:
            key = self._key(entity_id)
        except ValueError:
            # no entity can be stored under an id that is not a valid key segment
            logger.debug(f"Lookup of {self.entity_name} with invalid id {entity_id!r}")
            return None
        value = await self.store.get(key)
        if value is None:
            return None
        return self._decode(key, value)

    async def exists(self, entity_id: str) -> bool:
        return await self.get(entity_id) is not None

    async def count(self) -> int:
        return len(await self.store.scan_prefix(encode_key([self.prefix])))

    async def add(self, **fields: Any) -> T:
        """Create and persist a new entity.

        Args:
            **fields: Caller-supplied entity fields

        Returns:
            The stored entity with its generated id and timestamps

        Raises:
            ValueError: If a server-assigned or unknown field is supplied, or a
                value has the wrong type
        """
        supplied = self.server_fields.intersection(fields)
        if supplied:
            raise ValueError(
                f"{self.entity_name} fields {sorted(supplied)} are assigned by the store"
            )
        self._check_fields(fields)

        timestamp = now_ms()
        stamps = {
            name: timestamp
            for name in ("created_at", "updated_at")
            if name in self.model.field_names()
        }
        entity = self.model(**fields, **stamps)

        await self.store.upsert(self._key(entity.id), entity.to_dict())
        logger.debug(f"Added {self.entity_name} {entity.id}")
        return entity

    async def update(self, entity_id: str, changes: Dict[str, Any]) -> bool:
        """Shallow-merge changes over an existing entity.

        Args:
            entity_id: Id of the entity to update
            changes: Field values to overwrite

        Returns:
            True if the entity existed and was written, False otherwise

        Raises:
            ValueError: If changes name an unknown field, have the wrong type
                or try to change the id
        """
        self._check_fields(changes)
        if "id" in changes and changes["id"] != entity_id:
            raise ValueError(f"Cannot change the id of {self.entity_name} {entity_id}")

        existing = await self.get(entity_id)
        if existing is None:
            logger.debug(f"Update skipped, {self.entity_name} {entity_id} not found")
            return False

        self._check_update(existing, changes)

        merged = {**existing.to_dict(), **changes}
        if "updated_at" in self.model.field_names():
            merged["updated_at"] = now_ms()

        updated = self.model.from_dict(merged)
        await self.store.upsert(self._key(entity_id), updated.to_dict())
        logger.debug(f"Updated {self.entity_name} {entity_id}: {sorted(changes)}")
        return True

    async def delete(self, entity_id: str) -> bool:
        """Delete an entity unless it is missing or a protected default.

        Returns:
            True if deleted, False if absent or refused
        """
        existing = await self.get(entity_id)
        if existing is None:
            return False

        if getattr(existing, "is_default", False):
            logger.warning(f"Refusing to delete default {self.entity_name} {entity_id}")
            return False

        await self.store.delete(self._key(entity_id))
        logger.info(f"Deleted {self.entity_name} {entity_id}")
        return True

    def _check_update(self, existing: T, changes: Dict[str, Any]) -> None:
        """Hook for entity-specific rules on a pending update."""

    def _check_fields(self, fields: Dict[str, Any]) -> None:
        unknown = set(fields) - self.model.field_names()
        if unknown:
            raise ValueError(f"Unknown {self.entity_name} fields: {sorted(unknown)}")
        self.model.check_types(fields)
