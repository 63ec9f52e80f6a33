"""
Base model helpers shared by all stored entities.
"""

import time
import uuid
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Set, Type, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T", bound="BaseModel")


def generate_id() -> str:
    """Generate a unique identifier for a new entity."""
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


@dataclass
class BaseModel:
    """Dataclass mixin providing dictionary serialization."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create from dictionary, ignoring keys the model does not know."""
        known = cls.field_names()
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def field_names(cls) -> Set[str]:
        return {f.name for f in fields(cls)}

    @classmethod
    def check_types(cls, values: Dict[str, Any]) -> None:
        """Check field values against the dataclass annotations.

        Raises:
            ValueError: If a value does not match its field's type
        """
        hints = get_type_hints(cls)
        for name, value in values.items():
            if name in hints and not _matches(value, hints[name]):
                raise ValueError(
                    f"{cls.__name__}.{name} must be {_describe(hints[name])}, "
                    f"got {type(value).__name__}"
                )


def _matches(value: Any, expected: Any) -> bool:
    if expected is Any:
        return True

    origin = get_origin(expected)
    if origin is Union:
        return any(_matches(value, arg) for arg in get_args(expected))
    if origin is not None:
        return isinstance(value, origin)

    if expected is type(None):
        return value is None
    # bool is a subclass of int but never a valid count or timestamp
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def _describe(expected: Any) -> str:
    origin = get_origin(expected)
    if origin is Union:
        return " or ".join(_describe(arg) for arg in get_args(expected))
    if origin is not None:
        return origin.__name__
    if expected is type(None):
        return "None"
    return getattr(expected, "__name__", str(expected))
