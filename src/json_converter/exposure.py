"""Field exposure markers and the object-to-fields hook shared by all codecs."""

import dataclasses
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict
from uuid import UUID

from pydantic import BaseModel

EXPOSE = "expose"


def exposed(**kwargs: Any) -> Any:
    """
    Declare a dataclass field that survives expose-only formatting.

    Accepts the same keyword arguments as ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EXPOSE] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def is_exposed_dataclass_field(field: dataclasses.Field) -> bool:
    return bool(field.metadata.get(EXPOSE, False))


def is_exposed_model_field(field_info: Any) -> bool:
    extra = field_info.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(EXPOSE, False))


def object_fields(value: Any, expose_only: bool = False) -> Dict[str, Any]:
    """
    Map a dataclass instance or pydantic model to its field values.

    Nested values are returned as-is; the encoder walks into them and calls
    back here for every nested object.

    Args:
        value: Dataclass instance or pydantic model
        expose_only: Keep only fields marked as exposed

    Returns:
        Dictionary of field name to raw field value

    Raises:
        TypeError: If value is neither a dataclass instance nor a model
    """
    if isinstance(value, BaseModel):
        return {
            (info.alias or name): getattr(value, name)
            for name, info in type(value).model_fields.items()
            if not expose_only or is_exposed_model_field(info)
        }

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: getattr(value, field.name)
            for field in dataclasses.fields(value)
            if not expose_only or is_exposed_dataclass_field(field)
        }

    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def make_default_hook(expose_only: bool = False):
    """
    Build the ``default`` callback handed to the JSON engines.

    Args:
        expose_only: Filter objects down to their exposed fields

    Returns:
        Callable turning one non-native value into a JSON-native one
    """
    def default(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, (set, frozenset)):
            return list(value)
        return object_fields(value, expose_only)

    return default
