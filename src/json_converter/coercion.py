"""Second phase of decoding: coerce untyped JSON trees into requested types."""

import logging
import threading
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from .types import CoercionError


def type_name(target: Any) -> str:
    """
    Render a readable name for a type descriptor.

    Args:
        target: Class or typing construct

    Returns:
        Name such as ``int``, ``list[int]`` or ``Point``
    """
    if isinstance(target, type) and not getattr(target, "__args__", None):
        return target.__qualname__
    return repr(target).replace("typing.", "")


class TypeCoercer:
    """
    Converts decoded JSON nodes into instances of caller-supplied types.

    Uses pydantic ``TypeAdapter`` in lax mode, so ``"1"`` fits ``int`` and
    a JSON object fits a dataclass or model. Adapters are built once per
    target type and shared afterwards.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the coercer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._adapters: Dict[Any, TypeAdapter] = {}
        self._lock = threading.Lock()

    def adapter_for(self, target: Any) -> TypeAdapter:
        """
        Get the adapter for a target type, building it on first use.

        Raises:
            TypeError: If pydantic cannot build a schema for the target
        """
        try:
            adapter = self._adapters.get(target)
        except TypeError:
            # Unhashable type descriptor, build without caching.
            return TypeAdapter(target)

        if adapter is None:
            adapter = TypeAdapter(target)
            with self._lock:
                self._adapters.setdefault(target, adapter)
            self.logger.debug(f"Built type adapter for {type_name(target)}")
        return adapter

    def coerce(self, node: Any, target: Any) -> Any:
        """
        Coerce one decoded node into the target type.

        Args:
            node: Untyped value produced by a codec
            target: Type descriptor to materialize

        Returns:
            Instance of the target type

        Raises:
            CoercionError: If the node does not fit the target type
        """
        try:
            return self.adapter_for(target).validate_python(node)
        except ValidationError as e:
            raise CoercionError(
                f"Cannot convert {type(node).__name__} to {type_name(target)}: "
                f"{e.error_count()} validation error(s)",
                target=type_name(target),
                cause=e,
            )
        except TypeError as e:
            # Raised by pydantic for types it cannot build a schema for.
            raise CoercionError(
                f"Unsupported target type {type_name(target)}: {e}",
                target=type_name(target),
                cause=e,
            )
        except Exception as e:
            # Raised by the target type itself, e.g. from __post_init__ or a validator.
            raise CoercionError(
                f"Cannot convert {type(node).__name__} to {type_name(target)}: {e}",
                target=type_name(target),
                cause=e,
            )

    def clear_cache(self) -> None:
        with self._lock:
            self._adapters.clear()
