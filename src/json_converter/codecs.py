"""JSON engines behind the converter."""

import json
from typing import Any, Dict, List, Type

import orjson

from .exposure import make_default_hook
from .types import JsonCodec


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Out of range float value: {name}")


class StdlibJsonCodec(JsonCodec):
    """
    Codec backed by the standard library ``json`` module.

    Produces compact output and rejects the non-standard NaN/Infinity
    constants in both directions.
    """

    name = "json"

    def __init__(self, expose_only: bool = False):
        """
        Initialize the codec.

        Args:
            expose_only: Serialize only fields marked as exposed
        """
        self._expose_only = expose_only
        self._default = make_default_hook(expose_only)

    @property
    def expose_only(self) -> bool:
        return self._expose_only

    def encode(self, value: Any) -> str:
        return json.dumps(
            value,
            default=self._default,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )

    def decode(self, text: Any) -> Any:
        return json.loads(text, parse_constant=_reject_constant)

    def __repr__(self) -> str:
        return f"StdlibJsonCodec(expose_only={self._expose_only})"


class OrjsonCodec(JsonCodec):
    """Codec backed by ``orjson``."""

    name = "orjson"

    def __init__(self, expose_only: bool = False):
        """
        Initialize the codec.

        Args:
            expose_only: Serialize only fields marked as exposed
        """
        self._expose_only = expose_only
        self._default = make_default_hook(expose_only)
        # Dataclasses go through the hook so both engines filter them alike.
        self._options = orjson.OPT_NON_STR_KEYS | orjson.OPT_PASSTHROUGH_DATACLASS

    @property
    def expose_only(self) -> bool:
        return self._expose_only

    def encode(self, value: Any) -> str:
        return orjson.dumps(value, default=self._default, option=self._options).decode("utf-8")

    def decode(self, text: Any) -> Any:
        return orjson.loads(text)

    def __repr__(self) -> str:
        return f"OrjsonCodec(expose_only={self._expose_only})"


_REGISTRY: Dict[str, Type[JsonCodec]] = {
    StdlibJsonCodec.name: StdlibJsonCodec,
    OrjsonCodec.name: OrjsonCodec,
}

CODECS: List[str] = list(_REGISTRY)


def get_codec(name: str, expose_only: bool = False) -> JsonCodec:
    """
    Build a codec by name.

    Args:
        name: Codec name, one of ``CODECS``
        expose_only: Serialize only fields marked as exposed

    Returns:
        New codec instance

    Raises:
        ValueError: If the name is unknown
    """
    try:
        codec_cls = _REGISTRY[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown codec: {name!r} (expected one of {', '.join(CODECS)})")
    return codec_cls(expose_only=expose_only)
