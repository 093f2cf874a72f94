"""
JSON Converter - Format values to JSON and parse JSON into typed values.

A small facade over two JSON engines (the standard library ``json`` module
and ``orjson``) that reports failures instead of raising them.
"""

__version__ = "2.0.0"

from .codecs import CODECS, OrjsonCodec, StdlibJsonCodec, get_codec
from .coercion import TypeCoercer
from .converter import (
    Converter,
    default_converter,
    format_json,
    format_json_expose_only,
    parse_json,
    parse_json_as_mapping,
    parse_json_as_sequence,
)
from .error_handler import CollectingObserver, LoggingObserver, NullObserver
from .exposure import exposed
from .types import ConversionError, ConversionObserver, ConversionResult, ErrorType, JsonCodec

__all__ = [
    "Converter",
    "default_converter",
    "format_json",
    "format_json_expose_only",
    "parse_json",
    "parse_json_as_sequence",
    "parse_json_as_mapping",
    "JsonCodec",
    "StdlibJsonCodec",
    "OrjsonCodec",
    "get_codec",
    "CODECS",
    "TypeCoercer",
    "ConversionObserver",
    "LoggingObserver",
    "NullObserver",
    "CollectingObserver",
    "ConversionError",
    "ConversionResult",
    "ErrorType",
    "exposed",
]
