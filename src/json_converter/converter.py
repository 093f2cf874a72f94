"""Converter facade: format values to JSON and parse JSON into typed values."""

import logging
import threading
from typing import Any, Dict, List, Optional, Union

from .codecs import CODECS, StdlibJsonCodec, get_codec
from .coercion import TypeCoercer, type_name
from .error_handler import LoggingObserver
from .types import (
    CoercionError,
    ConversionError,
    ConversionObserver,
    ConversionResult,
    ErrorType,
    JsonCodec,
)

CodecSpec = Union[JsonCodec, str, None]


def _is_blank(text: Any) -> bool:
    if text is None:
        return True
    if isinstance(text, (str, bytes, bytearray)):
        return not text.strip()
    return False


class Converter:
    """
    Formats values to JSON text and parses JSON text into typed values.

    Every operation returns either its result or ``None``; nothing raised by
    the JSON engines or the type coercion reaches the caller. Each operation
    has a ``*_result`` twin returning a ``ConversionResult`` that carries the
    structured error instead. Reports go to the observer, which logs by
    default.

    Typed decoding is done in two phases: the codec produces an untyped
    tree, then every node (or every element, key and value for sequences and
    mappings) is coerced into the requested type.
    """

    def __init__(self, codec: CodecSpec = None,
                 expose_codec: Optional[JsonCodec] = None,
                 observer: Optional[ConversionObserver] = None,
                 logger: Optional[logging.Logger] = None,
                 coercer: Optional[TypeCoercer] = None):
        """
        Initialize the converter.

        Args:
            codec: Default codec, as an instance or a name (defaults to ``json``)
            expose_codec: Codec used by expose-only formatting (defaults to
                the default codec's engine with ``expose_only=True``)
            observer: Receiver of missing-input and failure reports
                (defaults to a LoggingObserver)
            logger: Optional logger instance
            coercer: Optional TypeCoercer instance

        Raises:
            ValueError: If a codec name is unknown, or no expose-only codec
                can be derived for a custom codec
        """
        self.logger = logger or logging.getLogger(__name__)
        self.observer = observer or LoggingObserver(self.logger)
        self.coercer = coercer or TypeCoercer(self.logger)

        if codec is None:
            self.codec = StdlibJsonCodec()
        elif isinstance(codec, str):
            self.codec = get_codec(codec)
        else:
            self.codec = codec

        if expose_codec is None:
            if self.codec.name not in CODECS:
                raise ValueError(f"expose_codec is required for custom codec {self.codec!r}")
            expose_codec = get_codec(self.codec.name, expose_only=True)
        self.expose_codec = expose_codec

        self._codecs: Dict[str, JsonCodec] = {name: get_codec(name) for name in CODECS}
        self._codecs[self.codec.name] = self.codec

    def format(self, value: Any) -> Optional[str]:
        """Serialize a value to JSON text, or return None."""
        return self.format_result(value).value

    def format_expose_only(self, value: Any) -> Optional[str]:
        """Serialize only the exposed fields of a value, or return None."""
        return self.format_expose_only_result(value).value

    def parse(self, text: Any, target: Any, codec: CodecSpec = None) -> Any:
        """Parse JSON text into an instance of target, or return None."""
        return self.parse_result(text, target, codec).value

    def parse_as_sequence(self, text: Any, element_type: Any,
                          codec: CodecSpec = None) -> Optional[List[Any]]:
        """Parse a JSON array into a list of element_type, or return None."""
        return self.parse_as_sequence_result(text, element_type, codec).value

    def parse_as_mapping(self, text: Any, key_type: Any, value_type: Any,
                         codec: CodecSpec = None) -> Optional[Dict[Any, Any]]:
        """Parse a JSON object into a dict of key_type to value_type, or return None."""
        return self.parse_as_mapping_result(text, key_type, value_type, codec).value

    def format_result(self, value: Any) -> ConversionResult:
        """
        Serialize a value to JSON text.

        Args:
            value: Value to serialize

        Returns:
            ConversionResult holding the JSON text
        """
        return self._encode(self.codec, value)

    def format_expose_only_result(self, value: Any) -> ConversionResult:
        """
        Serialize a value keeping only fields marked as exposed.

        Args:
            value: Value to serialize

        Returns:
            ConversionResult holding the JSON text
        """
        return self._encode(self.expose_codec, value)

    def parse_result(self, text: Any, target: Any, codec: CodecSpec = None) -> ConversionResult:
        """
        Parse JSON text into an instance of the target type.

        Args:
            text: JSON text (str or bytes)
            target: Type to materialize
            codec: Codec for this call, as an instance or a name

        Returns:
            ConversionResult holding the parsed value

        Raises:
            ValueError: If the codec name is unknown
        """
        engine = self._resolve_codec(codec)
        target_name = type_name(target)

        if _is_blank(text):
            return self._missing_text(text, target_name)

        tree = self._decode(engine, text, target_name)
        if isinstance(tree, ConversionResult):
            return tree

        try:
            value = self.coercer.coerce(tree, target)
        except CoercionError as e:
            return self._parse_failed(ErrorType.TYPE_MISMATCH, text, target_name, e.cause or e)

        return ConversionResult.ok(value)

    def parse_as_sequence_result(self, text: Any, element_type: Any,
                                 codec: CodecSpec = None) -> ConversionResult:
        """
        Parse a JSON array into a list, coercing each element on its own.

        A single element that does not fit discards the whole list.

        Args:
            text: JSON text (str or bytes)
            element_type: Type of every element
            codec: Codec for this call, as an instance or a name

        Returns:
            ConversionResult holding the list

        Raises:
            ValueError: If the codec name is unknown
        """
        engine = self._resolve_codec(codec)
        target_name = f"list[{type_name(element_type)}]"

        if _is_blank(text):
            return self._missing_text(text, target_name)

        tree = self._decode(engine, text, target_name)
        if isinstance(tree, ConversionResult):
            return tree

        if not isinstance(tree, list):
            cause = CoercionError(f"Expected a JSON array, got {type(tree).__name__}", target=target_name)
            return self._parse_failed(ErrorType.TYPE_MISMATCH, text, target_name, cause)

        try:
            result = [self.coercer.coerce(node, element_type) for node in tree]
        except CoercionError as e:
            return self._parse_failed(ErrorType.TYPE_MISMATCH, text, target_name, e.cause or e)

        return ConversionResult.ok(result)

    def parse_as_mapping_result(self, text: Any, key_type: Any, value_type: Any,
                                codec: CodecSpec = None) -> ConversionResult:
        """
        Parse a JSON object into a dict, coercing each key and value on its own.

        Keys that coerce to the same value keep the last entry. A single key
        or value that does not fit discards the whole mapping.

        Args:
            text: JSON text (str or bytes)
            key_type: Type of every key
            value_type: Type of every value
            codec: Codec for this call, as an instance or a name

        Returns:
            ConversionResult holding the dict

        Raises:
            ValueError: If the codec name is unknown
        """
        engine = self._resolve_codec(codec)
        target_name = f"dict[{type_name(key_type)}, {type_name(value_type)}]"

        if _is_blank(text):
            return self._missing_text(text, target_name)

        tree = self._decode(engine, text, target_name)
        if isinstance(tree, ConversionResult):
            return tree

        if not isinstance(tree, dict):
            cause = CoercionError(f"Expected a JSON object, got {type(tree).__name__}", target=target_name)
            return self._parse_failed(ErrorType.TYPE_MISMATCH, text, target_name, cause)

        result = {}
        try:
            for key, node in tree.items():
                result[self.coercer.coerce(key, key_type)] = self.coercer.coerce(node, value_type)
        except CoercionError as e:
            return self._parse_failed(ErrorType.TYPE_MISMATCH, text, target_name, e.cause or e)
        except TypeError as e:
            # Coerced key is unhashable.
            return self._parse_failed(ErrorType.TYPE_MISMATCH, text, target_name, e)

        return ConversionResult.ok(result)

    def _resolve_codec(self, codec: CodecSpec) -> JsonCodec:
        if codec is None:
            return self.codec
        if isinstance(codec, JsonCodec):
            return codec
        if isinstance(codec, str):
            try:
                return self._codecs[codec.lower()]
            except KeyError:
                return get_codec(codec)
        raise TypeError(f"codec must be a JsonCodec or a codec name, not {type(codec).__name__}")

    def _encode(self, engine: JsonCodec, value: Any) -> ConversionResult:
        if value is None:
            error = ConversionError(
                type=ErrorType.MISSING_INPUT,
                message="Formatting null object to JSON.",
            )
            self.observer.on_missing_input(error)
            return ConversionResult.failed(error)

        try:
            return ConversionResult.ok(engine.encode(value))
        except Exception as e:
            class_name = type(value).__qualname__
            error = ConversionError(
                type=ErrorType.SERIALIZATION,
                message=f"JSON format failed. Object class is: {class_name}.",
                payload=class_name,
                cause=e,
            )
            self.observer.on_failure(error)
            return ConversionResult.failed(error)

    def _decode(self, engine: JsonCodec, text: Any, target_name: str) -> Any:
        """Decode to an untyped tree, or return the failed result."""
        try:
            return engine.decode(text)
        except Exception as e:
            return self._parse_failed(ErrorType.SYNTAX, text, target_name, e)

    def _missing_text(self, text: Any, target_name: str) -> ConversionResult:
        error = ConversionError(
            type=ErrorType.MISSING_INPUT if text is None else ErrorType.BLANK_INPUT,
            message=f"JSON is blank! Parsing [{text!r}] to [{target_name}].",
            payload=text,
            target=target_name,
        )
        self.observer.on_missing_input(error)
        return ConversionResult.failed(error)

    def _parse_failed(self, error_type: ErrorType, text: Any, target_name: str,
                      cause: BaseException) -> ConversionResult:
        error = ConversionError(
            type=error_type,
            message=f"Parse JSON failed. Parsing JSON [{text}] to [{target_name}] failed.",
            payload=text,
            target=target_name,
            cause=cause,
        )
        self.observer.on_failure(error)
        return ConversionResult.failed(error)


_default_converter: Optional[Converter] = None
_default_lock = threading.Lock()


def default_converter() -> Converter:
    """Get the shared converter used by the module-level functions."""
    global _default_converter
    if _default_converter is None:
        with _default_lock:
            if _default_converter is None:
                _default_converter = Converter()
    return _default_converter


def format_json(value: Any) -> Optional[str]:
    return default_converter().format(value)


def format_json_expose_only(value: Any) -> Optional[str]:
    return default_converter().format_expose_only(value)


def parse_json(text: Any, target: Any, codec: CodecSpec = None) -> Any:
    return default_converter().parse(text, target, codec)


def parse_json_as_sequence(text: Any, element_type: Any, codec: CodecSpec = None) -> Optional[List[Any]]:
    return default_converter().parse_as_sequence(text, element_type, codec)


def parse_json_as_mapping(text: Any, key_type: Any, value_type: Any,
                          codec: CodecSpec = None) -> Optional[Dict[Any, Any]]:
    return default_converter().parse_as_mapping(text, key_type, value_type, codec)
