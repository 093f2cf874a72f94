"""Core type definitions for the JSON Converter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorType(Enum):
    """Enumeration of error types."""
    MISSING_INPUT = "missing_input"
    BLANK_INPUT = "blank_input"
    SERIALIZATION = "serialization"
    SYNTAX = "syntax"
    TYPE_MISMATCH = "type_mismatch"


@dataclass
class ConversionError:
    """Details of a conversion that produced no value."""
    type: ErrorType
    message: str
    payload: Any = None
    target: Optional[str] = None
    cause: Optional[BaseException] = None

    @property
    def is_failure(self) -> bool:
        """True for backend failures, False for missing input."""
        return self.type not in (ErrorType.MISSING_INPUT, ErrorType.BLANK_INPUT)


@dataclass
class ConversionResult:
    """Result of a format or parse operation."""
    success: bool
    value: Any = None
    error: Optional[ConversionError] = None

    @classmethod
    def ok(cls, value: Any) -> 'ConversionResult':
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: ConversionError) -> 'ConversionResult':
        return cls(success=False, error=error)


class CoercionError(Exception):
    """Raised when a decoded tree does not fit the requested shape."""

    def __init__(self, message: str, target: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.target = target
        self.cause = cause


# Abstract base classes for interfaces

class JsonCodec(ABC):
    """Abstract interface for a JSON engine."""

    name: str = ""

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Serialize a value to JSON text."""
        pass

    @abstractmethod
    def decode(self, text: Any) -> Any:
        """Deserialize JSON text to an untyped tree."""
        pass


class ConversionObserver(ABC):
    """Abstract interface for reporting conversions that produced no value."""

    @abstractmethod
    def on_missing_input(self, error: ConversionError) -> None:
        """Report a null or blank input."""
        pass

    @abstractmethod
    def on_failure(self, error: ConversionError) -> None:
        """Report a backend failure."""
        pass
