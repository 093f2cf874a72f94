"""Reporting of conversions that produced no value."""

import logging
from typing import List, Optional

from .types import ConversionError, ConversionObserver


class LoggingObserver(ConversionObserver):
    """
    Writes one log record per conversion that produced no value.

    Missing or blank input is logged at WARNING, backend failures at ERROR
    with the offending payload, the target type and the underlying exception.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the observer.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def on_missing_input(self, error: ConversionError) -> None:
        self.logger.warning(error.message)

    def on_failure(self, error: ConversionError) -> None:
        exc_info = None
        if error.cause is not None:
            exc_info = (type(error.cause), error.cause, error.cause.__traceback__)
        self.logger.error(f"{error.message} Cause: {error.cause}", exc_info=exc_info)


class NullObserver(ConversionObserver):
    """Discards every report."""

    def on_missing_input(self, error: ConversionError) -> None:
        pass

    def on_failure(self, error: ConversionError) -> None:
        pass


class CollectingObserver(ConversionObserver):
    """Keeps every report in memory, in arrival order."""

    def __init__(self):
        self.errors: List[ConversionError] = []

    def on_missing_input(self, error: ConversionError) -> None:
        self.errors.append(error)

    def on_failure(self, error: ConversionError) -> None:
        self.errors.append(error)

    @property
    def failures(self) -> List[ConversionError]:
        return [error for error in self.errors if error.is_failure]

    def clear(self) -> None:
        self.errors.clear()
