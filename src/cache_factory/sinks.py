"""Diagnostic sinks receiving non-fatal cache failures."""

from __future__ import annotations

import logging
from typing import Any, Protocol, Type, runtime_checkable

from .errors import (
    CacheError,
    CacheReadError,
    CacheRemoveError,
    CacheWriteError,
    wrap_error,
)
from .logging import get_logger, log_exception

GET_FAILED = "Could not get value from cache"
SET_FAILED = "Could not add value to cache"
REMOVE_FAILED = "Could not remove log entry"

_ERROR_BY_MESSAGE: dict[str, Type[CacheError]] = {
    GET_FAILED: CacheReadError,
    SET_FAILED: CacheWriteError,
    REMOVE_FAILED: CacheRemoveError,
}


@runtime_checkable
class DiagnosticSink(Protocol):
    """Anything with an ``error(message, cause)`` method."""

    def error(self, message: str, cause: Any) -> None:
        """Report a cache operation that failed and was recovered from."""


class NoopSink:
    """Sink that drops every report."""

    def error(self, message: str, cause: Any) -> None:
        return None


class LoggingSink:
    """Sink emitting structured error logs through :func:`log_exception`.

    The cause is wrapped in the :class:`CacheError` subclass matching the
    failed operation, so error metrics are counted per operation.
    """

    def __init__(
        self,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        *,
        event: str = "cache_operation_failed",
    ) -> None:
        self.logger = logger or get_logger("cache_factory", component="cache_factory")
        self.event = event

    def error(self, message: str, cause: Any) -> None:
        error_cls = _ERROR_BY_MESSAGE.get(message, CacheError)
        if isinstance(cause, BaseException):
            error = wrap_error(cause, error_cls, message=message)
        else:
            error = error_cls(message, context={"cause": cause})
        log_exception(self.logger, error, event=self.event)


__all__ = [
    "DiagnosticSink",
    "GET_FAILED",
    "LoggingSink",
    "NoopSink",
    "REMOVE_FAILED",
    "SET_FAILED",
]
