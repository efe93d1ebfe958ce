"""Error taxonomy for cache providers and decorator configuration.

Provider failures are never raised to callers of wrapped functions; they are
wrapped into the :class:`CacheError` subclass of the failed operation and
handed to the diagnostic sink. :class:`ConfigurationError` is raised eagerly
when a provider or decorator is built with invalid options.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from threading import Lock
from typing import Any, Mapping, MutableMapping, Optional, Type


class ErrorCode(str, Enum):
    """Stable identifiers for error categories used across the project."""

    CACHE_READ = "cache_read"
    CACHE_WRITE = "cache_write"
    CACHE_REMOVE = "cache_remove"
    CONFIG = "config"
    UNKNOWN = "unknown"


_SENSITIVE_KEYS = ("password", "passwd", "secret", "token", "apikey", "api_key", "auth", "credential")
_REDACTED = "***REDACTED***"


def json_ready(value: Any) -> Any:
    """Return a JSON-serialisable stand-in for ``value``."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Mapping):
        return sanitize_context(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [json_ready(v) for v in value]
    return repr(value)


def sanitize_context(context: Optional[Mapping[Any, Any]]) -> dict[str, Any]:
    """Return a shallow copy of ``context`` with sensitive values redacted.

    Cache keys often embed identifiers, so anything whose name looks like a
    credential is masked before it reaches a log line.
    """

    sanitized: dict[str, Any] = {}
    for key, value in (context or {}).items():
        name = str(key)
        if any(token in name.lower() for token in _SENSITIVE_KEYS):
            sanitized[name] = _REDACTED
        else:
            sanitized[name] = json_ready(value)
    return sanitized


def describe_exception(exc: BaseException, *, max_depth: int = 3) -> dict[str, Any]:
    """Return a serialisable description of ``exc`` and its causes."""

    payload: dict[str, Any] = {"type": type(exc).__name__}
    try:
        payload["message"] = str(exc)
    except Exception:  # pragma: no cover - broken __str__
        payload["message"] = repr(exc)
    if getattr(exc, "errno", None) is not None:
        payload["errno"] = exc.errno  # type: ignore[attr-defined]
    if max_depth <= 0:
        return payload
    if exc.__cause__ is not None and exc.__cause__ is not exc:
        payload["cause"] = describe_exception(exc.__cause__, max_depth=max_depth - 1)
    elif exc.__context__ is not None and not exc.__suppress_context__ and exc.__context__ is not exc:
        payload["context"] = describe_exception(exc.__context__, max_depth=max_depth - 1)
    return payload


class CacheFactoryError(Exception):
    """Base class for structured library errors."""

    code: ErrorCode = ErrorCode.UNKNOWN
    context: MutableMapping[str, Any]

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def add_context(self, **context: Any) -> "CacheFactoryError":
        """Attach additional context to the error in-place."""

        self.context.update({k: v for k, v in context.items() if v is not None})
        return self

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "type": type(self).__name__,
        }
        if self.context:
            payload["context"] = sanitize_context(self.context)
        if self.cause is not None:
            payload["cause"] = describe_exception(self.cause)
        return payload


class CacheError(CacheFactoryError):
    """Raised by cache providers when an operation cannot be completed.

    Providers must raise rather than return ``None`` for transient failures
    so that a failed lookup is never mistaken for a miss.
    """

    def __init__(self, message: str = "Cache operation failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class CacheReadError(CacheError):
    code = ErrorCode.CACHE_READ

    def __init__(self, message: str = "Cache read failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class CacheWriteError(CacheError):
    code = ErrorCode.CACHE_WRITE

    def __init__(self, message: str = "Cache write failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class CacheRemoveError(CacheError):
    code = ErrorCode.CACHE_REMOVE

    def __init__(self, message: str = "Cache remove failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ConfigurationError(CacheFactoryError):
    code = ErrorCode.CONFIG

    def __init__(self, message: str = "Configuration error", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


def wrap_error(
    exc: BaseException,
    error_cls: Type[CacheFactoryError] = CacheError,
    *,
    message: str,
    context: Optional[Mapping[str, Any]] = None,
) -> CacheFactoryError:
    """Return a :class:`CacheFactoryError` instance wrapping ``exc``.

    Errors already raised as :class:`CacheFactoryError` keep their class and
    only gain ``context``.
    """

    if isinstance(exc, CacheFactoryError):
        return exc.add_context(**dict(context or {}))
    return error_cls(message, context=context, cause=exc)


_error_counts: Counter[str] = Counter()
_counter_lock = Lock()


def record_error(error: CacheFactoryError) -> None:
    """Increment in-memory metrics for ``error``."""

    with _counter_lock:
        _error_counts[error.code.value] += 1


def get_error_metrics() -> dict[str, int]:
    """Return a snapshot of error counts by :class:`ErrorCode`."""

    with _counter_lock:
        return dict(_error_counts)


def reset_error_metrics() -> None:
    with _counter_lock:
        _error_counts.clear()


__all__ = [
    "CacheError",
    "CacheFactoryError",
    "CacheReadError",
    "CacheRemoveError",
    "CacheWriteError",
    "ConfigurationError",
    "describe_exception",
    "ErrorCode",
    "get_error_metrics",
    "json_ready",
    "record_error",
    "reset_error_metrics",
    "sanitize_context",
    "wrap_error",
]
