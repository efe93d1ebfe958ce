"""Structured JSON logging used by :class:`~cache_factory.sinks.LoggingSink`."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Union

from .errors import CacheFactoryError, json_ready, record_error, sanitize_context

AnyLogger = Union[logging.Logger, logging.LoggerAdapter]


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that serialises records as JSON strings.

    Bound context (``extra``) and per-call ``context=`` keyword values are
    redacted and merged under the payload's ``context`` key.
    """

    def process(self, msg: Any, kwargs: Mapping[str, Any]):  # type: ignore[override]
        call_context = kwargs.pop("context", None)
        payload = dict(msg) if isinstance(msg, Mapping) else {"message": str(msg)}
        context = sanitize_context({**(self.extra or {}), **(call_context or {})})
        if context:
            payload.setdefault("context", {}).update(context)
        payload.setdefault("logger", self.logger.name)
        payload.setdefault(
            "timestamp",
            datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        )
        kwargs.setdefault("extra", {})["structured"] = payload
        return json.dumps(payload, default=json_ready), dict(kwargs)


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a structured logger adapter bound to ``name``.

    Handlers and levels are left to the application.
    """

    return StructuredLoggerAdapter(logging.getLogger(name), sanitize_context(context))


def log_exception(
    logger: AnyLogger,
    error: CacheFactoryError,
    *,
    event: str,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Emit a structured error log and count ``error`` in the metrics."""

    payload: dict[str, Any] = {"event": event, "error": error.to_dict()}
    merged = sanitize_context({**(context or {}), **error.context})
    if merged:
        payload["context"] = merged
    record_error(error)
    logger.error(payload)


__all__ = ["StructuredLoggerAdapter", "get_logger", "log_exception"]
