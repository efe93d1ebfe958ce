"""Tests for structured error payloads and the logging sink."""

from __future__ import annotations

import json
import logging

import pytest

from cache_factory import CacheFactory, LoggingSink
from cache_factory.errors import (
    CacheReadError,
    CacheWriteError,
    ErrorCode,
    describe_exception,
    sanitize_context,
    wrap_error,
)
from cache_factory.providers import CacheProvider
from cache_factory.sinks import DiagnosticSink, NoopSink


class UnreachableProvider(CacheProvider):
    async def get(self, key):
        raise ConnectionRefusedError(111, "Connection refused")

    async def set(self, key, value):
        raise ConnectionRefusedError(111, "Connection refused")

    async def remove(self, key):
        raise ConnectionRefusedError(111, "Connection refused")

    async def remove_all(self):
        raise ConnectionRefusedError(111, "Connection refused")


def _error_payloads(caplog):
    return [json.loads(rec.message) for rec in caplog.records if rec.levelname == "ERROR"]


def test_sinks_satisfy_protocol():
    assert isinstance(NoopSink(), DiagnosticSink)
    assert isinstance(LoggingSink(), DiagnosticSink)
    assert NoopSink().error("ignored", RuntimeError()) is None


def test_describe_exception_follows_cause_chain():
    try:
        try:
            raise ConnectionRefusedError(111, "Connection refused")
        except ConnectionRefusedError as exc:
            raise CacheReadError("lookup failed") from exc
    except CacheReadError as err:
        payload = describe_exception(err)

    assert payload["type"] == "CacheReadError"
    assert payload["cause"]["type"] == "ConnectionRefusedError"
    assert payload["cause"]["errno"] == 111


def test_sanitize_context_redacts_secrets():
    sanitized = sanitize_context({"redis_password": "hunter2", "key": ("a", 1)})

    assert sanitized["redis_password"] == "***REDACTED***"
    assert sanitized["key"] == ["a", 1]


def test_wrap_error_keeps_existing_library_errors():
    original = CacheWriteError("write failed")

    wrapped = wrap_error(original, CacheReadError, message="ignored", context={"key": "k"})

    assert wrapped is original
    assert wrapped.context == {"key": "k"}


def test_wrap_error_embeds_cause():
    cause = TimeoutError("too slow")

    wrapped = wrap_error(cause, CacheWriteError, message="Could not add value to cache")

    assert isinstance(wrapped, CacheWriteError)
    assert wrapped.__cause__ is cause
    assert wrapped.to_dict()["cause"]["message"] == "too slow"


@pytest.mark.asyncio
async def test_logging_sink_emits_structured_errors_per_operation(caplog, error_metrics):
    caplog.set_level(logging.ERROR)
    factory = CacheFactory(UnreachableProvider(), sink=LoggingSink())

    async def load(key):
        return f"value-{key}"

    assert await factory.cache_calls(load)("k") == "value-k"
    assert await factory.evict_on_call(load)("k") == "value-k"
    assert await factory.add_result_to_cache(load)("k") == "value-k"

    payloads = _error_payloads(caplog)
    assert [entry["event"] for entry in payloads] == ["cache_operation_failed"] * 3
    assert [entry["error"]["code"] for entry in payloads] == [
        ErrorCode.CACHE_READ.value,
        ErrorCode.CACHE_REMOVE.value,
        ErrorCode.CACHE_WRITE.value,
    ]
    assert payloads[0]["error"]["message"] == "Could not get value from cache"
    assert payloads[0]["error"]["cause"]["type"] == "ConnectionRefusedError"
    assert error_metrics() == {
        ErrorCode.CACHE_READ.value: 1,
        ErrorCode.CACHE_REMOVE.value: 1,
        ErrorCode.CACHE_WRITE.value: 1,
    }


def test_logging_sink_accepts_non_exception_causes(caplog, error_metrics):
    caplog.set_level(logging.ERROR)

    LoggingSink().error("Could not add value to cache", "timeout")

    (payload,) = _error_payloads(caplog)
    assert payload["error"]["code"] == ErrorCode.CACHE_WRITE.value
    assert payload["context"]["cause"] == "timeout"
    assert payload["context"]["component"] == "cache_factory"
