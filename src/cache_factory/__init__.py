"""Caching and cache-invalidation decorators for asynchronous functions."""

from __future__ import annotations

from . import key_generators
from .config import DEFAULT_CONFIG, DecoratorConfig, merge_config
from .errors import (
    CacheError,
    CacheFactoryError,
    CacheReadError,
    CacheRemoveError,
    CacheWriteError,
    ConfigurationError,
    ErrorCode,
)
from .factory import CacheFactory, create_new
from .key_generators import (
    pick_first_argument,
    pick_first_argument_field,
    pick_nth_argument,
)
from .providers import CacheProvider, InMemoryCacheProvider
from .settings import CacheSettings
from .sinks import DiagnosticSink, LoggingSink, NoopSink

__all__ = [
    "CacheError",
    "CacheFactory",
    "CacheFactoryError",
    "CacheProvider",
    "CacheReadError",
    "CacheRemoveError",
    "CacheSettings",
    "CacheWriteError",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "DecoratorConfig",
    "DiagnosticSink",
    "ErrorCode",
    "InMemoryCacheProvider",
    "LoggingSink",
    "NoopSink",
    "create_new",
    "key_generators",
    "merge_config",
    "pick_first_argument",
    "pick_first_argument_field",
    "pick_nth_argument",
]
