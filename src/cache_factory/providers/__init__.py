"""Cache provider implementations for the decorator engine."""

from .base import CacheProvider
from .in_memory import InMemoryCacheProvider

__all__ = ["CacheProvider", "InMemoryCacheProvider"]
