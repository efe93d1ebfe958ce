"""Bounded in-memory provider with least-recently-used eviction."""

from __future__ import annotations

import math
from typing import Any, Hashable, Optional

from cachetools import Cache, LRUCache, TTLCache  # type: ignore[import-untyped]

from cache_factory.errors import ConfigurationError
from cache_factory.providers.base import CacheProvider
from cache_factory.settings import CacheSettings, get_settings


class InMemoryCacheProvider(CacheProvider):
    """Process-local provider wrapping a :mod:`cachetools` cache.

    Parameters
    ----------
    max:
        Maximum number of entries. ``None`` keeps the cache unbounded.
        When full, the least-recently-used entry is discarded on ``set``.
    max_age:
        Optional age limit in seconds; switches the backing store to
        :class:`cachetools.TTLCache`, which keeps the same LRU policy.
    """

    def __init__(self, max: Optional[int] = None, *, max_age: Optional[float] = None) -> None:
        if max is not None and max < 1:
            raise ConfigurationError(
                "Cache capacity must be at least 1",
                context={"max": max},
            )
        if max_age is not None and max_age <= 0:
            raise ConfigurationError(
                "Cache age limit must be positive",
                context={"max_age": max_age},
            )
        self.max = max
        self.max_age = max_age
        maxsize = math.inf if max is None else max
        if max_age is None:
            self._cache: Cache = LRUCache(maxsize=maxsize)
        else:
            self._cache = TTLCache(maxsize=maxsize, ttl=max_age)

    @classmethod
    def from_settings(cls, settings: CacheSettings | None = None) -> "InMemoryCacheProvider":
        settings = settings or get_settings()
        return cls(settings.max_entries, max_age=settings.max_age)

    async def get(self, key: Hashable) -> Optional[Any]:
        return self._cache.get(key)

    async def set(self, key: Hashable, value: Any) -> None:
        self._cache[key] = value

    async def remove(self, key: Hashable) -> None:
        self._cache.pop(key, None)

    async def remove_all(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max={self.max!r}, max_age={self.max_age!r})"


__all__ = ["InMemoryCacheProvider"]
