"""Environment-driven defaults for the in-memory cache provider."""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings


class CacheSettings(BaseSettings):
    """Settings for the default provider.

    Values can be overridden via environment variables prefixed with
    ``CACHE_FACTORY_``.  For example, ``CACHE_FACTORY_MAX_ENTRIES=500``.
    Leaving ``max_entries`` unset keeps the cache unbounded.
    """

    max_entries: Optional[int] = None
    max_age: Optional[float] = None

    class Config:
        env_prefix = "CACHE_FACTORY_"


def get_settings() -> CacheSettings:
    return CacheSettings()


__all__ = ["CacheSettings", "get_settings"]
