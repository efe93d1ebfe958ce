"""Asynchronous cache provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional


class CacheProvider(ABC):
    """Abstract async key/value store used by :class:`CacheFactory`.

    Implementations backed by I/O must raise (preferably a
    :class:`~cache_factory.errors.CacheError` subclass) when an operation
    fails; ``get`` returning ``None`` always means "not found".
    """

    @abstractmethod
    async def get(self, key: Hashable) -> Optional[Any]:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    async def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""

    @abstractmethod
    async def remove(self, key: Hashable) -> None:
        """Delete ``key``; absent keys are ignored."""

    @abstractmethod
    async def remove_all(self) -> None:
        """Delete every entry."""


__all__ = ["CacheProvider"]
