"""Decorators adding read-through caching and invalidation to async calls.

Usage::

    factory = CacheFactory(InMemoryCacheProvider(max=1000))

    get_user = factory.cache_calls(repository.get_user)
    update_user = factory.add_result_to_cache(
        repository.update_user, {"key_generator": pick_first_argument_field("id")}
    )
    delete_user = factory.evict_on_call(repository.delete_user)

Cache failures never reach the caller: they are reported to the diagnostic
sink and the call proceeds as if no cache were configured. Exceptions from
the wrapped function propagate unchanged.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from .config import DEFAULT_CONFIG, ConfigOverrides, DecoratorConfig, merge_config
from .providers import CacheProvider, InMemoryCacheProvider
from .sinks import GET_FAILED, REMOVE_FAILED, SET_FAILED, DiagnosticSink, NoopSink

T = TypeVar("T")

Target = Callable[..., Union[Awaitable[T], T]]
Wrapped = Callable[..., Awaitable[T]]


async def _invoke(fn: Target, args: tuple, kwargs: dict) -> Any:
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


class CacheFactory:
    """Produce cache-aware wrappers sharing one provider and one sink."""

    def __init__(
        self,
        cache_provider: Optional[CacheProvider] = None,
        *,
        sink: Optional[DiagnosticSink] = None,
        defaults: DecoratorConfig = DEFAULT_CONFIG,
    ) -> None:
        self.cache = cache_provider if cache_provider is not None else InMemoryCacheProvider.from_settings()
        self.logger: DiagnosticSink = sink if sink is not None else NoopSink()
        self.defaults = defaults

    def set_logger(self, sink: Optional[DiagnosticSink]) -> None:
        """Replace the diagnostic sink; ``None`` silences reports again."""

        self.logger = sink if sink is not None else NoopSink()

    async def clear(self) -> None:
        await self.cache.remove_all()

    def _config(self, config: ConfigOverrides) -> DecoratorConfig:
        return merge_config(self.defaults, config)

    def cache_calls(self, fn: Target, config: ConfigOverrides = None) -> Wrapped:
        """Return ``fn`` wrapped with read-through caching.

        A cached value short-circuits the call. On a miss the result of
        ``fn`` is stored under the derived key. When the cache cannot be
        read, ``fn`` is called and its result is returned without being
        stored.
        """

        settings = self._config(config)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if settings.skip_if(*args, **kwargs):
                return await _invoke(fn, args, kwargs)
            key = settings.key_generator(*args, **kwargs)
            try:
                value = await self.cache.get(key)
            except Exception as exc:
                self.logger.error(GET_FAILED, exc)
                return await _invoke(fn, args, kwargs)
            if value is not None:
                return value
            result = await _invoke(fn, args, kwargs)
            try:
                await self.cache.set(key, result)
            except Exception as exc:
                self.logger.error(SET_FAILED, exc)
            return result

        return wrapper

    def evict_on_call(self, fn: Target, config: ConfigOverrides = None) -> Wrapped:
        """Return ``fn`` wrapped so the derived key is removed before each call."""

        settings = self._config(config)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not settings.skip_if(*args, **kwargs):
                key = settings.key_generator(*args, **kwargs)
                try:
                    await self.cache.remove(key)
                except Exception as exc:
                    self.logger.error(REMOVE_FAILED, exc)
            return await _invoke(fn, args, kwargs)

        return wrapper

    def add_result_to_cache(self, fn: Target, config: ConfigOverrides = None) -> Wrapped:
        """Return ``fn`` wrapped so its result replaces the cached entry."""

        settings = self._config(config)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await _invoke(fn, args, kwargs)
            if settings.skip_if(*args, **kwargs):
                return result
            key = settings.key_generator(*args, **kwargs)
            try:
                await self.cache.set(key, result)
            except Exception as exc:
                self.logger.error(SET_FAILED, exc)
            return result

        return wrapper


def create_new(
    cache_provider: Optional[CacheProvider] = None,
    *,
    sink: Optional[DiagnosticSink] = None,
) -> CacheFactory:
    """Return a fresh :class:`CacheFactory` with its own provider by default."""

    return CacheFactory(cache_provider, sink=sink)


__all__ = ["CacheFactory", "create_new"]
