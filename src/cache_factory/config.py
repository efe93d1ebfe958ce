"""Per-decorator configuration and the pure merge with defaults."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Union

from .errors import ConfigurationError
from .key_generators import KeyGenerator, pick_first_argument


def never_skip(*args: Any, **kwargs: Any) -> bool:
    return False


@dataclass(frozen=True)
class DecoratorConfig:
    """Options shared by the three wrapping operations.

    ``key_generator`` maps the call arguments to a cache key; ``skip_if``
    decides from the same arguments whether the cache is bypassed.
    """

    key_generator: KeyGenerator = pick_first_argument
    skip_if: Callable[..., bool] = never_skip


DEFAULT_CONFIG = DecoratorConfig()

ConfigOverrides = Union[DecoratorConfig, Mapping[str, Any], None]

_OPTION_NAMES = frozenset(f.name for f in fields(DecoratorConfig))


def _as_mapping(overrides: ConfigOverrides) -> dict[str, Any]:
    if overrides is None:
        return {}
    if isinstance(overrides, DecoratorConfig):
        return {name: getattr(overrides, name) for name in _OPTION_NAMES}
    if isinstance(overrides, Mapping):
        return dict(overrides)
    raise ConfigurationError(
        "Decorator config must be a DecoratorConfig or a mapping",
        context={"type": type(overrides).__name__},
    )


def merge_config(defaults: DecoratorConfig, overrides: ConfigOverrides = None) -> DecoratorConfig:
    """Return a new config with ``overrides`` applied on top of ``defaults``.

    Options set to ``None`` in a mapping keep their default value. Neither
    argument is modified.
    """

    values = _as_mapping(overrides)
    unknown = set(values) - _OPTION_NAMES
    if unknown:
        raise ConfigurationError(
            "Unknown decorator config option",
            context={"options": sorted(unknown)},
        )
    changes = {name: value for name, value in values.items() if value is not None}
    for name, value in changes.items():
        if not callable(value):
            raise ConfigurationError(
                "Decorator config option must be callable",
                context={"option": name, "type": type(value).__name__},
            )
    return replace(defaults, **changes)


__all__ = [
    "ConfigOverrides",
    "DEFAULT_CONFIG",
    "DecoratorConfig",
    "merge_config",
    "never_skip",
]
