"""Functions deriving a cache key from a call's arguments.

Every generator accepts the wrapped function's ``*args, **kwargs`` and
returns ``None`` instead of raising when the requested value is missing.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Mapping, Optional

KeyGenerator = Callable[..., Optional[Hashable]]


def pick_nth_argument(index: int) -> KeyGenerator:
    """Return a generator selecting the ``index``-th positional argument.

    Parameters
    ----------
    index:
        Zero-based position of the argument used as key.
    """

    if index < 0:
        raise ValueError(f"Argument index must be non-negative, got {index}")

    def _pick(*args: Any, **kwargs: Any) -> Any:
        if len(args) > index:
            return args[index]
        return None

    _pick.__name__ = f"pick_argument_{index}"
    return _pick


pick_first_argument: KeyGenerator = pick_nth_argument(0)


def _field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def pick_first_argument_field(name: str) -> KeyGenerator:
    """Return a generator reading ``name`` from the first positional argument.

    Mappings are looked up by item, other objects by attribute.
    """

    def _pick(*args: Any, **kwargs: Any) -> Any:
        first = pick_first_argument(*args, **kwargs)
        if first is None:
            return None
        return _field(first, name)

    _pick.__name__ = f"pick_first_argument_field_{name}"
    return _pick


__all__ = [
    "KeyGenerator",
    "pick_first_argument",
    "pick_first_argument_field",
    "pick_nth_argument",
]
