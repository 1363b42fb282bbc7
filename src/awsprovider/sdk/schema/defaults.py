import os
from typing import Any, Callable, Iterable, Optional


def env_default_func(name: str, default: Optional[Any] = None) -> Callable[[], Any]:
    """Default from an environment variable, else the given value."""

    def _default() -> Any:
        value = os.environ.get(name, "")
        if value:
            return value
        return default

    return _default


def multi_env_default_func(names: Iterable[str], default: Optional[Any] = None) -> Callable[[], Any]:
    """Default from the first set environment variable in names."""
    names = list(names)

    def _default() -> Any:
        for name in names:
            value = os.environ.get(name, "")
            if value:
                return value
        return default

    return _default
