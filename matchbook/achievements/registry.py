"""
Collector registry: named functions that pick qualifying matches out of a
chronologically sorted history.
"""

from typing import Callable

from matchbook.core.schema import Match

Collector = Callable[[list[Match]], list[Match]]

_REGISTRY: dict[str, Collector] = {}


def collector(name: str):
    """Decorator to register a qualifying-match collector."""
    def wrapper(fn: Collector) -> Collector:
        _REGISTRY[name] = fn
        return fn
    return wrapper


def get_collector(name: str) -> Collector:
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys()))
        raise ValueError(f"Unknown collector '{name}'. Available: {available}")
    return _REGISTRY[name]


def list_collectors() -> list[str]:
    return sorted(_REGISTRY.keys())
