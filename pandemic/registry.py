"""Registration of player classes by name."""

from __future__ import annotations

from typing import Callable

from pandemic.structs import GameError

_FACTORIES: dict[str, Callable[[], object]] = {}


def register_player(name: str):
    """Return a decorator that registers a player class under ``name``."""

    def decorator(factory):
        _FACTORIES[name] = factory
        return factory

    return decorator


def new_player(name: str):
    """Return a new player of the class registered as ``name``."""
    try:
        factory = _FACTORIES[name]
    except KeyError:
        raise GameError(f"Player {name} not registered.") from None
    return factory()


def player_names() -> list[str]:
    """Return the registered player names in sorted order."""
    return sorted(_FACTORIES)