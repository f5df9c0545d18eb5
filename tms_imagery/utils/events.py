"""Minimal synchronous event channel.

Listeners are called in registration order with the arguments passed to
``raise_event``.  Exceptions raised by a listener propagate to whoever
raised the event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


class Event:
    """A list of listeners that can be notified together."""

    def __init__(self) -> None:
        self._listeners: list[tuple[Callable[..., Any], object | None]] = []

    @property
    def number_of_listeners(self) -> int:
        return len(self._listeners)

    def add_event_listener(
        self,
        listener: Callable[..., Any],
        scope: object | None = None,
    ) -> Callable[[], bool]:
        """Register *listener*; returns a callable that removes it again.

        When *scope* is given the listener is called as ``listener(scope, *args)``.
        """
        self._listeners.append((listener, scope))
        return lambda: self.remove_event_listener(listener, scope)

    def remove_event_listener(self, listener: Callable[..., Any], scope: object | None = None) -> bool:
        """Unregister *listener*.  Returns ``False`` if it was not registered."""
        try:
            self._listeners.remove((listener, scope))
        except ValueError:
            return False
        return True

    def raise_event(self, *args: Any) -> None:
        """Call every listener with *args*."""
        for listener, scope in list(self._listeners):
            if scope is None:
                listener(*args)
            else:
                listener(scope, *args)


@dataclass(frozen=True, slots=True)
class TileProviderError:
    """Payload of a provider's error event.

    Attributes:
        provider: The provider that failed.
        message: Human-readable description.
        error: The underlying exception, if any.
        x: Tile column, when the error concerns a single tile.
        y: Tile row, when the error concerns a single tile.
        level: Tile level, when the error concerns a single tile.
    """

    provider: object
    message: str
    error: BaseException | None = None
    x: int | None = None
    y: int | None = None
    level: int | None = None
