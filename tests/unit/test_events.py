"""Tests for the Event channel."""

from __future__ import annotations

import unittest

from tms_imagery.utils.events import Event, TileProviderError


class TestEvent(unittest.TestCase):
    def setUp(self) -> None:
        self.event = Event()
        self.calls: list[tuple] = []

    def _listener(self, *args: object) -> None:
        self.calls.append(args)

    def test_listeners_called_in_order(self) -> None:
        order: list[str] = []
        self.event.add_event_listener(lambda: order.append("first"))
        self.event.add_event_listener(lambda: order.append("second"))
        self.event.raise_event()
        assert order == ["first", "second"]

    def test_arguments_forwarded(self) -> None:
        self.event.add_event_listener(self._listener)
        self.event.raise_event(1, "two")
        assert self.calls == [(1, "two")]

    def test_scope_is_first_argument(self) -> None:
        scope = object()
        self.event.add_event_listener(self._listener, scope)
        self.event.raise_event("payload")
        assert self.calls == [(scope, "payload")]

    def test_remove_listener(self) -> None:
        self.event.add_event_listener(self._listener)
        assert self.event.remove_event_listener(self._listener) is True
        assert self.event.remove_event_listener(self._listener) is False
        self.event.raise_event("ignored")
        assert self.calls == []

    def test_add_returns_remover(self) -> None:
        remove = self.event.add_event_listener(self._listener)
        assert self.event.number_of_listeners == 1
        assert remove() is True
        assert self.event.number_of_listeners == 0

    def test_listener_may_remove_itself(self) -> None:
        def _once() -> None:
            self.calls.append(("once",))
            self.event.remove_event_listener(_once)

        self.event.add_event_listener(_once)
        self.event.add_event_listener(self._listener)
        self.event.raise_event()
        self.event.raise_event()
        assert self.calls == [("once",), (), ()]

    def test_listener_errors_propagate(self) -> None:
        def _boom() -> None:
            raise RuntimeError("boom")

        self.event.add_event_listener(_boom)
        with self.assertRaises(RuntimeError):
            self.event.raise_event()


class TestTileProviderError(unittest.TestCase):
    def test_fields(self) -> None:
        cause = OSError("offline")
        error = TileProviderError("provider", "failed", cause)
        assert error.provider == "provider"
        assert error.message == "failed"
        assert error.error is cause
        assert (error.x, error.y, error.level) == (None, None, None)
