"""Synchronous event bus for run lifecycle events."""

import threading
from typing import Any, Callable


class EventBus:
    """Synchronous publish-subscribe event bus.

    Listeners subscribe to one event type or to every event. Events are
    dispatched on the emitting thread, in registration order.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []
        self._lock = threading.Lock()

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Register a callback for a specific event type."""
        with self._lock:
            self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable) -> None:
        """Register a callback that receives every event."""
        with self._lock:
            self._global_listeners.append(callback)

    def unsubscribe(self, callback: Callable) -> None:
        """Remove *callback* from every registration it has."""
        with self._lock:
            self._global_listeners = [cb for cb in self._global_listeners if cb != callback]
            for event_type, callbacks in self._listeners.items():
                self._listeners[event_type] = [cb for cb in callbacks if cb != callback]

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        with self._lock:
            listeners = list(self._global_listeners)
            listeners.extend(self._listeners.get(type(event), []))
        for cb in listeners:
            cb(event)
