"""Named-event publish/subscribe."""

from collections import defaultdict
from typing import Callable


class EventChannel:
    """Callback lists keyed by event name.

    Listeners run synchronously, in registration order, on the emitter's stack.
    """

    def __init__(self):
        self.listeners: dict[str, list[Callable]] = defaultdict(list)

    def on(self, name: str, callback: Callable) -> Callable:
        self.listeners[name].append(callback)
        return callback

    def once(self, name: str, callback: Callable) -> Callable:
        def wrapper(*args):
            self.off(name, wrapper)
            return callback(*args)

        return self.on(name, wrapper)

    def off(self, name: str, callback: Callable):
        callbacks = self.listeners.get(name)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, name: str, *args) -> bool:
        """Call every listener of `name`. Returns True if there was any."""
        callbacks = list(self.listeners.get(name, ()))
        for callback in callbacks:
            callback(*args)
        return bool(callbacks)

    def listener_count(self, name: str) -> int:
        return len(self.listeners.get(name, ()))

    def clear(self):
        self.listeners.clear()
