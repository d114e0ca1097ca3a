import threading
from typing import Any, Callable, List


class StepEmitter:
    """Ordered fan-out of payloads to subscriber callbacks.

    Callbacks run synchronously on the emitting thread, in subscription
    order. Exceptions raised by a callback propagate to the emitter's caller.
    """

    def __init__(self):
        self._subscribers: List[Callable[[Any], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, payload: Any) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(payload)

    def __len__(self):
        with self._lock:
            return len(self._subscribers)
