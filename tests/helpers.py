"""Helpers shared by the controller tests."""

import threading


class Recorder:
    """Collects steps, state changes and statistics from a controller."""

    def __init__(self, controller):
        self.steps = []
        self.states = []
        self.stats = []
        self._lock = threading.Lock()
        controller.on_step(self._add(self.steps))
        controller.on_state_change(self._add(self.states))
        controller.on_statistics(self._add(self.stats))

    def _add(self, target):
        def callback(item):
            with self._lock:
                target.append(item)
        return callback
