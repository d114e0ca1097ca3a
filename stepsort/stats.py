import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class Statistics:
    comparisons: int
    swaps:       int
    elapsed:     float    # seconds


class StatisticsCollector:
    """
    Counters and wall-clock time for one run.

    elapsed() is 0 before start(), runs live until freeze(), and then stays
    at the freeze timestamp. Counters only ever go up.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock   = clock
        self._lock    = threading.Lock()
        self.comparisons = 0
        self.swaps       = 0
        self._started: Optional[float] = None
        self._frozen:  Optional[float] = None

    def start(self) -> None:
        with self._lock:
            self.comparisons = 0
            self.swaps       = 0
            self._started = self._clock()
            self._frozen  = None

    def record_comparison(self) -> None:
        with self._lock:
            self.comparisons += 1

    def record_swap(self) -> None:
        with self._lock:
            self.swaps += 1

    def freeze(self) -> None:
        """Stop the clock. Only the first call counts."""
        with self._lock:
            if self._started is not None and self._frozen is None:
                self._frozen = self._clock()

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def elapsed(self) -> float:
        with self._lock:
            return self._elapsed()

    def _elapsed(self) -> float:
        if self._started is None:
            return 0.0
        end = self._frozen if self._frozen is not None else self._clock()
        return end - self._started

    def snapshot(self) -> Statistics:
        with self._lock:
            return Statistics(self.comparisons, self.swaps, self._elapsed())
