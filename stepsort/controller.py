"""
ScheduleController: paces a step generator on a worker thread.

The worker is the only thread that advances the generator. Between two
steps it parks in _checkpoint(), a condition-variable wait that wakes when
the step delay runs out, or early on pause/resume/cancel. Control calls
(pause, resume, cancel) come from other threads, change the RunState under
the condition's lock and notify the worker.

Each run carries its own cancelled flag, set under the same lock. A worker
decides whether to stop from that flag alone, so a run that was cancelled
stays cancelled even after a new run has put the controller back into
Running.

State changes are queued under the lock and delivered outside it, in the
order they happened, by whichever thread is draining the queue. A thread
that finds the queue already being drained leaves its changes to that
thread, so callbacks are free to call back into the controller (start,
reset, cancel) without blocking on each other.
"""

import logging
import threading
import time
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

import numpy as np

from .algorithms import run_steps
from .array_model import ArrayModel, generate_array
from .config import (
    DEFAULT_ARRAY_SIZE,
    DEFAULT_SPEED,
    PAUSE_POLL_MS,
    STATS_INTERVAL_MS,
    RunConfig,
    validate_size,
)
from .emitter import StepEmitter
from .errors import OperationCancelled, TransitionError
from .events import RunState, StepEvent
from .stats import Statistics, StatisticsCollector

logger = logging.getLogger(__name__)

_TRANSITIONS: Dict[RunState, FrozenSet[RunState]] = {
    RunState.IDLE:      frozenset({RunState.RUNNING}),
    RunState.RUNNING:   frozenset({RunState.PAUSED, RunState.COMPLETED, RunState.CANCELLED}),
    RunState.PAUSED:    frozenset({RunState.RUNNING, RunState.CANCELLED}),
    RunState.COMPLETED: frozenset({RunState.IDLE}),
    RunState.CANCELLED: frozenset({RunState.IDLE}),
}

_PAUSE_POLL = PAUSE_POLL_MS / 1000.0
_STATS_INTERVAL = STATS_INTERVAL_MS / 1000.0


class RunHandle:
    """One run, as returned by :meth:`ScheduleController.start`."""

    def __init__(self, controller: "ScheduleController", config: RunConfig,
                 array: ArrayModel, stats: StatisticsCollector):
        self._controller = controller
        self.config = config
        self.array  = array
        self.stats  = stats
        self.error: Optional[BaseException] = None
        self._final: Optional[RunState] = None
        self._cancelled = False
        self._thread: Optional[threading.Thread] = None
        self._done = threading.Event()
        self._next_report = time.monotonic()

    @property
    def state(self) -> RunState:
        if self._final is not None:
            return self._final
        if self._cancelled:
            return RunState.CANCELLED
        return self._controller.state

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def sorted_indices(self) -> FrozenSet[int]:
        return self.array.sorted_indices

    def statistics(self) -> Statistics:
        return self.stats.snapshot()

    def wait(self, timeout: Optional[float] = None) -> RunState:
        """Block until the worker has unwound and return the final state.

        A defect raised inside the run (a bad index, a failing subscriber)
        is re-raised here.
        """
        self._done.wait(timeout)
        if self._done.is_set() and self.error is not None:
            raise self.error
        return self.state

    def __repr__(self):
        return f"<RunHandle {self.config.algorithm} {self.state.value}>"


class ScheduleController:
    def __init__(self, size: int = DEFAULT_ARRAY_SIZE, seed: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        self._size  = validate_size(size)
        self._rng   = np.random.default_rng(seed)
        self._clock = clock
        self._cond  = threading.Condition()
        self._state = RunState.IDLE
        self._pending: List[RunState] = []
        self._draining = False

        self._step_events  = StepEmitter()
        self._state_events = StepEmitter()
        self._stats_events = StepEmitter()

        self.array = ArrayModel(generate_array(self._size, self._rng))
        self._collector = StatisticsCollector(clock)
        self._run: Optional[RunHandle] = None

    # ---- observation ----

    @property
    def state(self) -> RunState:
        with self._cond:
            return self._state

    @property
    def run(self) -> Optional[RunHandle]:
        return self._run

    def statistics(self) -> Statistics:
        return self._collector.snapshot()

    def on_step(self, callback: Callable[[StepEvent], None]) -> Callable[[], None]:
        return self._step_events.subscribe(callback)

    def on_state_change(self, callback: Callable[[RunState], None]) -> Callable[[], None]:
        return self._state_events.subscribe(callback)

    def on_statistics(self, callback: Callable[[Statistics], None]) -> Callable[[], None]:
        return self._stats_events.subscribe(callback)

    # ---- control ----

    def start(self, algorithm: str, array: Optional[Sequence[int]] = None,
              speed: int = DEFAULT_SPEED, delay_ms: Optional[float] = None) -> RunHandle:
        """Validate the inputs and begin a run on a fresh worker thread.

        ``array=None`` sorts the controller's current array. Raises
        ConfigurationError for bad input and TransitionError when a run
        is already active.
        """
        config = RunConfig.build(algorithm, self.array.values() if array is None else array,
                                 speed, delay_ms)
        self._join_previous()
        with self._cond:
            if self._state.active:
                raise TransitionError(f"Cannot start: a run is already {self._state.value}")
            if self._state is not RunState.IDLE:
                self._transition(RunState.IDLE)
            arr   = ArrayModel(config.values)
            stats = StatisticsCollector(self._clock)
            run   = RunHandle(self, config, arr, stats)
            run._thread = threading.Thread(
                target=self._drive, args=(run,), name=f"stepsort-{config.algorithm}", daemon=True
            )
            self.array, self._collector, self._run = arr, stats, run
            stats.start()
            self._transition(RunState.RUNNING)
        logger.info("Starting %s on %d values (%.0fms per step)",
                    config.name, len(arr), config.delay_ms)
        run._thread.start()
        self._notify_state()
        return run

    def pause(self) -> bool:
        with self._cond:
            if self._state is not RunState.RUNNING:
                return False
            self._transition(RunState.PAUSED)
        self._notify_state()
        return True

    def resume(self) -> bool:
        with self._cond:
            if self._state is not RunState.PAUSED:
                return False
            self._transition(RunState.RUNNING)
        self._notify_state()
        return True

    def toggle_pause(self) -> bool:
        """Pause a running run or resume a paused one; False otherwise."""
        return self.pause() or self.resume()

    def cancel(self) -> bool:
        with self._cond:
            if not self._state.active:
                return False
            self._transition(RunState.CANCELLED)
            if self._run is not None:
                self._run._cancelled = True
            self._collector.freeze()
        logger.info("Cancel requested")
        self._notify_state()
        return True

    def reset(self, size: Optional[int] = None) -> ArrayModel:
        """Regenerate the array from fresh random input and go back to Idle."""
        if size is not None:
            size = validate_size(size)
        self._join_previous()
        with self._cond:
            if self._state.active:
                raise TransitionError(f"Cannot reset while {self._state.value}; cancel first")
            if size is not None:
                self._size = size
            self.array = ArrayModel(generate_array(self._size, self._rng))
            self._collector = StatisticsCollector(self._clock)
            self._run = None
            if self._state is not RunState.IDLE:
                self._transition(RunState.IDLE)
        self._notify_state()
        return self.array

    def wait(self, timeout: Optional[float] = None) -> RunState:
        run = self._run
        if run is None:
            return self.state
        return run.wait(timeout)

    # ---- internals ----

    def _transition(self, target: RunState) -> None:
        # caller holds self._cond
        if target not in _TRANSITIONS[self._state]:
            raise TransitionError(f"{self._state.value} -> {target.value} is not allowed")
        logger.debug("Run state %s -> %s", self._state.value, target.value)
        self._state = target
        self._pending.append(target)
        self._cond.notify_all()

    def _notify_state(self) -> None:
        with self._cond:
            if self._draining:
                return
            self._draining = True
        try:
            while True:
                with self._cond:
                    if not self._pending:
                        self._draining = False
                        return
                    state = self._pending.pop(0)
                self._state_events.emit(state)
        except BaseException:
            with self._cond:
                self._draining = False
            raise

    def _join_previous(self) -> None:
        with self._cond:
            run, active = self._run, self._state.active
        if run is None or active or run._thread is None:
            return
        if run._thread is not threading.current_thread():
            run._thread.join()

    def _drive(self, run: RunHandle) -> None:
        config = run.config
        steps = run_steps(config.algorithm, run.array, run.stats)
        try:
            self._checkpoint(run, 0.0)
            for event in steps:
                self._deliver(run, event)
                self._checkpoint(run, config.delay_seconds)
            self._complete(run)
        except OperationCancelled:
            s = run.stats.snapshot()
            logger.info("%s cancelled after %d comparisons, %d swaps",
                        config.name, s.comparisons, s.swaps)
        except Exception as exc:
            run.error = exc
            logger.exception("%s run failed", config.name)
            self._abort(run)
        finally:
            steps.close()
            with self._cond:
                if run._final is None:
                    run._final = RunState.CANCELLED if run._cancelled else self._state
                current = self._run is run
            try:
                self._notify_state()
                if current:
                    self._stats_events.emit(run.stats.snapshot())
            finally:
                run._done.set()

    def _deliver(self, run: RunHandle, event: StepEvent) -> None:
        with self._cond:
            if run._cancelled:
                raise OperationCancelled()
        self._step_events.emit(event)

    def _checkpoint(self, run: RunHandle, delay: float) -> None:
        """Wait out one step delay, holding still while paused.

        The delay restarts after a resume. Raises OperationCancelled as soon
        as the run is cancelled.
        """
        deadline = None
        while True:
            self._report(run)
            with self._cond:
                if run._cancelled:
                    raise OperationCancelled()
                # not cancelled means this is still the controller's run
                if self._state is RunState.PAUSED:
                    deadline = None
                    self._cond.wait(_PAUSE_POLL)
                    continue
                now = time.monotonic()
                if deadline is None:
                    deadline = now + delay
                if now >= deadline:
                    return
                self._cond.wait(max(0.0, min(deadline, run._next_report) - now))

    def _report(self, run: RunHandle) -> None:
        now = time.monotonic()
        if now < run._next_report:
            return
        with self._cond:
            running = not run._cancelled and self._state is RunState.RUNNING
        if running:
            run._next_report = now + _STATS_INTERVAL
            self._stats_events.emit(run.stats.snapshot())

    def _complete(self, run: RunHandle) -> None:
        with self._cond:
            while not run._cancelled and self._state is RunState.PAUSED:
                self._cond.wait(_PAUSE_POLL)
            if run._cancelled:
                raise OperationCancelled()
            run.stats.freeze()
            self._transition(RunState.COMPLETED)
            run._final = RunState.COMPLETED
        s = run.stats.snapshot()
        logger.info("%s completed: %d comparisons, %d swaps in %.2fs",
                    run.config.name, s.comparisons, s.swaps, s.elapsed)

    def _abort(self, run: RunHandle) -> None:
        with self._cond:
            if not run._cancelled and self._state.active:
                run._cancelled = True
                self._transition(RunState.CANCELLED)
        run.stats.freeze()
