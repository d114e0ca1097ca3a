"""Step-by-step sorting engine with a pausable, cancellable scheduler."""

from .algorithms import GENERATORS, get_generator, run_steps
from .array_model import ArrayModel, generate_array
from .config import ALGORITHM_KEYS, ALGORITHMS, RunConfig, step_delay_ms
from .controller import RunHandle, ScheduleController
from .emitter import StepEmitter
from .errors import ConfigurationError, OperationCancelled, TransitionError
from .events import (
    AuxState,
    Compare,
    MarkPivot,
    MarkSorted,
    Overwrite,
    RunState,
    StepEvent,
    Swap,
)
from .stats import Statistics, StatisticsCollector

__version__ = "0.1.0"

__all__ = [
    "ALGORITHMS",
    "ALGORITHM_KEYS",
    "GENERATORS",
    "ArrayModel",
    "AuxState",
    "Compare",
    "ConfigurationError",
    "MarkPivot",
    "MarkSorted",
    "OperationCancelled",
    "Overwrite",
    "RunConfig",
    "RunHandle",
    "RunState",
    "ScheduleController",
    "Statistics",
    "StatisticsCollector",
    "StepEmitter",
    "StepEvent",
    "Swap",
    "TransitionError",
    "generate_array",
    "get_generator",
    "run_steps",
    "step_delay_ms",
]
