import math
import numbers
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .errors import ConfigurationError

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

MAX_ARRAY_SIZE     = 128
DEFAULT_ARRAY_SIZE = 50
VALUE_LOW          = 10
VALUE_HIGH         = 310         # exclusive

# ============================================================
# ========================= PACING ===========================
# ============================================================
#
# Step delay for a speed level, in milliseconds:
#   delay = max(MIN_DELAY_MS, BASE_DELAY_MS - speed * DELAY_STEP_MS)
# Speed 1 -> 190ms, speed 5 -> 110ms, speed 10 -> 10ms.
# Anything past 10 stays pinned at the floor.

DEFAULT_SPEED = 5
BASE_DELAY_MS = 210
DELAY_STEP_MS = 20
MIN_DELAY_MS  = 10

# PAUSE_POLL_MS - how often a paused run re-checks for resume/cancel.
PAUSE_POLL_MS = 50
# STATS_INTERVAL_MS - cadence of statistics snapshots while running.
STATS_INTERVAL_MS = 100

RADIX_BASE = 10

ALGORITHMS = [
    ("Bubble Sort",    "bubble"),
    ("Selection Sort", "selection"),
    ("Insertion Sort", "insertion"),
    ("Merge Sort",     "merge"),
    ("Quick Sort",     "quick"),
    ("Heap Sort",      "heap"),
    ("Radix Sort",     "radix"),
    ("Counting Sort",  "counting"),
    ("Bucket Sort",    "bucket"),
]

ALGORITHM_KEYS = tuple(key for _, key in ALGORITHMS)


def algorithm_name(key: str) -> str:
    for name, k in ALGORITHMS:
        if k == key:
            return name
    raise ConfigurationError(f"Unknown algorithm: {key!r}")


def step_delay_ms(speed: int, override: Optional[float] = None) -> float:
    """Delay between two steps. An explicit override wins, even when 0."""
    if override is not None:
        return float(override)
    return float(max(MIN_DELAY_MS, BASE_DELAY_MS - speed * DELAY_STEP_MS))


def validate_size(size) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise ConfigurationError(f"Array size must be an integer, got {size!r}")
    if not 1 <= size <= MAX_ARRAY_SIZE:
        raise ConfigurationError(f"Array size must be in 1..{MAX_ARRAY_SIZE}, got {size}")
    return size


def _as_int(value) -> int:
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    if (isinstance(value, numbers.Real) and not isinstance(value, bool)
            and math.isfinite(value) and float(value).is_integer()):
        return int(value)
    raise ConfigurationError(f"Array values must be integers, got {value!r}")


@dataclass(frozen=True)
class RunConfig:
    """Validated inputs for one run."""

    algorithm: str
    values: Tuple[int, ...]
    speed: int
    delay_ms: float

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    @property
    def name(self) -> str:
        return algorithm_name(self.algorithm)

    @classmethod
    def build(cls, algorithm: str, values: Sequence, speed: int = DEFAULT_SPEED,
              delay_ms: Optional[float] = None) -> "RunConfig":
        if algorithm not in ALGORITHM_KEYS:
            raise ConfigurationError(
                f"Unknown algorithm: {algorithm!r} (expected one of {', '.join(ALGORITHM_KEYS)})"
            )
        if isinstance(speed, bool) or not isinstance(speed, int) or speed < 1:
            raise ConfigurationError(f"Speed must be a positive integer, got {speed!r}")
        if delay_ms is not None and (not math.isfinite(delay_ms) or delay_ms < 0):
            raise ConfigurationError(f"Delay override must be >= 0, got {delay_ms!r}")

        ints = tuple(_as_int(v) for v in values)
        if not ints:
            raise ConfigurationError("Cannot sort an empty array")
        if len(ints) > MAX_ARRAY_SIZE:
            raise ConfigurationError(
                f"Array of {len(ints)} values exceeds MAX_ARRAY_SIZE ({MAX_ARRAY_SIZE})"
            )
        if algorithm == "radix" and min(ints) < 0:
            raise ConfigurationError("Radix sort needs non-negative values")

        return cls(algorithm, ints, speed, step_delay_ms(speed, delay_ms))
