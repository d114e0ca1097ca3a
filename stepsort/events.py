"""
Step events and run states.

Every algorithm is a generator that yields StepEvent objects, one per step.
An event describes what the step just did (or is about to do, for Compare)
in terms of array indices, so a renderer can highlight bars without
knowing anything about the algorithm:

    Compare(i, j)          two positions are being compared
    Swap(i, j)             two positions were exchanged
    Overwrite(i, value)    position i was written with value (counted=False
                           for a placement that is not tallied as a swap)
    MarkSorted(indices)    positions certified as final
    MarkPivot(indices)     positions acting as pivot / anchor right now
    AuxState(payload)      algorithm-specific side data (buckets, tables)

AuxState payloads are plain dicts and only auxiliary views read them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple


class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def active(self) -> bool:
        return self in (RunState.RUNNING, RunState.PAUSED)


class StepEvent:
    kind: ClassVar[str] = "step"

    @property
    def indices(self) -> Tuple[int, ...]:
        return ()


@dataclass(frozen=True)
class Compare(StepEvent):
    i: int
    j: int
    kind: ClassVar[str] = "compare"

    @property
    def indices(self):
        return (self.i, self.j)


@dataclass(frozen=True)
class Swap(StepEvent):
    i: int
    j: int
    kind: ClassVar[str] = "swap"

    @property
    def indices(self):
        return (self.i, self.j)


@dataclass(frozen=True)
class Overwrite(StepEvent):
    i: int
    value: int
    counted: bool = True
    kind: ClassVar[str] = "overwrite"

    @property
    def indices(self):
        return (self.i,)


@dataclass(frozen=True)
class MarkSorted(StepEvent):
    positions: Tuple[int, ...]
    kind: ClassVar[str] = "sorted"

    @property
    def indices(self):
        return self.positions


@dataclass(frozen=True)
class MarkPivot(StepEvent):
    positions: Tuple[int, ...]
    kind: ClassVar[str] = "pivot"

    @property
    def indices(self):
        return self.positions


@dataclass(frozen=True)
class AuxState(StepEvent):
    payload: Dict[str, Any] = field(default_factory=dict)
    kind: ClassVar[str] = "aux"
