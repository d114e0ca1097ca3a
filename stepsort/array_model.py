import operator
from typing import FrozenSet, Iterable, List, Optional

import numpy as np

from .config import VALUE_HIGH, VALUE_LOW


def generate_array(size: int, rng: Optional[np.random.Generator] = None) -> List[int]:
    """Fresh random input: ``size`` integers in [VALUE_LOW, VALUE_HIGH)."""
    rng = rng if rng is not None else np.random.default_rng()
    return rng.integers(VALUE_LOW, VALUE_HIGH, size=size).tolist()


class ArrayModel:
    """
    The integer sequence being sorted, plus the set of certified indices.

    Storage is a fixed-length int64 numpy array. Every index is checked;
    a negative or past-the-end index is a bug in the caller and raises
    IndexError instead of wrapping around.
    """
    __slots__ = ('_data', '_sorted')

    def __init__(self, values: Iterable[int]):
        self._data   = np.array(list(values), dtype=np.int64)
        self._sorted = set()

    def _check(self, i) -> int:
        i = operator.index(i)
        if not 0 <= i < len(self._data):
            raise IndexError(f"index {i} out of range for array of length {len(self._data)}")
        return i

    def __len__(self) -> int:
        return len(self._data)

    def length(self) -> int:
        return len(self._data)

    def get(self, i) -> int:
        return int(self._data[self._check(i)])

    def set(self, i, value: int) -> None:
        self._data[self._check(i)] = value

    def swap(self, i, j) -> None:
        i, j = self._check(i), self._check(j)
        self._data[i], self._data[j] = self._data[j], self._data[i]

    def snapshot(self) -> np.ndarray:
        """Read-only copy for renderers; writing to it raises ValueError."""
        snap = self._data.copy()
        snap.setflags(write=False)
        return snap

    def values(self) -> List[int]:
        return self._data.tolist()

    # ---- certified (final-position) indices ----

    @property
    def sorted_indices(self) -> FrozenSet[int]:
        return frozenset(self._sorted)

    def mark_sorted(self, indices: Iterable[int]) -> None:
        self._sorted.update(self._check(i) for i in indices)

    def fully_sorted(self) -> bool:
        return len(self._sorted) == len(self._data)

    def __repr__(self):
        return f"ArrayModel({self.values()!r})"
