"""
The nine sorting algorithms as step generators.

Each generator takes an ArrayModel and a StatisticsCollector, mutates the
array in place and yields one StepEvent per step. A yield is the only place
a run can be paused or cancelled, so no yield ever sits between a read and
the write that depends on it.

Counting rules shared by every algorithm:
  - one comparison per Compare event
  - one swap per Swap event and per counted Overwrite
  - insertion's final key placement is an uncounted Overwrite
  - work on scratch buffers is reported with AuxState and counts nothing
"""

import math
from typing import Callable, Dict, Iterator, List, Sequence

from .array_model import ArrayModel
from .config import RADIX_BASE
from .events import AuxState, Compare, MarkPivot, MarkSorted, Overwrite, StepEvent, Swap
from .stats import StatisticsCollector

Steps = Iterator[StepEvent]


def _compare(stats: StatisticsCollector, i: int, j: int) -> Compare:
    stats.record_comparison()
    return Compare(i, j)


def _swap(arr: ArrayModel, stats: StatisticsCollector, i: int, j: int) -> Swap:
    arr.swap(i, j)
    stats.record_swap()
    return Swap(i, j)


def _overwrite(arr: ArrayModel, stats: StatisticsCollector, i: int, value: int) -> Overwrite:
    arr.set(i, value)
    stats.record_swap()
    return Overwrite(i, value)


def _certify(arr: ArrayModel, *indices: int) -> MarkSorted:
    arr.mark_sorted(indices)
    return MarkSorted(tuple(indices))


def _write_back(arr: ArrayModel, stats: StatisticsCollector, start: int, values: Sequence[int]) -> Steps:
    """Copy a scratch buffer into arr[start:], one Overwrite per slot.

    If the run is abandoned part way, the remaining slots are filled in
    silently on the way out so the array never holds duplicates.
    """
    written = 0
    try:
        for k, value in enumerate(values):
            written = k
            yield _overwrite(arr, stats, start + k, value)
        written = len(values)
    finally:
        for k in range(written, len(values)):
            arr.set(start + k, values[k])


# ============================================================
# ===================== COMPARISON SORTS =====================
# ============================================================

def bubble_sort(arr, stats):
    n = len(arr)
    for i in range(n - 1):
        for j in range(n - i - 1):
            yield _compare(stats, j, j + 1)
            if arr.get(j) > arr.get(j + 1):
                yield _swap(arr, stats, j, j + 1)
        yield _certify(arr, n - 1 - i)
    yield _certify(arr, 0)


def selection_sort(arr, stats):
    n = len(arr)
    for i in range(n - 1):
        mi = i
        yield MarkPivot((i,))
        for j in range(i + 1, n):
            yield _compare(stats, mi, j)
            if arr.get(j) < arr.get(mi):
                mi = j
        if mi != i:
            yield _swap(arr, stats, i, mi)
        yield _certify(arr, i)
    yield _certify(arr, n - 1)


def insertion_sort(arr, stats):
    yield _certify(arr, 0)
    for i in range(1, len(arr)):
        key = arr.get(i)
        hole = i
        yield MarkPivot((i,))
        try:
            while hole > 0:
                yield _compare(stats, hole - 1, hole)
                if arr.get(hole - 1) <= key:
                    break
                hole -= 1
                yield _overwrite(arr, stats, hole + 1, arr.get(hole))
        except GeneratorExit:
            # abandoned mid-shift: the key still belongs in the hole
            arr.set(hole, key)
            raise
        if hole != i:
            # only the shifts count as swaps
            arr.set(hole, key)
            yield Overwrite(hole, key, counted=False)
        yield _certify(arr, i)


def merge_sort(arr, stats):
    yield from _merge_sort(arr, stats, 0, len(arr) - 1)


def _merge_sort(arr, stats, lo, hi):
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    yield AuxState({"algorithm": "merge", "phase": "divide", "low": lo, "mid": mid, "high": hi})
    yield from _merge_sort(arr, stats, lo, mid)
    yield from _merge_sort(arr, stats, mid + 1, hi)
    yield from _merge(arr, stats, lo, mid, hi)


def _merge(arr, stats, lo, mid, hi):
    left  = [arr.get(k) for k in range(lo, mid + 1)]
    right = [arr.get(k) for k in range(mid + 1, hi + 1)]
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        yield _compare(stats, lo + i, mid + 1 + j)
        if left[i] <= right[j]:
            merged.append(left[i]); i += 1
        else:
            merged.append(right[j]); j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    yield from _write_back(arr, stats, lo, merged)


def quick_sort(arr, stats):
    yield from _quick_sort(arr, stats, 0, len(arr) - 1)


def _quick_sort(arr, stats, low, high):
    if low < high:
        pi = yield from _partition(arr, stats, low, high)
        yield from _quick_sort(arr, stats, low, pi - 1)
        yield from _quick_sort(arr, stats, pi + 1, high)
    elif low == high:
        yield _certify(arr, low)


def _partition(arr, stats, low, high):
    """Lomuto partition around arr[high]; returns the pivot's final index."""
    pivot = arr.get(high)
    yield MarkPivot((high,))
    i = low - 1
    for j in range(low, high):
        yield _compare(stats, j, high)
        if arr.get(j) < pivot:
            i += 1
            if i != j:
                yield _swap(arr, stats, i, j)
    # the pivot placement always counts, even when it is already in place
    yield _swap(arr, stats, i + 1, high)
    yield _certify(arr, i + 1)
    return i + 1


def heap_sort(arr, stats):
    n = len(arr)
    for i in range(n // 2 - 1, -1, -1):
        yield from _heapify(arr, stats, n, i)
    for end in range(n - 1, 0, -1):
        yield _swap(arr, stats, 0, end)
        yield _certify(arr, end)
        yield from _heapify(arr, stats, end, 0)
    yield _certify(arr, 0)


def _heapify(arr, stats, size, root):
    largest, left, right = root, 2 * root + 1, 2 * root + 2
    if left < size:
        yield _compare(stats, left, largest)
        if arr.get(left) > arr.get(largest):
            largest = left
    if right < size:
        yield _compare(stats, right, largest)
        if arr.get(right) > arr.get(largest):
            largest = right
    if largest != root:
        yield _swap(arr, stats, root, largest)
        yield from _heapify(arr, stats, size, largest)


# ============================================================
# ================== DISTRIBUTION SORTS ======================
# ============================================================
#
# These work through scratch buffers (count tables, buckets, an output
# list) and only touch the array again in the final write-back. The
# buffer contents are published as AuxState so an auxiliary view can
# show what is going on between the Overwrites.

def _frozen_buckets(buckets: List[List[int]]):
    return tuple(tuple(b) for b in buckets)


def radix_sort(arr, stats, base: int = RADIX_BASE):
    """LSD radix sort; needs non-negative values."""
    top = max(arr.values())
    exp = 1
    while top // exp > 0:
        yield from _radix_pass(arr, stats, exp, top, base)
        exp *= base


def _radix_pass(arr, stats, exp, top, base):
    n = len(arr)
    count = [0] * base
    # the array is untouched until the write-back, so the full partition
    # by this digit holds for the whole pass
    partition = [[] for _ in range(base)]
    for value in arr.values():
        partition[value // exp % base].append(value)
    partition = _frozen_buckets(partition)
    distributed = [[] for _ in range(base)]

    def view(phase, index):
        return AuxState({
            "algorithm":   "radix",
            "phase":       phase,
            "exponent":    exp,
            "digit":       int(round(math.log(exp, base))) + 1,
            "max_value":   top,
            "max_digits":  len(str(top)),
            "index":       index,
            "buckets":     partition,
            "distributed": _frozen_buckets(distributed),
        })

    for i in range(n):
        value = arr.get(i)
        digit = value // exp % base
        count[digit] += 1
        distributed[digit].append(value)
        yield view("distribute", i)

    for d in range(1, base):
        count[d] += count[d - 1]

    output = [0] * n
    for i in range(n - 1, -1, -1):
        value = arr.get(i)
        digit = value // exp % base
        count[digit] -= 1
        output[count[digit]] = value
        yield view("place", i)

    yield from _write_back(arr, stats, 0, output)


def counting_sort(arr, stats):
    n = len(arr)
    values = arr.values()
    lo, hi = min(values), max(values)
    counts = [0] * (hi - lo + 1)
    cumulative = None

    def view(phase, index):
        return AuxState({
            "algorithm":  "counting",
            "phase":      phase,
            "min_value":  lo,
            "index":      index,
            "counts":     tuple(counts),
            "cumulative": None if cumulative is None else tuple(cumulative),
        })

    for i in range(n):
        counts[arr.get(i) - lo] += 1
        yield view("count", i)

    cumulative = list(counts)
    for k in range(1, len(cumulative)):
        cumulative[k] += cumulative[k - 1]
    yield view("cumulate", None)

    positions = list(cumulative)
    output = [0] * n
    for i in range(n - 1, -1, -1):
        value = arr.get(i)
        positions[value - lo] -= 1
        output[positions[value - lo]] = value
        yield view("place", i)

    yield from _write_back(arr, stats, 0, output)


def bucket_sort(arr, stats):
    n = len(arr)
    bucket_count = max(1, math.isqrt(n))
    values = arr.values()
    lo, hi = min(values), max(values)
    span = hi - lo
    buckets = [[] for _ in range(bucket_count)]

    def view(phase, index):
        return AuxState({
            "algorithm":    "bucket",
            "phase":        phase,
            "bucket_count": bucket_count,
            "index":        index,
            "buckets":      _frozen_buckets(buckets),
        })

    for i in range(n):
        value = arr.get(i)
        # all-equal input has span 0: everything lands in bucket 0
        b = 0 if span == 0 else (value - lo) * (bucket_count - 1) // span
        buckets[b].append(value)
        yield view("distribute", i)

    for b in buckets:
        b.sort()
    yield view("sorted", None)

    yield from _write_back(arr, stats, 0, [v for b in buckets for v in b])


# ============================================================
# ========================= REGISTRY =========================
# ============================================================

GENERATORS: Dict[str, Callable[[ArrayModel, StatisticsCollector], Steps]] = {
    "bubble":    bubble_sort,
    "selection": selection_sort,
    "insertion": insertion_sort,
    "merge":     merge_sort,
    "quick":     quick_sort,
    "heap":      heap_sort,
    "radix":     radix_sort,
    "counting":  counting_sort,
    "bucket":    bucket_sort,
}


def get_generator(key: str, arr: ArrayModel, stats: StatisticsCollector) -> Steps:
    if key in GENERATORS:
        return GENERATORS[key](arr, stats)
    raise KeyError(f"Unknown key: {key}")


def run_steps(key: str, arr: ArrayModel, stats: StatisticsCollector) -> Steps:
    """Every step of ``key`` over ``arr``, then certify whatever is left.

    The algorithms that only know the array is sorted once they finish
    (merge, radix, counting, bucket) get one closing MarkSorted here, so a
    completed run always ends with every index certified.
    """
    yield from get_generator(key, arr, stats)
    done = arr.sorted_indices
    remaining = tuple(i for i in range(len(arr)) if i not in done)
    if remaining:
        yield _certify(arr, *remaining)
