"""Plain, uninstrumented sorts that count comparisons and writes.

These mirror the counting rules of the step generators (one comparison per
logical comparison, one swap per exchange or per write into the array,
except insertion's final key placement) but share no code with them, so
the tests can check the engine's counters against an independent tally.
"""

import math
from fractions import Fraction


def bubble(a):
    a = list(a); c = s = 0
    n = len(a)
    for i in range(n - 1):
        for j in range(n - i - 1):
            c += 1
            if a[j] > a[j + 1]:
                a[j], a[j + 1] = a[j + 1], a[j]; s += 1
    return a, c, s


def selection(a):
    a = list(a); c = s = 0
    n = len(a)
    for i in range(n - 1):
        mi = i
        for j in range(i + 1, n):
            c += 1
            if a[j] < a[mi]:
                mi = j
        if mi != i:
            a[i], a[mi] = a[mi], a[i]; s += 1
    return a, c, s


def insertion(a):
    a = list(a); c = s = 0
    for i in range(1, len(a)):
        key = a[i]; j = i - 1
        while j >= 0:
            c += 1
            if a[j] <= key:
                break
            a[j + 1] = a[j]; s += 1
            j -= 1
        a[j + 1] = key
    return a, c, s


def merge(a):
    a = list(a); tally = [0, 0]

    def rec(lo, hi):
        if lo >= hi:
            return
        mid = (lo + hi) // 2
        rec(lo, mid); rec(mid + 1, hi)
        L, R = a[lo:mid + 1], a[mid + 1:hi + 1]
        out = []; i = j = 0
        while i < len(L) and j < len(R):
            tally[0] += 1
            if L[i] <= R[j]:
                out.append(L[i]); i += 1
            else:
                out.append(R[j]); j += 1
        out += L[i:] + R[j:]
        a[lo:hi + 1] = out
        tally[1] += len(out)

    rec(0, len(a) - 1)
    return a, tally[0], tally[1]


def quick(a):
    a = list(a); tally = [0, 0]

    def rec(lo, hi):
        if lo >= hi:
            return
        pivot = a[hi]; i = lo - 1
        for j in range(lo, hi):
            tally[0] += 1
            if a[j] < pivot:
                i += 1
                if i != j:
                    a[i], a[j] = a[j], a[i]; tally[1] += 1
        a[i + 1], a[hi] = a[hi], a[i + 1]; tally[1] += 1
        rec(lo, i); rec(i + 2, hi)

    rec(0, len(a) - 1)
    return a, tally[0], tally[1]


def heap(a):
    a = list(a); tally = [0, 0]

    def sift(size, root):
        while True:
            big, l, r = root, 2 * root + 1, 2 * root + 2
            if l < size:
                tally[0] += 1
                if a[l] > a[big]:
                    big = l
            if r < size:
                tally[0] += 1
                if a[r] > a[big]:
                    big = r
            if big == root:
                return
            a[root], a[big] = a[big], a[root]; tally[1] += 1
            root = big

    n = len(a)
    for i in range(n // 2 - 1, -1, -1):
        sift(n, i)
    for end in range(n - 1, 0, -1):
        a[0], a[end] = a[end], a[0]; tally[1] += 1
        sift(end, 0)
    return a, tally[0], tally[1]


def radix(a):
    passes = len(str(max(a))) if max(a) > 0 else 0
    return sorted(a), 0, passes * len(a)


def counting(a):
    return sorted(a), 0, len(a)


def bucket(a):
    return sorted(a), 0, len(a)


REFERENCE = {
    "bubble":    bubble,
    "selection": selection,
    "insertion": insertion,
    "merge":     merge,
    "quick":     quick,
    "heap":      heap,
    "radix":     radix,
    "counting":  counting,
    "bucket":    bucket,
}


def bucket_index(value, lo, hi, bucket_count):
    """floor(((value - lo) / range) * (bucket_count - 1)), computed exactly."""
    if hi == lo:
        return 0
    return math.floor(Fraction(value - lo, hi - lo) * (bucket_count - 1))
