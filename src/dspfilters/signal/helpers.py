"""
Numeric helpers shared by several filters.

- hybrid_sort: stable run-based sort (insertion-sorted runs + pairwise merges)
- calculate_variance: population variance around the mean
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

DEFAULT_RUN_SIZE = 32


def _insertion_sort(values: list[float], left: int, right: int) -> None:
    """Sort values[left..right] (inclusive) in place."""
    for i in range(left + 1, right + 1):
        key = values[i]
        j = i - 1
        while j >= left and values[j] > key:
            values[j + 1] = values[j]
            j -= 1
        values[j + 1] = key


def _merge(values: list[float], left: int, middle: int, right: int) -> None:
    """Merge sorted runs values[left..middle] and values[middle+1..right]."""
    left_run = values[left:middle + 1]
    right_run = values[middle + 1:right + 1]

    i = j = 0
    k = left
    while i < len(left_run) and j < len(right_run):
        # <= keeps equal elements in their original order
        if left_run[i] <= right_run[j]:
            values[k] = left_run[i]
            i += 1
        else:
            values[k] = right_run[j]
            j += 1
        k += 1

    while i < len(left_run):
        values[k] = left_run[i]
        i += 1
        k += 1

    while j < len(right_run):
        values[k] = right_run[j]
        j += 1
        k += 1


def hybrid_sort(sequence: Sequence[float], run_size: int = DEFAULT_RUN_SIZE) -> list[float]:
    """
    Sort a sequence ascending with a run-based hybrid sort.

    The sequence is cut into runs of ``run_size`` elements, each run is
    insertion-sorted, then adjacent runs are merged with a span that doubles
    every pass until a single run remains. The result is stable and equal to
    ``sorted(sequence)``.

    Args:
        sequence: Values to sort (left untouched)
        run_size: Length of the insertion-sorted runs

    Returns:
        New sorted list
    """
    if run_size < 1:
        raise ValueError(f"run_size must be >= 1, got {run_size}")

    values = [float(v) for v in sequence]
    n = len(values)

    for start in range(0, n, run_size):
        _insertion_sort(values, start, min(start + run_size - 1, n - 1))

    size = run_size
    while size < n:
        for left in range(0, n, 2 * size):
            middle = left + size - 1
            right = min(left + 2 * size - 1, n - 1)
            if middle < right:
                _merge(values, left, middle, right)
        size *= 2

    return values


def calculate_variance(sequence: Sequence[float]) -> float:
    """
    Population variance (divisor N) of a sequence.

    Args:
        sequence: Non-empty sequence of samples

    Returns:
        Mean squared deviation from the mean
    """
    data = np.asarray(sequence, dtype=np.float64)
    if data.size == 0:
        raise ValueError("variance of an empty sequence is undefined")
    mean = data.sum() / data.size
    return float(np.sum((data - mean) ** 2) / data.size)
