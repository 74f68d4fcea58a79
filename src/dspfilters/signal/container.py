"""
Signal container backing every filter.

A SignalContainer owns one scalar channel of samples (insertion order is time
order) together with summary statistics that are recomputed eagerly on every
mutation. An empty sequence never triggers a recompute: the statistics keep
their last-known values (zero for a fresh container).
"""

from __future__ import annotations

import math
from typing import Iterator, Sequence

import numpy as np
from numpy.typing import NDArray


class SignalContainer:
    """
    One channel of samples plus derived statistics.

    Attributes:
        timestamp: Externally attached time reference (not interpreted here)

    Statistics (read-only): sum, mean, variance (population), std_deviation,
    max, min.
    """

    def __init__(
        self,
        samples: Sequence[float] | NDArray[np.float64] | None = None,
        timestamp: float = 0.0,
    ) -> None:
        self.timestamp = timestamp
        self._samples: NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._sum = 0.0
        self._mean = 0.0
        self._variance = 0.0
        self._std_deviation = 0.0
        self._max = 0.0
        self._min = 0.0

        if samples is not None:
            self._samples = np.array(samples, dtype=np.float64).reshape(-1)
            self._calculate_characteristics()

    def _calculate_characteristics(self) -> None:
        """Recompute statistics; an empty sequence keeps the previous values."""
        n = self._samples.size
        if n == 0:
            return

        self._sum = float(np.sum(self._samples))
        self._mean = self._sum / n
        self._variance = float(np.sum((self._samples - self._mean) ** 2) / n)
        self._std_deviation = math.sqrt(self._variance)
        self._max = float(np.max(self._samples))
        self._min = float(np.min(self._samples))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_signal(self, samples: Sequence[float] | NDArray[np.float64]) -> None:
        """Replace the samples wholesale."""
        self._samples = np.array(samples, dtype=np.float64).reshape(-1)
        self._calculate_characteristics()

    def append_signal(self, value: float) -> None:
        """Push one sample at the end."""
        self._samples = np.append(self._samples, float(value))
        self._calculate_characteristics()

    def erase_signal(self, position: int) -> None:
        """Remove the sample at ``position``; out-of-range positions are ignored."""
        if 0 <= position < self._samples.size:
            self._samples = np.delete(self._samples, position)
            self._calculate_characteristics()

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get_signal(self) -> NDArray[np.float64]:
        """Copy of the samples."""
        return self._samples.copy()

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < self._samples.size:
            raise IndexError(
                f"signal index {index} out of range for length {self._samples.size}"
            )
        return float(self._samples[index])

    def __len__(self) -> int:
        return int(self._samples.size)

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._samples)

    def __repr__(self) -> str:
        return f"SignalContainer(n={len(self)}, mean={self._mean:.6g}, std={self._std_deviation:.6g})"

    @property
    def sum(self) -> float:
        return self._sum

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def std_deviation(self) -> float:
        return self._std_deviation

    @property
    def max(self) -> float:
        return self._max

    @property
    def min(self) -> float:
        return self._min

    def to_dict(self) -> dict:
        """Summary statistics as a dictionary."""
        return {
            "n_samples": len(self),
            "sum": self._sum,
            "mean": self._mean,
            "variance": self._variance,
            "std_deviation": self._std_deviation,
            "max": self._max,
            "min": self._min,
        }
