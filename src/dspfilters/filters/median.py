"""
Median Filter

Sliding order-statistic filter. Each output position i looks at the window
of up to ``window_size`` samples starting at i, sorts it with the shared
hybrid sort and emits the element at index ceil(len / 2) (index 0 for a
single-element window).

Trailing boundary, once fewer than ``window_size`` samples remain:
- the whole signal is shorter than the window: emit the order statistic of
  the remaining tail
- otherwise: repeat the previous output
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np
from numpy.typing import NDArray

from dspfilters.filters.base import FilterBase
from dspfilters.signal.helpers import hybrid_sort

if TYPE_CHECKING:
    from dspfilters.core.config import MedianConfig


@dataclass(frozen=True)
class MedianSettings:
    """
    Args:
        window_size: Number of samples in each sorted window (<= 0 disables)
    """
    window_size: int = 3

    @classmethod
    def from_config(cls, cfg: "MedianConfig") -> "MedianSettings":
        return cls(window_size=cfg.window_size)

    def to_dict(self) -> dict:
        return {"window_size": self.window_size}


def window_order_statistic(window: Sequence[float]) -> float:
    """Element at index ceil(len / 2) of the sorted window (0 when len == 1)."""
    ordered = hybrid_sort(window)
    size = len(ordered)
    middle = 0 if size == 1 else math.ceil(size / 2)
    return ordered[middle]


@dataclass
class MedianFilter(FilterBase):
    """Forward-looking sliding median."""

    name = "median"

    settings: MedianSettings = field(default_factory=MedianSettings)

    def _filter(self, samples: NDArray[np.float64]) -> NDArray[np.float64] | None:
        window = self.settings.window_size
        if window < 1:
            return self._reject("window_size < 1", window_size=window)

        n = len(samples)
        if n == 0:
            return self._reject("empty signal")

        x = samples.tolist()
        out: list[float] = []
        for i in range(n):
            if i + window <= n:
                out.append(window_order_statistic(x[i:i + window]))
            elif n < window:
                out.append(window_order_statistic(x[i:]))
            else:
                out.append(out[-1])

        return np.asarray(out, dtype=np.float64)
