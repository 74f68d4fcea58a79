"""
Moving Average Filter (MAF)

Smooths a signal by averaging over a trailing window:
- out[0] = x[0]
- warm-up (i < window): exact running mean of x[0..i]
- afterwards: mean of the last ``window`` samples, summed directly each step
  so no rounding drift accumulates
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from dspfilters.filters.base import FilterBase

if TYPE_CHECKING:
    from dspfilters.core.config import MovingAverageConfig


@dataclass(frozen=True)
class MovingAverageSettings:
    """
    Args:
        window_size: Number of trailing samples averaged per output (<= 0 disables)
    """
    window_size: int = 3

    @classmethod
    def from_config(cls, cfg: "MovingAverageConfig") -> "MovingAverageSettings":
        return cls(window_size=cfg.window_size)

    def to_dict(self) -> dict:
        return {"window_size": self.window_size}


@dataclass
class MovingAverageFilter(FilterBase):
    """Trailing-window moving average."""

    name = "moving_average"

    settings: MovingAverageSettings = field(default_factory=MovingAverageSettings)

    def _filter(self, samples: NDArray[np.float64]) -> NDArray[np.float64] | None:
        n = len(samples)
        if self.settings.window_size < 1:
            return self._reject("window_size < 1", window_size=self.settings.window_size)
        if n == 0:
            return self._reject("empty signal")

        # Clamp for this call only
        window = min(self.settings.window_size, n)

        filtered = np.empty(n, dtype=np.float64)
        filtered[0] = samples[0]
        for i in range(1, n):
            if i < window:
                filtered[i] = np.sum(samples[:i + 1]) / (i + 1)
            else:
                filtered[i] = np.sum(samples[i - window + 1:i + 1]) / window

        return filtered
