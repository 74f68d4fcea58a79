"""
Exponential Smoothing Filter (EMF)

Unlike the moving average, every new sample receives a weight that is chosen
adaptively from the signal environment:

- radio_technical: jumps of at least ``delta_threshold`` use the maximal
  factor, smaller moves use the standard factor
- physical: the weight is the physical factor, damped by variance / delta when
  a move exceeds the signal variance
- undefined: like radio_technical, with the trigger at twice the variance

Blend: out[i] = (1 - w) * out[i-1] + w * x[i]. The recurrence is strictly
sequential in index order. The first output is seeded with
standard_factor * x[0].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from dspfilters.core.types import Environment
from dspfilters.filters.base import FilterBase
from dspfilters.signal.helpers import calculate_variance

if TYPE_CHECKING:
    from dspfilters.core.config import ExponentialConfig


@dataclass(frozen=True)
class ExponentialSmoothingSettings:
    """
    Args:
        environment: Signal environment selecting the smoothing branch
        physical_factor: Smoothing factor for physical signals
        standard_factor: Factor for small moves (radio_technical / undefined)
        maximal_factor: Factor for large moves (radio_technical / undefined)
        delta_threshold: Jump size that switches to the maximal factor
            (radio_technical only)
    """
    environment: Environment = Environment.PHYSICAL
    physical_factor: float = 0.5
    standard_factor: float = 0.5
    maximal_factor: float = 0.5
    delta_threshold: float = 0.0

    @classmethod
    def from_config(cls, cfg: "ExponentialConfig") -> "ExponentialSmoothingSettings":
        """Create settings from the pydantic ExponentialConfig."""
        return cls(
            environment=cfg.environment,
            physical_factor=cfg.physical_factor,
            standard_factor=cfg.standard_factor,
            maximal_factor=cfg.maximal_factor,
            delta_threshold=cfg.delta_threshold,
        )

    def to_dict(self) -> dict:
        return {
            "environment": self.environment.value,
            "physical_factor": self.physical_factor,
            "standard_factor": self.standard_factor,
            "maximal_factor": self.maximal_factor,
            "delta_threshold": self.delta_threshold,
        }


def _blend(previous: float, current: float, weight: float) -> float:
    return (1.0 - weight) * previous + weight * current


@dataclass
class ExponentialSmoothingFilter(FilterBase):
    """Adaptive exponential smoothing keyed by signal environment."""

    name = "exponential"

    settings: ExponentialSmoothingSettings = field(
        default_factory=ExponentialSmoothingSettings
    )

    def _filter(self, samples: NDArray[np.float64]) -> NDArray[np.float64] | None:
        s = self.settings
        if s.environment in (Environment.RADIO_TECHNICAL, Environment.UNDEFINED):
            if s.maximal_factor + s.standard_factor != 1.0:
                return self._reject(
                    "maximal_factor + standard_factor != 1.0",
                    environment=s.environment.value,
                    maximal_factor=s.maximal_factor,
                    standard_factor=s.standard_factor,
                )

        n = len(samples)
        if n == 0:
            return self._reject("empty signal")

        x = samples.tolist()
        out = [0.0] * n
        out[0] = s.standard_factor * x[0]

        if s.environment == Environment.RADIO_TECHNICAL:
            for i in range(1, n):
                delta = abs(x[i] - out[i - 1])
                weight = s.maximal_factor if delta >= s.delta_threshold else s.standard_factor
                out[i] = _blend(out[i - 1], x[i], weight)

        elif s.environment == Environment.PHYSICAL:
            variance = calculate_variance(x)
            for i in range(1, n):
                delta = abs(x[i] - out[i - 1])
                if delta > variance:
                    weight = s.physical_factor * (variance / delta)
                else:
                    weight = s.physical_factor
                out[i] = _blend(out[i - 1], x[i], weight)

        else:
            threshold = 2.0 * calculate_variance(x)
            for i in range(1, n):
                delta = abs(x[i] - out[i - 1])
                weight = s.maximal_factor if delta > threshold else s.standard_factor
                out[i] = _blend(out[i - 1], x[i], weight)

        return np.asarray(out, dtype=np.float64)
