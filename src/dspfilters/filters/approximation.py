"""
Linear Approximation Filter

Replaces the signal by piecewise straight lines fitted over non-overlapping
windows, walking from the end of the signal toward the start (the front-most
window takes whatever remains). Each window is fitted over local positions
0..len-1:

- MSE / RMSE: closed-form least squares
- MAE: sub-gradient descent on the mean absolute error

The slope is clamped to [-max_incline, +max_incline] before the window is
written. With stabilization enabled, a negligible average slope triggers one
global DC-removal pass (the output mean is subtracted).

Parabolic linearization is not implemented: it fits nothing and produces a
zero signal of the input length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from dspfilters.core.logging import get_logger
from dspfilters.core.types import ErrorEstimate, LinearizationType
from dspfilters.filters.base import FilterBase

if TYPE_CHECKING:
    from dspfilters.core.config import ApproximationConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class LinearApproximationSettings:
    """
    Args:
        use_stabilization: Re-center the output around zero when the average
            slope is below ``stabilize_incline``
        stabilize_incline: Average-slope magnitude below which stabilization applies
        max_incline: Upper bound on the fitted slope magnitude
        window_size: Samples per fitted line (<= 0 or > len means one window)
        error_estimate: Error criterion of the fit
        linearization: Fitted curve type (only linear is implemented)
        learning_rate: MAE descent step
        max_iterations: MAE descent iteration cap
        tolerance: MAE convergence threshold on parameter change
    """
    use_stabilization: bool = True
    stabilize_incline: float = 0.0
    max_incline: float = 0.1
    window_size: int = 5
    error_estimate: ErrorEstimate = ErrorEstimate.RMSE
    linearization: LinearizationType = LinearizationType.LINEAR
    learning_rate: float = 1e-4
    max_iterations: int = 10_000
    tolerance: float = 1e-6

    @classmethod
    def from_config(cls, cfg: "ApproximationConfig") -> "LinearApproximationSettings":
        """
        Create settings from the pydantic ApproximationConfig.

        Args:
            cfg: dspfilters.core.config.ApproximationConfig instance

        Returns:
            Frozen settings for LinearApproximationFilter
        """
        return cls(
            use_stabilization=cfg.use_stabilization,
            stabilize_incline=cfg.stabilize_incline,
            max_incline=cfg.max_incline,
            window_size=cfg.window_size,
            error_estimate=cfg.error_estimate,
            linearization=cfg.linearization,
            learning_rate=cfg.learning_rate,
            max_iterations=cfg.max_iterations,
            tolerance=cfg.tolerance,
        )

    def to_dict(self) -> dict:
        return {
            "use_stabilization": self.use_stabilization,
            "stabilize_incline": self.stabilize_incline,
            "max_incline": self.max_incline,
            "window_size": self.window_size,
            "error_estimate": self.error_estimate.value,
            "linearization": self.linearization.value,
            "learning_rate": self.learning_rate,
            "max_iterations": self.max_iterations,
            "tolerance": self.tolerance,
        }


def fit_least_squares(window: NDArray[np.float64]) -> tuple[float, float]:
    """
    Closed-form least-squares line over positions 0..len-1.

    Returns:
        (incline, intercept); a degenerate slope is replaced by 0
    """
    size = len(window)
    positions = np.arange(size, dtype=np.float64)
    sum_x = float(positions.sum())
    sum_y = float(window.sum())
    sum_xy = float(np.dot(positions, window))
    sum_x2 = float(np.dot(positions, positions))

    denominator = size * sum_x2 - sum_x * sum_x
    incline = 0.0
    if denominator != 0.0:
        incline = (size * sum_xy - sum_x * sum_y) / denominator
        if not math.isfinite(incline):
            incline = 0.0

    intercept = (sum_y - incline * sum_x) / size
    return incline, intercept


def fit_least_absolute(
    window: NDArray[np.float64],
    learning_rate: float = 1e-4,
    max_iterations: int = 10_000,
    tolerance: float = 1e-6,
) -> tuple[float, float]:
    """
    Sub-gradient descent on the mean absolute error, starting from (0, 0).

    Returns:
        (incline, intercept)
    """
    size = len(window)
    positions = np.arange(size, dtype=np.float64)
    incline = 0.0
    intercept = 0.0

    for _ in range(max_iterations):
        errors = window - (incline * positions + intercept)
        sign = np.where(errors >= 0.0, 1.0, -1.0)
        grad_incline = float(-np.sum(sign * positions)) / size
        grad_intercept = float(-np.sum(sign)) / size

        new_incline = incline - learning_rate * grad_incline
        new_intercept = intercept - learning_rate * grad_intercept

        if abs(new_incline - incline) < tolerance and abs(new_intercept - intercept) < tolerance:
            break

        incline = new_incline
        intercept = new_intercept

    return incline, intercept


def clamp_incline(incline: float, max_incline: float) -> float:
    return max(-max_incline, min(max_incline, incline))


@dataclass
class LinearApproximationFilter(FilterBase):
    """Windowed linear regression smoother."""

    name = "approximation"

    settings: LinearApproximationSettings = field(
        default_factory=LinearApproximationSettings
    )

    def _fit(self, window: NDArray[np.float64]) -> tuple[float, float]:
        s = self.settings
        if s.error_estimate == ErrorEstimate.MAE:
            return fit_least_absolute(
                window,
                learning_rate=s.learning_rate,
                max_iterations=s.max_iterations,
                tolerance=s.tolerance,
            )
        return fit_least_squares(window)

    def _filter(self, samples: NDArray[np.float64]) -> NDArray[np.float64] | None:
        s = self.settings
        n = len(samples)
        if n == 0:
            return self._reject("empty signal")
        if s.linearization != LinearizationType.LINEAR:
            logger.warning(
                "Linearization type not implemented, writing zeros",
                filter=self.name,
                linearization=s.linearization.value,
            )
            return np.zeros(n, dtype=np.float64)

        window_size = s.window_size
        if window_size <= 0 or window_size > n:
            window_size = n

        approx = np.zeros(n, dtype=np.float64)
        incline_sum = 0.0
        n_windows = 0

        end = n
        while end > 0:
            start = max(0, end - window_size)
            window = samples[start:end]

            incline, intercept = self._fit(window)
            incline = clamp_incline(incline, s.max_incline)
            approx[start:end] = incline * np.arange(end - start, dtype=np.float64) + intercept

            incline_sum += incline
            n_windows += 1
            end = start

        if s.use_stabilization:
            average_incline = incline_sum / n_windows
            if abs(average_incline) < s.stabilize_incline:
                approx -= approx.mean()
                logger.debug(
                    "Approximation stabilized",
                    average_incline=round(average_incline, 6),
                    n_windows=n_windows,
                )

        return approx
