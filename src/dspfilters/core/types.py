"""
dspfilters Core Type Definitions

Enumerations shared by the filter settings and the configuration layer:
- ThresholdMode: Haar detail-coefficient thresholding policy
- Environment: noise character of a signal for exponential smoothing
- ErrorEstimate: error criterion of the linear approximation fit
- LinearizationType: shape of the locally fitted curve
"""

from __future__ import annotations

from enum import Enum


class ThresholdMode(Enum):
    """Wavelet detail thresholding policy."""
    SOFT = "soft"   # Shrink toward zero by the threshold
    HARD = "hard"   # Zero-or-pass-through


class Environment(Enum):
    """Signal environment (EMF) selecting the adaptive smoothing branch."""
    PHYSICAL = "physical"
    RADIO_TECHNICAL = "radio_technical"
    UNDEFINED = "undefined"


class ErrorEstimate(Enum):
    """Error criterion minimized by the linear approximation fit."""
    MAE = "mae"
    MSE = "mse"
    RMSE = "rmse"


class LinearizationType(Enum):
    """Fitted curve type."""
    LINEAR = "linear"
    PARABOLIC = "parabolic"  # Not implemented: applying writes zeros
