"""
dspfilters - composable denoising filters for sampled sensor signals

Core components:
- SignalContainer: one scalar channel plus summary statistics
- Moving average, exponential smoothing, median, Haar wavelet and
  linear approximation filters
- FilterChain: sequential composition of filters
- IMU replay driver and command-line entry point
"""

__version__ = "1.0.0"

from dspfilters.core.logging import get_logger, setup_logging
from dspfilters.core.types import (
    Environment,
    ErrorEstimate,
    LinearizationType,
    ThresholdMode,
)
from dspfilters.filters import (
    ExponentialSmoothingFilter,
    ExponentialSmoothingSettings,
    FilterBase,
    FilterChain,
    LinearApproximationFilter,
    LinearApproximationSettings,
    MedianFilter,
    MedianSettings,
    MovingAverageFilter,
    MovingAverageSettings,
    WaveletSettings,
    WaveletThresholdFilter,
    create_filter_chain,
)
from dspfilters.signal import SignalContainer

__all__ = [
    "__version__",
    "setup_logging",
    "get_logger",
    "SignalContainer",
    "FilterBase",
    "FilterChain",
    "create_filter_chain",
    "MovingAverageFilter",
    "MovingAverageSettings",
    "ExponentialSmoothingFilter",
    "ExponentialSmoothingSettings",
    "MedianFilter",
    "MedianSettings",
    "WaveletThresholdFilter",
    "WaveletSettings",
    "LinearApproximationFilter",
    "LinearApproximationSettings",
    "Environment",
    "ErrorEstimate",
    "LinearizationType",
    "ThresholdMode",
]
