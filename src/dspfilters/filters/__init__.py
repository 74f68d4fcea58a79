"""
dspfilters Filter Module

Composable one-channel filters sharing a common capability set:
- MovingAverageFilter: trailing-window mean
- ExponentialSmoothingFilter: adaptive exponential smoothing (EMF)
- MedianFilter: sliding order statistic
- WaveletThresholdFilter: Haar multiresolution thresholding
- LinearApproximationFilter: windowed linear regression
- FilterChain: strict sequential composition of filters
"""

from dspfilters.filters.approximation import (
    LinearApproximationFilter,
    LinearApproximationSettings,
)
from dspfilters.filters.base import FilterBase
from dspfilters.filters.chain import FilterChain, create_filter, create_filter_chain
from dspfilters.filters.exponential import (
    ExponentialSmoothingFilter,
    ExponentialSmoothingSettings,
)
from dspfilters.filters.median import MedianFilter, MedianSettings
from dspfilters.filters.moving_average import MovingAverageFilter, MovingAverageSettings
from dspfilters.filters.wavelet import WaveletSettings, WaveletThresholdFilter

__all__ = [
    "FilterBase",
    # Filters
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
    # Composition
    "FilterChain",
    "create_filter",
    "create_filter_chain",
]
