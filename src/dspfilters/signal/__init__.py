"""
Signal storage and shared numeric helpers.

- SignalContainer: one channel of samples with eagerly recomputed statistics
- hybrid_sort / calculate_variance: helpers reused by several filters
"""

from dspfilters.signal.container import SignalContainer
from dspfilters.signal.helpers import calculate_variance, hybrid_sort

__all__ = [
    "SignalContainer",
    "calculate_variance",
    "hybrid_sort",
]
