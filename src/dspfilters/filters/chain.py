"""
Filter chain

Strict sequential composition of filters: filter i+1 receives exactly the
filtered output of filter i. The chain owns its filters and its own
original/filtered containers; samples are copied at every hand-off so no
container is ever shared between two filters.

Usage:
    chain = FilterChain()
    chain.add_filter(MedianFilter(MedianSettings(window_size=3)))
    chain.add_filter(MovingAverageFilter(MovingAverageSettings(window_size=2)))
    chain.set_signal(samples)
    chain.apply_filters()
    smoothed = chain.get_filtered_signal()
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from dspfilters.core.config import (
    ApproximationConfig,
    ChainConfig,
    ExponentialConfig,
    FilterConfig,
    MedianConfig,
    MovingAverageConfig,
    WaveletConfig,
)
from dspfilters.core.logging import LogContext, get_logger, log_performance
from dspfilters.filters.approximation import (
    LinearApproximationFilter,
    LinearApproximationSettings,
)
from dspfilters.filters.base import FilterBase
from dspfilters.filters.exponential import (
    ExponentialSmoothingFilter,
    ExponentialSmoothingSettings,
)
from dspfilters.filters.median import MedianFilter, MedianSettings
from dspfilters.filters.moving_average import MovingAverageFilter, MovingAverageSettings
from dspfilters.filters.wavelet import WaveletSettings, WaveletThresholdFilter
from dspfilters.signal.container import SignalContainer

logger = get_logger(__name__)


@dataclass
class FilterChain:
    """Ordered list of filters applied one after another."""

    filters: list[FilterBase] = field(default_factory=list)

    _original: SignalContainer = field(
        default_factory=SignalContainer, init=False, repr=False
    )
    _filtered: SignalContainer = field(
        default_factory=SignalContainer, init=False, repr=False
    )

    def add_filter(self, flt: FilterBase) -> None:
        """Append a filter at the end of the chain."""
        self.filters.append(flt)

    def remove_filter(self, index: int) -> FilterBase:
        """Remove and return the filter at ``index``."""
        if not 0 <= index < len(self.filters):
            raise IndexError(
                f"filter index {index} out of range for chain of {len(self.filters)}"
            )
        return self.filters.pop(index)

    def clear_filters(self) -> None:
        self.filters.clear()

    def __getitem__(self, index: int) -> FilterBase:
        return self.filters[index]

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[FilterBase]:
        return iter(self.filters)

    def set_signal(self, samples: Sequence[float] | NDArray[np.float64]) -> None:
        """Replace the chain input."""
        self._original.set_signal(samples)

    def get_signal(self) -> NDArray[np.float64]:
        """Chain output of the last apply."""
        return self._filtered.get_signal()

    def get_filtered_signal(self) -> NDArray[np.float64]:
        """Alias of :meth:`get_signal`."""
        return self._filtered.get_signal()

    @property
    def original(self) -> SignalContainer:
        return self._original

    @property
    def filtered(self) -> SignalContainer:
        return self._filtered

    def apply_filters(self) -> None:
        """Run every filter in list order, threading outputs into inputs."""
        if not self.filters:
            return

        started = time.perf_counter()
        working = self._original.get_signal()

        for step, flt in enumerate(self.filters):
            with LogContext(chain_step=step, filter=flt.name):
                flt.set_signal(working)
                flt.apply_filter()
                working = flt.get_filtered_signal()
                if len(working) == 0:
                    logger.warning("Chain step produced no samples")

        self._filtered.set_signal(working)

        log_performance(
            logger,
            "filter_chain",
            (time.perf_counter() - started) * 1000.0,
            n_filters=len(self.filters),
            n_samples=len(self._original),
        )

    def process(self, samples: Sequence[float] | NDArray[np.float64]) -> NDArray[np.float64]:
        """Set, apply and read back in one call."""
        self.set_signal(samples)
        self.apply_filters()
        return self.get_filtered_signal()

    def get_stats(self) -> dict:
        """Chain description and output statistics."""
        return {
            "filters": [
                {"name": flt.name, **flt.settings.to_dict()}  # type: ignore[attr-defined]
                for flt in self.filters
            ],
            "original": self._original.to_dict(),
            "filtered": self._filtered.to_dict(),
        }


def create_filter(cfg: FilterConfig) -> FilterBase:
    """
    Factory: build one filter from its configuration entry.

    Args:
        cfg: Any of the tagged filter configs from dspfilters.core.config

    Returns:
        Filter instance with frozen settings
    """
    if isinstance(cfg, MovingAverageConfig):
        return MovingAverageFilter(MovingAverageSettings.from_config(cfg))
    if isinstance(cfg, MedianConfig):
        return MedianFilter(MedianSettings.from_config(cfg))
    if isinstance(cfg, ExponentialConfig):
        return ExponentialSmoothingFilter(ExponentialSmoothingSettings.from_config(cfg))
    if isinstance(cfg, WaveletConfig):
        return WaveletThresholdFilter(WaveletSettings.from_config(cfg))
    if isinstance(cfg, ApproximationConfig):
        return LinearApproximationFilter(LinearApproximationSettings.from_config(cfg))
    raise ValueError(f"Unsupported filter config: {type(cfg).__name__}")


def create_filter_chain(
    config: ChainConfig | Sequence[FilterConfig | dict[str, Any]] | None = None,
) -> FilterChain:
    """
    Factory: build a chain from configuration.

    Args:
        config: ChainConfig, or a list of filter configs / plain dicts
            such as ``[{"kind": "median", "window_size": 3}]``

    Returns:
        FilterChain with one filter per entry, in order
    """
    if config is None:
        config = ChainConfig()
    elif not isinstance(config, ChainConfig):
        config = ChainConfig.model_validate({"filters": list(config)})

    chain = FilterChain([create_filter(cfg) for cfg in config.filters])
    logger.info(
        "FilterChain created",
        filters=[flt.name for flt in chain.filters],
    )
    return chain
