"""
Common contract for all filters.

Every filter owns exactly one *original* and one *filtered* SignalContainer.
``apply_filter`` reads the original samples, runs the concrete algorithm and
replaces the filtered samples. When an algorithm's preconditions are not met
it returns ``None``: the filtered container is left exactly as it was and a
warning is logged, so callers detect the failure by the absence of new data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

import numpy as np
from numpy.typing import NDArray

from dspfilters.core.logging import get_logger
from dspfilters.signal.container import SignalContainer

logger = get_logger(__name__)


@dataclass
class FilterBase(ABC):
    """
    Base class of the filter capability set.

    Subclasses declare a ``settings`` field and implement ``_filter``.

    Usage:
        flt = MedianFilter(MedianSettings(window_size=5))
        flt.set_signal(samples)
        flt.apply_filter()
        smoothed = flt.get_filtered_signal()
    """

    name: ClassVar[str] = "filter"

    _original: SignalContainer = field(
        default_factory=SignalContainer, init=False, repr=False
    )
    _filtered: SignalContainer = field(
        default_factory=SignalContainer, init=False, repr=False
    )

    @abstractmethod
    def _filter(self, samples: NDArray[np.float64]) -> NDArray[np.float64] | None:
        """
        Run the algorithm on a copy of the original samples.

        Returns:
            Filtered samples, or None when preconditions are not met
        """

    def apply_filter(self) -> None:
        """Filter the original samples into the filtered container."""
        samples = self._original.get_signal()
        result = self._filter(samples)
        if result is None:
            return

        self._filtered.set_signal(result)
        logger.debug(
            "Filter applied",
            filter=self.name,
            n_in=len(samples),
            n_out=len(result),
        )

    def _reject(self, reason: str, **fields: Any) -> None:
        """Log a precondition failure; the filtered container stays untouched."""
        logger.warning(
            "Filter preconditions not met, output unchanged",
            filter=self.name,
            reason=reason,
            **fields,
        )
        return None

    def set_signal(self, samples: Sequence[float] | NDArray[np.float64]) -> None:
        """Replace the original samples."""
        self._original.set_signal(samples)

    def get_signal(self) -> NDArray[np.float64]:
        """Filtered samples produced by the last successful apply."""
        return self._filtered.get_signal()

    def get_filtered_signal(self) -> NDArray[np.float64]:
        """Alias of :meth:`get_signal`."""
        return self._filtered.get_signal()

    def process(self, samples: Sequence[float] | NDArray[np.float64]) -> NDArray[np.float64]:
        """Set, apply and read back in one call."""
        self.set_signal(samples)
        self.apply_filter()
        return self.get_signal()

    @property
    def original(self) -> SignalContainer:
        """Container holding the input samples."""
        return self._original

    @property
    def filtered(self) -> SignalContainer:
        """Container holding the output samples."""
        return self._filtered
