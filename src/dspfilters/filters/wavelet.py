"""
Haar Wavelet Threshold Filter

Multiresolution denoising with the Haar wavelet:

1. Pad the signal to the next power of two by repeating the last sample
2. Decompose ``depth`` levels with PyWavelets (deepest approximation first,
   then detail bands from the deepest to the finest)
3. Threshold every detail band, keep the approximation
4. Reconstruct and truncate back to the input length

Thresholding:
- soft: threshold = sqrt(var(x) * 2 * log10(n)), computed from the data
  (the configured value is ignored); details shrink toward zero by it
- hard: configured threshold; details below it are zeroed, others kept

Use hard thresholding when the noise level is known, soft otherwise.

Reference:
- Donoho & Johnstone (1994). Ideal Spatial Adaptation by Wavelet Shrinkage
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np
import pywt
from numpy.typing import NDArray

from dspfilters.core.logging import get_logger
from dspfilters.core.types import ThresholdMode
from dspfilters.filters.base import FilterBase
from dspfilters.signal.helpers import calculate_variance

if TYPE_CHECKING:
    from dspfilters.core.config import WaveletConfig

logger = get_logger(__name__)

WAVELET = "haar"


@dataclass(frozen=True)
class WaveletSettings:
    """
    Args:
        threshold_mode: 'soft' (data-driven) or 'hard' (configured) thresholding
        threshold_value: Threshold for hard mode
        filtering_window: Reserved; carried in the configuration but unused
        depth: Number of decomposition levels
    """
    threshold_mode: ThresholdMode = ThresholdMode.HARD
    threshold_value: float = 0.0
    filtering_window: int = 0
    depth: int = 1

    @classmethod
    def from_config(cls, cfg: "WaveletConfig") -> "WaveletSettings":
        """Create settings from the pydantic WaveletConfig."""
        return cls(
            threshold_mode=cfg.threshold_mode,
            threshold_value=cfg.threshold_value,
            filtering_window=cfg.filtering_window,
            depth=cfg.depth,
        )

    def to_dict(self) -> dict:
        return {
            "threshold_mode": self.threshold_mode.value,
            "threshold_value": self.threshold_value,
            "filtering_window": self.filtering_window,
            "depth": self.depth,
        }


def next_power_of_two(n: int) -> int:
    size = 1
    while size < n:
        size *= 2
    return size


def pad_to_power_of_two(samples: NDArray[np.float64]) -> NDArray[np.float64]:
    """Repeat the last sample until the length is a power of two."""
    size = next_power_of_two(len(samples))
    if size == len(samples):
        return samples.copy()
    return np.concatenate([samples, np.full(size - len(samples), samples[-1])])


@dataclass
class WaveletThresholdFilter(FilterBase):
    """
    Haar wavelet denoiser.

    Usage:
        flt = WaveletThresholdFilter(WaveletSettings(threshold_mode=ThresholdMode.SOFT, depth=3))
        clean = flt.process(samples)

        # Inspect the coefficient bands
        coeffs = flt.decompose(samples, threshold=0.0)
        restored = flt.reconstruct(coeffs)
    """

    name = "wavelet"

    settings: WaveletSettings = field(default_factory=WaveletSettings)

    def check_preconditions(self, n: int) -> str | None:
        """Reason the signal length cannot be processed, or None."""
        depth = self.settings.depth
        if n < 2:
            return "signal shorter than 2 samples"
        if depth < 0:
            return "negative depth"
        ratio = n / 2 ** depth
        if ratio != math.floor(ratio):
            return "length not divisible by 2**depth"
        return None

    def resolve_threshold(self, samples: NDArray[np.float64]) -> float:
        """Threshold in effect for this signal."""
        if self.settings.threshold_mode == ThresholdMode.SOFT:
            return math.sqrt(calculate_variance(samples) * 2.0 * math.log10(len(samples)))
        return self.settings.threshold_value

    def threshold_details(self, detail: NDArray[np.float64], threshold: float) -> NDArray[np.float64]:
        """Apply the configured thresholding rule to one detail band."""
        # A zero threshold passes every coefficient through in both modes
        if threshold <= 0.0:
            return detail.copy()
        return pywt.threshold(detail, threshold, mode=self.settings.threshold_mode.value)

    def decompose(
        self,
        samples: Sequence[float] | NDArray[np.float64],
        threshold: float | None = None,
    ) -> list[NDArray[np.float64]]:
        """
        Padded, thresholded Haar coefficients.

        Args:
            samples: Input signal (length must satisfy the preconditions)
            threshold: Override of the effective threshold

        Returns:
            ``[cA_depth, cD_depth, ..., cD_1]`` as produced by ``pywt.wavedec``
        """
        samples = np.asarray(samples, dtype=np.float64)
        if threshold is None:
            threshold = self.resolve_threshold(samples)

        padded = pad_to_power_of_two(samples)
        if self.settings.depth == 0:
            return [padded]

        coeffs = pywt.wavedec(padded, WAVELET, level=self.settings.depth)
        return [coeffs[0]] + [self.threshold_details(d, threshold) for d in coeffs[1:]]

    def reconstruct(self, coeffs: Sequence[NDArray[np.float64]]) -> NDArray[np.float64]:
        """Invert :meth:`decompose` (the result keeps the padded length)."""
        if len(coeffs) == 1:
            return np.array(coeffs[0], dtype=np.float64)
        return pywt.waverec(list(coeffs), WAVELET)

    def _filter(self, samples: NDArray[np.float64]) -> NDArray[np.float64] | None:
        n = len(samples)
        reason = self.check_preconditions(n)
        if reason is not None:
            return self._reject(reason, n_samples=n, depth=self.settings.depth)

        threshold = self.resolve_threshold(samples)
        logger.debug(
            "Haar decomposition",
            mode=self.settings.threshold_mode.value,
            threshold=round(threshold, 6),
            depth=self.settings.depth,
            padded_length=next_power_of_two(n),
        )

        coeffs = self.decompose(samples, threshold=threshold)
        return self.reconstruct(coeffs)[:n]
