"""
dspfilters Core Module

Contains fundamental utilities used across the package:
- Configuration management
- Logging infrastructure
- Shared enumerations
"""

from dspfilters.core.config import DSPConfig, load_config
from dspfilters.core.logging import get_logger, setup_logging
from dspfilters.core.types import (
    Environment,
    ErrorEstimate,
    LinearizationType,
    ThresholdMode,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "load_config",
    "DSPConfig",
    "Environment",
    "ErrorEstimate",
    "LinearizationType",
    "ThresholdMode",
]
