"""
dspfilters Configuration Management

Uses OmegaConf for hierarchical YAML configuration with:
- Base file + named file + runtime overrides
- Environment variable interpolation
- Type validation via Pydantic

A filter chain is described as an ordered list of filter entries, each
tagged with its ``kind``:

    chain:
      filters:
        - kind: median
          window_size: 16
        - kind: exponential
          environment: physical
          physical_factor: 0.2
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

from omegaconf import OmegaConf
from pydantic import BaseModel, Field

from dspfilters.core.types import (
    Environment,
    ErrorEstimate,
    LinearizationType,
    ThresholdMode,
)


# ============================================================================
# Filter Configurations
# ============================================================================

class MovingAverageConfig(BaseModel):
    """Moving average filter configuration."""
    kind: Literal["moving_average"] = "moving_average"
    window_size: int = 3


class MedianConfig(BaseModel):
    """Median filter configuration."""
    kind: Literal["median"] = "median"
    window_size: int = 3


class ExponentialConfig(BaseModel):
    """Exponential smoothing filter configuration."""
    kind: Literal["exponential"] = "exponential"
    environment: Environment = Environment.PHYSICAL
    physical_factor: float = 0.5
    standard_factor: float = 0.5
    maximal_factor: float = 0.5
    delta_threshold: float = 0.0


class WaveletConfig(BaseModel):
    """Haar wavelet threshold filter configuration."""
    kind: Literal["wavelet"] = "wavelet"
    threshold_mode: ThresholdMode = ThresholdMode.HARD
    threshold_value: float = 0.0
    filtering_window: int = 0
    depth: int = 1


class ApproximationConfig(BaseModel):
    """Linear approximation filter configuration."""
    kind: Literal["approximation"] = "approximation"
    use_stabilization: bool = True
    stabilize_incline: float = 0.0
    max_incline: float = 0.1
    window_size: int = 5
    error_estimate: ErrorEstimate = ErrorEstimate.RMSE
    linearization: LinearizationType = LinearizationType.LINEAR
    learning_rate: float = 1e-4
    max_iterations: int = 10_000
    tolerance: float = 1e-6


FilterConfig = Annotated[
    Union[
        MovingAverageConfig,
        MedianConfig,
        ExponentialConfig,
        WaveletConfig,
        ApproximationConfig,
    ],
    Field(discriminator="kind"),
]


class ChainConfig(BaseModel):
    """Ordered filter chain configuration."""
    filters: list[FilterConfig] = Field(default_factory=list)


# ============================================================================
# Ambient Configurations
# ============================================================================

class LoggingConfig(BaseModel):
    """Structured logging configuration."""
    level: str = "INFO"
    format: Literal["json", "console"] = "console"


class ReplayConfig(BaseModel):
    """IMU replay driver configuration."""
    buffer_size: int = Field(default=128, ge=1)  # Samples kept per channel
    header: str = "$GYRACC"
    timestamp_scale: float = 1000.0  # Input timestamps are divided by this on output


class DSPConfig(BaseModel):
    """
    Complete dspfilters configuration.

    Top-level object holding the filter chain and the ambient settings.
    """
    chain: ChainConfig = Field(default_factory=ChainConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    replay: ReplayConfig = Field(default_factory=ReplayConfig)


def load_config(
    config_name: str = "imu",
    config_dir: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> DSPConfig:
    """
    Load configuration from YAML files.

    Args:
        config_name: Name of the config file (without .yaml extension)
        config_dir: Directory containing config files. Defaults to 'configs/'
        overrides: Dictionary of values to override

    Returns:
        Validated DSPConfig instance
    """
    config_dir = get_config_path() if config_dir is None else Path(config_dir)

    base_path = config_dir / "base.yaml"
    if base_path.exists():
        base_cfg = OmegaConf.load(base_path)
    else:
        base_cfg = OmegaConf.create({})

    named_path = config_dir / f"{config_name}.yaml"
    if named_path.exists():
        cfg = OmegaConf.merge(base_cfg, OmegaConf.load(named_path))
    elif config_name != "base":
        raise FileNotFoundError(f"Config file not found: {named_path}")
    else:
        cfg = base_cfg

    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.create(overrides))

    cfg_dict = OmegaConf.to_container(cfg, resolve=True)

    return DSPConfig.model_validate(cfg_dict or {})


def get_config_path() -> Path:
    """Get the path to the configs directory."""
    return Path(__file__).parent.parent.parent.parent / "configs"
