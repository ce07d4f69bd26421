"""
Configuration for building a composite iterator.

This module defines:
- IteratorConfig: tolerances and limits of the standard criterion set
- IteratorSettings: the same options read from SOLVER_CONTROL_* env vars
- load_config: YAML loading on top of the IteratorConfig schema

Configuration errors are rejected at construction time with ValueError,
never at evaluation time.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from omegaconf import OmegaConf
from pydantic_settings import BaseSettings

SOLVER_CONTROL_ENV_PREFIX = "SOLVER_CONTROL_"

# Default residual settings
DEFAULT_RELATIVE_TOLERANCE = 1e-8
DEFAULT_ABSOLUTE_TOLERANCE = 0.0
DEFAULT_STABLE_ITERATIONS = 1

# Default iteration budget
DEFAULT_MAX_ITERATIONS = 1000

# Default divergence settings
# A residual 1e4 times its recent minimum for two evaluations in a row
DEFAULT_DIVERGENCE_GROWTH_FACTOR = 1e4
DEFAULT_DIVERGENCE_WINDOW = 10
DEFAULT_DIVERGENCE_PATIENCE = 2


@dataclass
class IteratorConfig:
    """
    Configuration of the standard stop criteria.

    Attributes:
        relative_tolerance: Residual tolerance relative to the source norm.
        absolute_tolerance: Absolute lower bound of the residual threshold.
        max_iterations: Iteration budget.
        divergence_growth_factor: Residual growth over the window minimum
            that counts as divergence.
        divergence_window: Number of recent residual norms kept.
        divergence_patience: Consecutive growth evaluations before the run
            is declared diverged.
        stable_iterations: Consecutive evaluations below tolerance required
            for convergence.
        check_finite: Add the NaN/Inf check on solution and residual.
        max_seconds: Optional wall-clock budget. None disables it.
    """

    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE
    absolute_tolerance: float = DEFAULT_ABSOLUTE_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    divergence_growth_factor: float = DEFAULT_DIVERGENCE_GROWTH_FACTOR
    divergence_window: int = DEFAULT_DIVERGENCE_WINDOW
    divergence_patience: int = DEFAULT_DIVERGENCE_PATIENCE
    stable_iterations: int = DEFAULT_STABLE_ITERATIONS
    check_finite: bool = True
    max_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.relative_tolerance > 0:
            raise ValueError(
                f"relative_tolerance must be > 0, got {self.relative_tolerance}"
            )
        if not self.absolute_tolerance >= 0:
            raise ValueError(
                f"absolute_tolerance must be >= 0, got {self.absolute_tolerance}"
            )
        if self.max_iterations <= 0:
            raise ValueError(
                f"max_iterations must be > 0, got {self.max_iterations}"
            )
        if not self.divergence_growth_factor > 1:
            raise ValueError(
                "divergence_growth_factor must be > 1, "
                f"got {self.divergence_growth_factor}"
            )
        if self.divergence_window < 2:
            raise ValueError(
                f"divergence_window must be >= 2, got {self.divergence_window}"
            )
        if self.divergence_patience < 1:
            raise ValueError(
                "divergence_patience must be >= 1, "
                f"got {self.divergence_patience}"
            )
        if self.stable_iterations < 1:
            raise ValueError(
                f"stable_iterations must be >= 1, got {self.stable_iterations}"
            )
        if self.max_seconds is not None and not self.max_seconds > 0:
            raise ValueError(
                f"max_seconds must be > 0, got {self.max_seconds}"
            )


class IteratorSettings(BaseSettings):
    model_config = {"env_prefix": SOLVER_CONTROL_ENV_PREFIX}

    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE
    absolute_tolerance: float = DEFAULT_ABSOLUTE_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    divergence_growth_factor: float = DEFAULT_DIVERGENCE_GROWTH_FACTOR
    divergence_window: int = DEFAULT_DIVERGENCE_WINDOW
    divergence_patience: int = DEFAULT_DIVERGENCE_PATIENCE
    stable_iterations: int = DEFAULT_STABLE_ITERATIONS
    check_finite: bool = True
    max_seconds: float | None = None

    def to_config(self) -> IteratorConfig:
        """Validate the settings as an IteratorConfig."""
        return IteratorConfig(**self.model_dump())


def load_config(yaml_path: Path | None = None) -> IteratorConfig:
    """Load and validate iterator configuration from YAML.

    Args:
        yaml_path: Path to YAML config file. None returns the defaults.

    Returns:
        Validated IteratorConfig

    Raises:
        ValueError: If a tolerance or limit is invalid
        FileNotFoundError: If yaml_path doesn't exist
    """
    # Create schema from dataclass
    schema = OmegaConf.structured(IteratorConfig)

    if yaml_path is not None:
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        user_config = OmegaConf.load(yaml_path)
        config = OmegaConf.merge(schema, user_config)
    else:
        config = schema

    # Convert to typed dataclass
    result = OmegaConf.to_object(config)
    assert isinstance(result, IteratorConfig)

    return result


def default_config() -> IteratorConfig:
    """Create a default iterator configuration."""
    return IteratorConfig()
