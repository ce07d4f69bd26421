"""
Core shared types and utilities for solver control.

This module provides the numeric vector abstraction used by every stop
criterion, so that criteria stay independent of the scalar field (real or
complex) of the vectors they inspect.
"""

from solver_control.core.vectors import (
    SupportsNorm,
    all_finite,
    dimension,
    is_finite_magnitude,
    is_one_dimensional,
    magnitude,
)

__all__ = [
    "SupportsNorm",
    "all_finite",
    "dimension",
    "is_finite_magnitude",
    "is_one_dimensional",
    "magnitude",
]
