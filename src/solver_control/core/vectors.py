"""
Numeric vector abstraction consumed by the stop criteria.

Criteria never compare scalars of the vector's field directly. They work
on real magnitudes derived from the vector, which keeps real and complex
vectors on the same code path:
- dimension: number of elements
- magnitude: Euclidean norm as a real float
- all_finite: element-wise NaN/Inf check

Vectors are numpy arrays (or anything ``np.asarray`` accepts). Objects that
provide their own ``norm()`` and ``dimension()`` methods are used through
those methods instead.
"""

import math
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike


@runtime_checkable
class SupportsNorm(Protocol):
    def norm(self) -> float: ...
    def dimension(self) -> int: ...


def dimension(vector: ArrayLike | SupportsNorm) -> int:
    """Number of elements in the vector."""
    if isinstance(vector, SupportsNorm):
        return int(vector.dimension())
    return int(np.asarray(vector).size)


def is_one_dimensional(vector: ArrayLike | SupportsNorm) -> bool:
    """Whether the vector is a flat array. Custom vector types always are."""
    if isinstance(vector, SupportsNorm):
        return True
    return bool(np.ndim(vector) == 1)


def magnitude(vector: ArrayLike | SupportsNorm) -> float:
    """
    Euclidean norm of a real or complex vector.

    Args:
        vector: Vector to measure.

    Returns:
        sqrt(sum |x_i|^2) as a real Python float. NaN or Inf elements
        propagate into the result.
    """
    if isinstance(vector, SupportsNorm):
        return float(vector.norm())
    values = np.asarray(vector).ravel()
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.linalg.norm(values))


def is_finite_magnitude(value: float) -> bool:
    return math.isfinite(value)


def all_finite(vector: Any) -> bool:
    """
    Check that every element is finite.

    For complex vectors both real and imaginary parts are checked.
    Objects without array storage fall back to their norm.
    """
    if isinstance(vector, SupportsNorm) and not hasattr(vector, "__array__"):
        return is_finite_magnitude(magnitude(vector))
    values = np.asarray(vector)
    if not np.issubdtype(values.dtype, np.inexact):
        return True
    return bool(np.all(np.isfinite(values)))
