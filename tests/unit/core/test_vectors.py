"""
Tests for the numeric vector abstraction.
"""

import math

import numpy as np

from solver_control.core.vectors import (
    all_finite,
    dimension,
    is_finite_magnitude,
    is_one_dimensional,
    magnitude,
)


class NormedVector:
    """Vector type exposing its own norm and dimension."""

    def __init__(self, values: list[float]) -> None:
        self.values = values

    def norm(self) -> float:
        return math.sqrt(sum(v * v for v in self.values))

    def dimension(self) -> int:
        return len(self.values)


class TestMagnitude:
    def test_real_vector(self) -> None:
        """Euclidean norm of a real vector."""
        assert magnitude(np.array([3.0, 4.0])) == 5.0

    def test_complex_vector_is_real(self) -> None:
        """Complex vectors yield a real magnitude sqrt(sum |x|^2)."""
        value = magnitude(np.array([3 + 4j, 0 + 0j]))
        assert isinstance(value, float)
        assert value == 5.0

    def test_list_input(self) -> None:
        """Plain sequences are accepted."""
        assert magnitude([0.0, 2.0]) == 2.0

    def test_matrix_is_flattened(self) -> None:
        """Multi-dimensional arrays use the Frobenius norm."""
        assert magnitude(np.array([[3.0], [4.0]])) == 5.0

    def test_nan_propagates(self) -> None:
        """NaN elements produce a NaN magnitude."""
        assert math.isnan(magnitude(np.array([1.0, np.nan])))

    def test_custom_vector_type(self) -> None:
        """Objects with norm() are measured through it."""
        assert magnitude(NormedVector([6.0, 8.0])) == 10.0


class TestDimension:
    def test_array(self) -> None:
        assert dimension(np.zeros(7)) == 7

    def test_empty(self) -> None:
        assert dimension(np.array([])) == 0

    def test_custom_vector_type(self) -> None:
        """Objects with dimension() are sized through it."""
        assert dimension(NormedVector([1.0, 2.0, 3.0])) == 3

    def test_one_dimensional(self) -> None:
        assert is_one_dimensional(np.zeros(6))
        assert is_one_dimensional([1.0, 2.0])
        assert not is_one_dimensional(np.zeros((2, 3)))
        assert not is_one_dimensional(np.float64(1.0))
        assert is_one_dimensional(NormedVector([1.0, 2.0]))


class TestFiniteness:
    def test_finite_magnitude(self) -> None:
        assert is_finite_magnitude(1.0)
        assert not is_finite_magnitude(float("nan"))
        assert not is_finite_magnitude(float("inf"))

    def test_all_finite_real(self) -> None:
        assert all_finite(np.array([1.0, 2.0]))
        assert not all_finite(np.array([1.0, np.inf]))

    def test_all_finite_complex(self) -> None:
        """Imaginary parts are checked too."""
        assert all_finite(np.array([1 + 1j]))
        assert not all_finite(np.array([1 + 1j * np.nan]))

    def test_integer_arrays_are_finite(self) -> None:
        assert all_finite(np.array([1, 2, 3]))

    def test_custom_vector_type(self) -> None:
        assert all_finite(NormedVector([1.0, 2.0]))
        assert not all_finite(NormedVector([1.0, float("nan")]))
