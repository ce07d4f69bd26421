"""
Residual-norm stop criterion.

Converged when the residual norm falls below

    max(absolute_tolerance, relative_tolerance * r0)

where r0 is the norm of the source vector recorded at the first
evaluation (or the first residual norm if the source is zero).
"""

from solver_control.core.vectors import is_finite_magnitude, magnitude
from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus


class ResidualStopCriterion(StopCriterion):
    """
    Stop when the residual norm is small enough.

    Attributes:
        relative_tolerance: Tolerance relative to the baseline norm r0.
        absolute_tolerance: Lower bound on the threshold.
        stable_iterations: Number of consecutive evaluations the residual
            must stay below the threshold before reporting convergence.
    """

    name = "residual"

    def __init__(
        self,
        relative_tolerance: float = 1e-8,
        absolute_tolerance: float = 0.0,
        stable_iterations: int = 1,
    ) -> None:
        super().__init__()
        if not relative_tolerance > 0:
            raise ValueError(
                f"relative_tolerance must be > 0, got {relative_tolerance}"
            )
        if not absolute_tolerance >= 0:
            raise ValueError(
                f"absolute_tolerance must be >= 0, got {absolute_tolerance}"
            )
        if stable_iterations < 1:
            raise ValueError(
                f"stable_iterations must be >= 1, got {stable_iterations}"
            )
        self.relative_tolerance = relative_tolerance
        self.absolute_tolerance = absolute_tolerance
        self.stable_iterations = stable_iterations

        self._baseline: float | None = None
        self._iterations_below = 0

    @property
    def baseline(self) -> float | None:
        """Cached r0, or None before the first evaluation."""
        return self._baseline

    def threshold(self) -> float | None:
        if self._baseline is None:
            return None
        return max(
            self.absolute_tolerance, self.relative_tolerance * self._baseline
        )

    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        residual_norm = magnitude(snapshot.residual)
        if not is_finite_magnitude(residual_norm):
            return self._verdict(CalculationStatus.FAILURE, residual_norm)

        if self._baseline is None:
            source_norm = magnitude(snapshot.source)
            if not is_finite_magnitude(source_norm):
                return self._verdict(CalculationStatus.FAILURE, source_norm)
            self._baseline = source_norm if source_norm > 0 else residual_norm

        threshold = max(
            self.absolute_tolerance, self.relative_tolerance * self._baseline
        )

        if residual_norm <= threshold:
            self._iterations_below += 1
        else:
            self._iterations_below = 0

        if self._iterations_below >= self.stable_iterations:
            return self._verdict(CalculationStatus.CONVERGED, residual_norm)
        return self._verdict(CalculationStatus.RUNNING, residual_norm)

    def reset(self) -> None:
        super().reset()
        self._baseline = None
        self._iterations_below = 0

    def __repr__(self) -> str:
        return (
            f"ResidualStopCriterion(relative_tolerance={self.relative_tolerance}, "
            f"absolute_tolerance={self.absolute_tolerance}, "
            f"stable_iterations={self.stable_iterations})"
        )


@criterion_registry.register("residual")
def create_residual_criterion(
    relative_tolerance: float = 1e-8,
    absolute_tolerance: float = 0.0,
    stable_iterations: int = 1,
) -> ResidualStopCriterion:
    """Factory for ResidualStopCriterion."""
    return ResidualStopCriterion(
        relative_tolerance=relative_tolerance,
        absolute_tolerance=absolute_tolerance,
        stable_iterations=stable_iterations,
    )
