"""
Divergence stop criterion.

Keeps the last `window` residual norms. Each evaluation compares the latest
norm with the smallest norm in the window; growth beyond `growth_factor`
for `patience` consecutive evaluations is reported as divergence. A single
spike is tolerated, since iterative methods often show transient growth.
"""

from collections import deque

from solver_control.core.constants import INFINITE_GROWTH, NO_GROWTH
from solver_control.core.vectors import is_finite_magnitude, magnitude
from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus


def growth_ratio(latest: float, minimum: float) -> float:
    """Ratio of the latest norm to the window minimum."""
    if minimum > 0:
        return latest / minimum
    if latest > 0:
        return INFINITE_GROWTH
    return NO_GROWTH


class DivergenceStopCriterion(StopCriterion):
    """
    Stop when the residual norm grows in a sustained way.

    Attributes:
        growth_factor: Ratio latest / min(window) above which an evaluation
            counts as growth. Must be > 1.
        window: Number of recent residual norms kept. Must be >= 2.
        patience: Consecutive growth evaluations required to diverge.
    """

    name = "divergence"

    def __init__(
        self,
        growth_factor: float = 1e4,
        window: int = 10,
        patience: int = 2,
    ) -> None:
        super().__init__()
        if not growth_factor > 1:
            raise ValueError(f"growth_factor must be > 1, got {growth_factor}")
        if window < 2:
            raise ValueError(f"window must be >= 2, got {window}")
        if patience < 1:
            raise ValueError(f"patience must be >= 1, got {patience}")
        self.growth_factor = growth_factor
        self.window = window
        self.patience = patience

        self._history: deque[float] = deque(maxlen=window)
        self._growth_count = 0

    @property
    def history(self) -> tuple[float, ...]:
        return tuple(self._history)

    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        residual_norm = magnitude(snapshot.residual)
        if not is_finite_magnitude(residual_norm):
            return self._verdict(CalculationStatus.FAILURE, residual_norm)

        self._history.append(residual_norm)
        ratio = growth_ratio(residual_norm, min(self._history))

        if ratio > self.growth_factor:
            self._growth_count += 1
        else:
            self._growth_count = 0

        if self._growth_count >= self.patience:
            return self._verdict(CalculationStatus.DIVERGED, ratio)
        return self._verdict(CalculationStatus.RUNNING, ratio)

    def reset(self) -> None:
        super().reset()
        self._history.clear()
        self._growth_count = 0

    def __repr__(self) -> str:
        return (
            f"DivergenceStopCriterion(growth_factor={self.growth_factor}, "
            f"window={self.window}, patience={self.patience})"
        )


@criterion_registry.register("divergence")
def create_divergence_criterion(
    growth_factor: float = 1e4,
    window: int = 10,
    patience: int = 2,
) -> DivergenceStopCriterion:
    """Factory for DivergenceStopCriterion."""
    return DivergenceStopCriterion(
        growth_factor=growth_factor, window=window, patience=patience
    )
