"""
Wall-clock stop criterion.

The clock starts at the first evaluation after construction or reset.
Running past the budget is reported as DIVERGED: the solve stopped without
converging in the time it was given.
"""

import time
from collections.abc import Callable

from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus


class TimeoutStopCriterion(StopCriterion):
    name = "timeout"

    def __init__(
        self,
        max_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        if not max_seconds > 0:
            raise ValueError(f"max_seconds must be > 0, got {max_seconds}")
        self.max_seconds = max_seconds
        self._clock = clock
        self._started_at: float | None = None

    @property
    def elapsed(self) -> float:
        """Seconds since the first evaluation, 0 before it."""
        if self._started_at is None:
            return 0.0
        return self._clock() - self._started_at

    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        if self._started_at is None:
            self._started_at = self._clock()

        elapsed = self.elapsed
        if elapsed > self.max_seconds:
            return self._verdict(CalculationStatus.DIVERGED, elapsed)
        return self._verdict(CalculationStatus.RUNNING, elapsed)

    def reset(self) -> None:
        super().reset()
        self._started_at = None

    def __repr__(self) -> str:
        return f"TimeoutStopCriterion(max_seconds={self.max_seconds})"


@criterion_registry.register("timeout")
def create_timeout_criterion(
    max_seconds: float,
    clock: Callable[[], float] = time.monotonic,
) -> TimeoutStopCriterion:
    """Factory for TimeoutStopCriterion."""
    return TimeoutStopCriterion(max_seconds=max_seconds, clock=clock)
