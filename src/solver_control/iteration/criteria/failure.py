from solver_control.core.vectors import all_finite
from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus


class FailureStopCriterion(StopCriterion):
    """Report FAILURE when the solution or residual holds NaN or Inf."""

    name = "failure"

    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        if not all_finite(snapshot.solution):
            return self._verdict(CalculationStatus.FAILURE)
        if not all_finite(snapshot.residual):
            return self._verdict(CalculationStatus.FAILURE)
        return self._verdict(CalculationStatus.RUNNING)


@criterion_registry.register("failure")
def create_failure_criterion() -> FailureStopCriterion:
    """Factory for FailureStopCriterion."""
    return FailureStopCriterion()
