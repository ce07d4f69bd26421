from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus


class IterationCountStopCriterion(StopCriterion):
    """
    Stop once the iteration budget is used up.

    Reports DIVERGED (failed to converge within budget) when
    iteration_number >= max_iterations. Stateless.
    """

    name = "iteration_count"

    def __init__(self, max_iterations: int = 1000) -> None:
        super().__init__()
        if max_iterations <= 0:
            raise ValueError(
                f"max_iterations must be > 0, got {max_iterations}"
            )
        self.max_iterations = max_iterations

    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        if snapshot.iteration_number >= self.max_iterations:
            return self._verdict(
                CalculationStatus.DIVERGED, float(snapshot.iteration_number)
            )
        return self._verdict(
            CalculationStatus.RUNNING, float(snapshot.iteration_number)
        )

    def __repr__(self) -> str:
        return (
            f"IterationCountStopCriterion(max_iterations={self.max_iterations})"
        )


@criterion_registry.register("iteration_count")
def create_iteration_count_criterion(
    max_iterations: int = 1000,
) -> IterationCountStopCriterion:
    """Factory for IterationCountStopCriterion."""
    return IterationCountStopCriterion(max_iterations=max_iterations)
