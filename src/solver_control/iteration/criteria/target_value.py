"""
Target-value stop criterion.

Convergence is decided by a caller-supplied predicate over the solution and
source vectors, e.g. an application-specific accuracy check.
"""

from collections.abc import Callable
from typing import Any

from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus

# Returns True/False, or None when it cannot decide for this iteration
TargetPredicate = Callable[[Any, Any], bool | None]


class TargetValueStopCriterion(StopCriterion):
    """
    Stop when the caller's acceptance predicate holds.

    The predicate is called as predicate(solution, source). A truthy result
    reports CONVERGED, a falsy result RUNNING, and None abstains
    (INDETERMINATE). Exceptions raised by the predicate propagate to the
    composite iterator, which reports them as FAILURE.
    """

    name = "target_value"

    def __init__(self, predicate: TargetPredicate) -> None:
        super().__init__()
        if not callable(predicate):
            raise ValueError("predicate must be callable")
        self.predicate = predicate

    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        accepted = self.predicate(snapshot.solution, snapshot.source)
        if accepted is None:
            return self._verdict(CalculationStatus.INDETERMINATE)
        if accepted:
            return self._verdict(CalculationStatus.CONVERGED)
        return self._verdict(CalculationStatus.RUNNING)

    def __repr__(self) -> str:
        return f"TargetValueStopCriterion(predicate={self.predicate!r})"


@criterion_registry.register("target_value")
def create_target_value_criterion(
    predicate: TargetPredicate,
) -> TargetValueStopCriterion:
    """Factory for TargetValueStopCriterion."""
    return TargetValueStopCriterion(predicate=predicate)
