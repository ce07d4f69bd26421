from enum import Enum


class CalculationStatus(str, Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    DIVERGED = "diverged"
    INDETERMINATE = "indeterminate"
    CANCELLED = "cancelled"
    FAILURE = "failure"

    @property
    def is_terminal(self) -> bool:
        """Every status except RUNNING ends the iteration."""
        return self is not CalculationStatus.RUNNING

    @property
    def priority(self) -> int:
        """Rank used when verdicts of several criteria conflict."""
        return _PRIORITY[self]


# Failure > Cancelled > Diverged > Converged > Indeterminate > Running
_PRIORITY = {
    CalculationStatus.RUNNING: 0,
    CalculationStatus.INDETERMINATE: 1,
    CalculationStatus.CONVERGED: 2,
    CalculationStatus.DIVERGED: 3,
    CalculationStatus.CANCELLED: 4,
    CalculationStatus.FAILURE: 5,
}
