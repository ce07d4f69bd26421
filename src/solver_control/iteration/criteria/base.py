"""
Abstract base class and registry for stop criteria.

A stop criterion inspects one iteration snapshot and reports a
CalculationStatus. Criteria returning INDETERMINATE abstain: they have no
opinion on the current iteration.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from solver_control.iteration.data_models import (
    CriterionVerdict,
    IterationSnapshot,
)
from solver_control.iteration.enums import CalculationStatus


class StopCriterion(ABC):
    """
    Single-purpose evaluator of solver progress.

    Subclasses implement evaluate(). Configuration is fixed at construction;
    reset() only clears the state used to track one run.
    """

    name: str = "criterion"

    def __init__(self) -> None:
        self.last_verdict: CriterionVerdict | None = None

    @abstractmethod
    def evaluate(self, snapshot: IterationSnapshot) -> CalculationStatus:
        """
        Determine the status of the calculation for one iteration.

        Args:
            snapshot: Solver progress at the current iteration.

        Returns:
            Status reported by this criterion.
        """
        ...

    def reset(self) -> None:
        """Clear run-time tracking state. Configuration is kept."""
        self.last_verdict = None

    def cancel(self) -> None:
        """Notify the criterion that the run was cancelled. State is kept."""

    def _verdict(
        self, status: CalculationStatus, measure: float | None = None
    ) -> CalculationStatus:
        self.last_verdict = CriterionVerdict(
            criterion=self.name, status=status, measure=measure
        )
        return status

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# =============================================================================
# Registry
# =============================================================================

CriterionFactory = Callable[..., StopCriterion]


class CriterionRegistry:
    """Registry for stop criteria."""

    def __init__(self) -> None:
        self._criteria: dict[str, CriterionFactory] = {}

    def register(
        self, name: str
    ) -> Callable[[CriterionFactory], CriterionFactory]:
        """Decorator to register a stop criterion factory."""

        def decorator(factory: CriterionFactory) -> CriterionFactory:
            self._criteria[name] = factory
            return factory

        return decorator

    @property
    def names(self) -> list[str]:
        return sorted(self._criteria.keys())

    def create(self, name: str, **params: Any) -> StopCriterion:
        """Create a stop criterion instance.

        Args:
            name: Criterion name (e.g., "residual", "divergence").
            **params: Criterion-specific parameters.

        Returns:
            Configured StopCriterion instance.

        Raises:
            ValueError: If criterion name is not registered.
        """
        if name not in self._criteria:
            available = ", ".join(self.names)
            raise ValueError(
                f"Unknown stop criterion: {name}. Available: {available}"
            )
        return self._criteria[name](**params)


criterion_registry = CriterionRegistry()
