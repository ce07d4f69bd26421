"""Tests for the stop criterion registry."""

import pytest

from solver_control.iteration.criteria import (
    DivergenceStopCriterion,
    ResidualStopCriterion,
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.criteria.base import CriterionRegistry
from solver_control.iteration.data_models import IterationSnapshot
from solver_control.iteration.enums import CalculationStatus


class TestCriterionRegistry:
    def test_builtin_criteria_registered(self) -> None:
        assert criterion_registry.names == [
            "divergence",
            "failure",
            "iteration_count",
            "residual",
            "target_value",
            "timeout",
        ]

    def test_create_with_params(self) -> None:
        criterion = criterion_registry.create(
            "residual", relative_tolerance=1e-3
        )
        assert isinstance(criterion, ResidualStopCriterion)
        assert criterion.relative_tolerance == 1e-3

    def test_create_defaults(self) -> None:
        criterion = criterion_registry.create("divergence")
        assert isinstance(criterion, DivergenceStopCriterion)

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown stop criterion"):
            criterion_registry.create("nonexistent")

    def test_custom_registry(self) -> None:
        """New criteria can be registered with the decorator."""
        registry = CriterionRegistry()

        class AlwaysConverged(StopCriterion):
            name = "always"

            def evaluate(
                self, snapshot: IterationSnapshot
            ) -> CalculationStatus:
                return self._verdict(CalculationStatus.CONVERGED)

        @registry.register("always")
        def create_always() -> AlwaysConverged:
            return AlwaysConverged()

        assert registry.names == ["always"]
        assert isinstance(registry.create("always"), AlwaysConverged)
