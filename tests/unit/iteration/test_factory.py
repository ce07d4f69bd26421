"""
Tests for building iterators from configuration.
"""

import numpy as np

from solver_control.iteration.config import IteratorConfig
from solver_control.iteration.criteria import (
    DivergenceStopCriterion,
    IterationCountStopCriterion,
    ResidualStopCriterion,
    TimeoutStopCriterion,
)
from solver_control.iteration.enums import CalculationStatus
from solver_control.iteration.factory import build_criteria, create_iterator


class TestBuildCriteria:
    def test_default_order(self) -> None:
        names = [c.name for c in build_criteria(IteratorConfig())]
        assert names == ["failure", "residual", "divergence", "iteration_count"]

    def test_optional_criteria(self) -> None:
        config = IteratorConfig(check_finite=False, max_seconds=10.0)
        criteria = build_criteria(config, target=lambda x, b: False)
        assert [c.name for c in criteria] == [
            "residual",
            "divergence",
            "iteration_count",
            "timeout",
            "target_value",
        ]

    def test_configuration_is_passed_through(self) -> None:
        config = IteratorConfig(
            relative_tolerance=1e-4,
            absolute_tolerance=1e-9,
            max_iterations=33,
            divergence_growth_factor=50.0,
            divergence_window=4,
            divergence_patience=3,
            stable_iterations=2,
            max_seconds=1.5,
        )
        residual, divergence, count, timeout = build_criteria(config)[1:]

        assert isinstance(residual, ResidualStopCriterion)
        assert residual.relative_tolerance == 1e-4
        assert residual.absolute_tolerance == 1e-9
        assert residual.stable_iterations == 2

        assert isinstance(divergence, DivergenceStopCriterion)
        assert divergence.growth_factor == 50.0
        assert divergence.window == 4
        assert divergence.patience == 3

        assert isinstance(count, IterationCountStopCriterion)
        assert count.max_iterations == 33

        assert isinstance(timeout, TimeoutStopCriterion)
        assert timeout.max_seconds == 1.5

    def test_fresh_instances(self) -> None:
        """Each call builds criteria that are not shared between solves."""
        config = IteratorConfig()
        first = build_criteria(config)
        second = build_criteria(config)
        assert all(a is not b for a, b in zip(first, second))


class TestCreateIterator:
    def test_default_iterator(self) -> None:
        iterator = create_iterator()
        assert iterator.status == CalculationStatus.RUNNING
        assert len(iterator.criteria) == 4

    def test_target_predicate_converges(self) -> None:
        """A satisfied target converges even while the residual is large."""
        iterator = create_iterator(target=lambda x, b: True)
        status = iterator.evaluate(0, np.ones(2), np.ones(2), np.ones(2))
        assert status == CalculationStatus.CONVERGED
