"""
Assembly of the standard criterion set from an IteratorConfig.

Criteria are evaluated in a fixed order:
failure, residual, divergence, iteration_count, timeout, target_value.
Optional criteria are left out when not configured.
"""

import logging

from solver_control.iteration.config import IteratorConfig
from solver_control.iteration.controller import CompositeIterator
from solver_control.iteration.criteria.base import (
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.criteria.target_value import TargetPredicate

logger = logging.getLogger(__name__)


def build_criteria(
    config: IteratorConfig,
    target: TargetPredicate | None = None,
) -> list[StopCriterion]:
    """
    Build the stop criteria described by a configuration.

    Args:
        config: Tolerances and limits.
        target: Optional acceptance predicate over (solution, source).

    Returns:
        Fresh criterion instances in evaluation order.
    """
    criteria: list[StopCriterion] = []

    if config.check_finite:
        criteria.append(criterion_registry.create("failure"))

    criteria.append(
        criterion_registry.create(
            "residual",
            relative_tolerance=config.relative_tolerance,
            absolute_tolerance=config.absolute_tolerance,
            stable_iterations=config.stable_iterations,
        )
    )
    criteria.append(
        criterion_registry.create(
            "divergence",
            growth_factor=config.divergence_growth_factor,
            window=config.divergence_window,
            patience=config.divergence_patience,
        )
    )
    criteria.append(
        criterion_registry.create(
            "iteration_count", max_iterations=config.max_iterations
        )
    )

    if config.max_seconds is not None:
        criteria.append(
            criterion_registry.create("timeout", max_seconds=config.max_seconds)
        )
    if target is not None:
        criteria.append(
            criterion_registry.create("target_value", predicate=target)
        )

    return criteria


def create_iterator(
    config: IteratorConfig | None = None,
    target: TargetPredicate | None = None,
) -> CompositeIterator:
    """
    Create a composite iterator for one solve.

    Args:
        config: Iterator configuration. If None, uses defaults.
        target: Optional acceptance predicate over (solution, source).

    Returns:
        CompositeIterator owning a fresh criterion set.
    """
    config = config or IteratorConfig()
    criteria = build_criteria(config, target=target)
    logger.debug(
        "Created iterator with criteria: "
        + ", ".join(criterion.name for criterion in criteria)
    )
    return CompositeIterator(criteria)
