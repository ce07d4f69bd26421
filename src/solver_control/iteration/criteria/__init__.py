"""
Stop criteria for iterative solvers.

Each criterion inspects one iteration snapshot and reports a
CalculationStatus:
- ResidualStopCriterion: residual norm below tolerance
- DivergenceStopCriterion: sustained residual growth
- IterationCountStopCriterion: iteration budget exhausted
- TargetValueStopCriterion: caller-supplied acceptance predicate
- FailureStopCriterion: NaN/Inf in solution or residual
- TimeoutStopCriterion: wall-clock budget exhausted
"""

from solver_control.iteration.criteria.base import (
    CriterionRegistry,
    StopCriterion,
    criterion_registry,
)
from solver_control.iteration.criteria.divergence import (
    DivergenceStopCriterion,
)
from solver_control.iteration.criteria.failure import FailureStopCriterion
from solver_control.iteration.criteria.iteration_count import (
    IterationCountStopCriterion,
)
from solver_control.iteration.criteria.residual import ResidualStopCriterion
from solver_control.iteration.criteria.target_value import (
    TargetValueStopCriterion,
)
from solver_control.iteration.criteria.timeout import TimeoutStopCriterion

__all__ = [
    "CriterionRegistry",
    "DivergenceStopCriterion",
    "FailureStopCriterion",
    "IterationCountStopCriterion",
    "ResidualStopCriterion",
    "StopCriterion",
    "TargetValueStopCriterion",
    "TimeoutStopCriterion",
    "criterion_registry",
]
