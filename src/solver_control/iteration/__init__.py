"""
Convergence control for iterative linear-system solvers.

Key components:
- CalculationStatus: status of an iterative calculation
- IterationSnapshot: per-iteration input of an evaluation
- StopCriterion and its implementations: single-purpose verdicts
- CompositeIterator: resolves the verdicts to one authoritative status
- IteratorConfig / load_config / get_preset: configuration
- create_iterator: assembles the standard criterion set
"""

from solver_control.iteration.config import (
    IteratorConfig,
    IteratorSettings,
    default_config,
    load_config,
)
from solver_control.iteration.controller import (
    CompositeIterator,
    resolve_status,
)
from solver_control.iteration.criteria import (
    DivergenceStopCriterion,
    FailureStopCriterion,
    IterationCountStopCriterion,
    ResidualStopCriterion,
    StopCriterion,
    TargetValueStopCriterion,
    TimeoutStopCriterion,
    criterion_registry,
)
from solver_control.iteration.data_models import (
    CriterionVerdict,
    IterationReport,
    IterationSnapshot,
)
from solver_control.iteration.enums import CalculationStatus
from solver_control.iteration.factory import build_criteria, create_iterator
from solver_control.iteration.presets import get_available_presets, get_preset

__all__ = [
    "CalculationStatus",
    "CompositeIterator",
    "CriterionVerdict",
    "DivergenceStopCriterion",
    "FailureStopCriterion",
    "IterationCountStopCriterion",
    "IterationReport",
    "IterationSnapshot",
    "IteratorConfig",
    "IteratorSettings",
    "ResidualStopCriterion",
    "StopCriterion",
    "TargetValueStopCriterion",
    "TimeoutStopCriterion",
    "build_criteria",
    "create_iterator",
    "criterion_registry",
    "default_config",
    "get_available_presets",
    "get_preset",
    "load_config",
    "resolve_status",
]
