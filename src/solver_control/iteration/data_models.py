"""
Data models exchanged between the solver loop, the controller and the
stop criteria.

This module defines:
- IterationSnapshot: the per-iteration input to one evaluation
- CriterionVerdict: one criterion's verdict plus diagnostic measure
- IterationReport: serializable summary of the controller state
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from solver_control.iteration.enums import CalculationStatus


@dataclass(frozen=True)
class IterationSnapshot:
    """
    Solver progress at one iteration.

    The snapshot is only valid for the duration of one evaluation call.
    Neither the controller nor any criterion keeps a reference to it.

    Attributes:
        iteration_number: Number of iterations that have passed so far.
        solution: Current approximate solution vector.
        source: Right-hand side vector of the linear system.
        residual: Current residual vector.
    """

    iteration_number: int
    solution: Any
    source: Any
    residual: Any


@dataclass(frozen=True)
class CriterionVerdict:
    """
    Verdict of a single stop criterion for one evaluation.

    Attributes:
        criterion: Registry name of the criterion.
        status: Status reported by the criterion.
        measure: Optional diagnostic value, e.g. the residual norm or the
            growth ratio that produced the verdict.
    """

    criterion: str
    status: CalculationStatus
    measure: float | None = None


class VerdictRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    criterion: str
    status: CalculationStatus
    measure: float | None = None

    @classmethod
    def from_verdict(cls, verdict: CriterionVerdict) -> "VerdictRecord":
        return cls(
            criterion=verdict.criterion,
            status=verdict.status,
            measure=verdict.measure,
        )


class IterationReport(BaseModel):
    """
    Summary of the controller after its latest evaluation.

    Attributes:
        status: Current calculation status.
        iteration_number: Index of the last evaluated iteration, or None if
            nothing has been evaluated since construction or reset.
        verdicts: Verdicts of each criterion in evaluation order.
        cancelled: Whether the run was cancelled.
    """

    model_config = ConfigDict(frozen=True)

    status: CalculationStatus
    iteration_number: int | None = None
    verdicts: tuple[VerdictRecord, ...] = ()
    cancelled: bool = False

    @property
    def converged(self) -> bool:
        """Whether the run ended successfully."""
        return self.status == CalculationStatus.CONVERGED
