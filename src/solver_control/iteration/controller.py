"""
Composite iterator driving an iterative solve to a stopping decision.

The solver loop calls evaluate() once per iteration. The iterator fans out
to every stop criterion in declared order, resolves their verdicts to one
status and latches it once it is terminal. Resolution priority is:

    FAILURE > CANCELLED > DIVERGED > CONVERGED > INDETERMINATE > RUNNING

Criteria that abstain (INDETERMINATE) are ignored unless all of them
abstain, in which case the run is INDETERMINATE. A criterion that raises
counts as FAILURE. CANCELLED is only reached through iteration_cancelled().
"""

import logging
import threading
from collections.abc import Iterable

from solver_control.core.vectors import dimension, is_one_dimensional
from solver_control.iteration.criteria.base import StopCriterion
from solver_control.iteration.data_models import (
    CriterionVerdict,
    IterationReport,
    IterationSnapshot,
    VerdictRecord,
)
from solver_control.iteration.enums import CalculationStatus

logger = logging.getLogger(__name__)


def resolve_status(
    verdicts: Iterable[CalculationStatus],
) -> CalculationStatus:
    """
    Resolve the verdicts of several criteria to one status.

    Args:
        verdicts: Statuses reported by the criteria for one iteration.

    Returns:
        INDETERMINATE if there are no verdicts or every criterion abstained,
        otherwise the highest-priority verdict.
    """
    deciding = [
        v for v in verdicts if v is not CalculationStatus.INDETERMINATE
    ]
    if not deciding:
        return CalculationStatus.INDETERMINATE
    return max(deciding, key=lambda status: status.priority)


class CompositeIterator:
    """
    Controller aggregating stop criteria into one authoritative status.

    The iterator owns its criteria: they are created for one solve and must
    not be shared with another iterator.

    Attributes:
        criteria: Stop criteria in evaluation order.
    """

    def __init__(self, criteria: Iterable[StopCriterion] = ()) -> None:
        self._criteria: tuple[StopCriterion, ...] = tuple(criteria)
        self._status = CalculationStatus.RUNNING
        self._cancelled = False
        self._last_iteration: int | None = None
        self._last_verdicts: tuple[CriterionVerdict, ...] = ()
        self._lock = threading.Lock()

    @property
    def criteria(self) -> tuple[StopCriterion, ...]:
        return self._criteria

    @property
    def status(self) -> CalculationStatus:
        """Current calculation status. RUNNING before the first evaluation."""
        return self._status

    def evaluate(
        self,
        iteration_number: int,
        solution: object,
        source: object,
        residual: object,
    ) -> CalculationStatus:
        """
        Determine the status of the calculation for one iteration.

        Args:
            iteration_number: Number of iterations that have passed so far.
            solution: Current solution vector.
            source: Right-hand side vector.
            residual: Current residual vector.

        Returns:
            The updated status. A terminal status is returned unchanged
            until reset_to_precalculation_state() is called.
        """
        return self.evaluate_snapshot(
            IterationSnapshot(
                iteration_number=iteration_number,
                solution=solution,
                source=source,
                residual=residual,
            )
        )

    def evaluate_snapshot(
        self, snapshot: IterationSnapshot
    ) -> CalculationStatus:
        """Same as evaluate(), taking a prepared snapshot."""
        if self._status.is_terminal:
            return self._status

        violation = self._check_preconditions(snapshot)
        if violation is not None:
            logger.warning(
                f"Iteration {snapshot.iteration_number}: {violation}"
            )
            return self._commit(
                snapshot.iteration_number, CalculationStatus.FAILURE, ()
            )

        if not self._criteria:
            logger.warning("No stop criteria configured")
            return self._commit(
                snapshot.iteration_number,
                CalculationStatus.INDETERMINATE,
                (),
            )

        statuses = []
        verdicts = []
        for criterion in self._criteria:
            criterion.last_verdict = None
            try:
                status = criterion.evaluate(snapshot)
            except Exception:
                logger.exception(
                    f"Iteration {snapshot.iteration_number}: "
                    f"criterion {criterion.name} raised"
                )
                status = CalculationStatus.FAILURE
                criterion.last_verdict = None
            statuses.append(status)
            verdicts.append(
                criterion.last_verdict
                or CriterionVerdict(criterion=criterion.name, status=status)
            )
        resolved = resolve_status(statuses)

        logger.debug(
            f"Iteration {snapshot.iteration_number}: "
            + ", ".join(f"{v.criterion}={v.status.value}" for v in verdicts)
        )
        return self._commit(
            snapshot.iteration_number, resolved, tuple(verdicts)
        )

    def iteration_cancelled(self) -> None:
        """
        Mark the calculation as cancelled.

        Overrides any other status, including a terminal one. Criteria are
        notified but not reset, so their state can still be inspected.
        """
        with self._lock:
            already = self._cancelled
            self._cancelled = True
            self._status = CalculationStatus.CANCELLED

        if already:
            return
        logger.info("Iteration cancelled")
        for criterion in self._criteria:
            criterion.cancel()

    def reset_to_precalculation_state(self) -> None:
        """
        Reset to the state before the first evaluation.

        Clears the status, the cancellation latch and the tracking state of
        every criterion. Configured tolerances and limits are kept.
        """
        with self._lock:
            self._status = CalculationStatus.RUNNING
            self._cancelled = False
            self._last_iteration = None
            self._last_verdicts = ()

        for criterion in self._criteria:
            criterion.reset()
        logger.debug("Iterator reset to pre-calculation state")

    def report(self) -> IterationReport:
        """Summarise the current status and the latest verdicts."""
        with self._lock:
            return IterationReport(
                status=self._status,
                iteration_number=self._last_iteration,
                verdicts=tuple(
                    VerdictRecord.from_verdict(v) for v in self._last_verdicts
                ),
                cancelled=self._cancelled,
            )

    def _commit(
        self,
        iteration_number: int,
        status: CalculationStatus,
        verdicts: tuple[CriterionVerdict, ...],
    ) -> CalculationStatus:
        with self._lock:
            self._last_iteration = iteration_number
            self._last_verdicts = verdicts
            # A cancellation that arrived mid-evaluation wins
            if self._cancelled:
                self._status = CalculationStatus.CANCELLED
                return self._status
            self._status = status

        if status.is_terminal:
            logger.info(
                f"Iteration {iteration_number}: status {status.value}"
            )
        return status

    @staticmethod
    def _check_preconditions(snapshot: IterationSnapshot) -> str | None:
        if snapshot.iteration_number < 0:
            return (
                f"iteration_number must be >= 0, "
                f"got {snapshot.iteration_number}"
            )

        vectors = (snapshot.solution, snapshot.source, snapshot.residual)
        if not all(is_one_dimensional(v) for v in vectors):
            shapes = tuple(getattr(v, "shape", None) for v in vectors)
            return (
                "solution, source and residual must be one-dimensional, "
                f"got shapes {shapes}"
            )

        sizes = (
            dimension(snapshot.solution),
            dimension(snapshot.source),
            dimension(snapshot.residual),
        )
        if sizes[0] == 0 or len(set(sizes)) != 1:
            return (
                "solution, source and residual must have matching non-zero "
                f"dimensions, got {sizes}"
            )
        return None

    def __repr__(self) -> str:
        return (
            f"CompositeIterator(status={self._status.value}, "
            f"criteria={list(self._criteria)!r})"
        )
