#!/usr/bin/env python
"""
Drive a conjugate-gradient solve with a composite iterator and show the
per-iteration verdicts of each stop criterion.
"""

from dataclasses import replace

import numpy as np
import scipy.sparse as sp
import typer
from numpy.typing import NDArray
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from solver_control.iteration import (
    CalculationStatus,
    CompositeIterator,
    IterationReport,
    create_iterator,
    get_available_presets,
    get_preset,
)

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def build_spd_system(
    n: int, density: float, seed: int | None
) -> tuple[sp.csr_matrix, NDArray[np.float64]]:
    """Random sparse symmetric positive definite matrix and right-hand side."""
    rng = np.random.default_rng(seed)
    a = sp.random(n, n, density=density, random_state=rng, format="csr")
    spd = (a @ a.T + n * sp.identity(n)).tocsr()
    b = rng.standard_normal(n)
    return spd, b


def conjugate_gradient(
    a: sp.csr_matrix,
    b: NDArray[np.float64],
    iterator: CompositeIterator,
) -> tuple[NDArray[np.float64], list[IterationReport]]:
    """Plain CG loop that stops when the iterator leaves RUNNING."""
    x = np.zeros_like(b)
    r = b - a @ x
    p = r.copy()
    rs_old = float(r @ r)

    reports = []
    iteration = 0
    while iterator.evaluate(iteration, x, b, r) == CalculationStatus.RUNNING:
        reports.append(iterator.report())
        ap = a @ p
        alpha = rs_old / float(p @ ap)
        x = x + alpha * p
        r = r - alpha * ap
        rs_new = float(r @ r)
        p = r + (rs_new / rs_old) * p
        rs_old = rs_new
        iteration += 1

    reports.append(iterator.report())
    return x, reports


def print_reports(reports: list[IterationReport]) -> None:
    """Pretty-print the criterion verdicts as a rich Table."""
    table = Table(title="Iterations")
    table.add_column("Iteration", style="bold", justify="right")
    table.add_column("Status")
    names = [v.criterion for v in reports[0].verdicts] if reports else []
    for name in names:
        table.add_column(name, justify="right")

    for report in reports:
        cells = []
        for verdict in report.verdicts:
            measure = (
                "" if verdict.measure is None else f"{verdict.measure:.3e}"
            )
            cells.append(f"{verdict.status.value} {measure}".strip())
        table.add_row(str(report.iteration_number), report.status.value, *cells)

    console.print(table)


@app.command()
def main(
    size: int = typer.Option(200, "-n", "--size", help="System dimension"),
    density: float = typer.Option(
        0.02, "-d", "--density", help="Density of the random sparse factor"
    ),
    preset: str = typer.Option(
        "default",
        "-p",
        "--preset",
        help=f"Iterator preset ({', '.join(get_available_presets())})",
    ),
    max_iterations: int | None = typer.Option(
        None, "-m", "--max-iterations", help="Override the iteration budget"
    ),
    seed: int | None = typer.Option(
        None,
        "-s",
        "--seed",
        help="Random seed for reproducibility",
    ),
) -> None:
    """Solve a random SPD system with CG and report the stopping decision."""

    try:
        config = get_preset(preset)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    if max_iterations is not None:
        config = replace(config, max_iterations=max_iterations)

    console.print(
        Panel(
            f"[bold]Conjugate Gradient[/bold]\n\n"
            f"Size: [cyan]{size}[/cyan]\n"
            f"Preset: [cyan]{preset}[/cyan]\n"
            f"Relative tolerance: [cyan]{config.relative_tolerance:g}[/cyan]\n"
            f"Max iterations: [cyan]{config.max_iterations}[/cyan]",
            title="Configuration",
        )
    )

    a, b = build_spd_system(size, density, seed)
    iterator = create_iterator(config)
    x, reports = conjugate_gradient(a, b, iterator)

    print_reports(reports)

    final = reports[-1]
    residual_norm = float(np.linalg.norm(b - a @ x))
    colour = "green" if final.converged else "red"
    console.print(
        Panel(
            f"[bold {colour}]{final.status.value}[/bold {colour}]\n\n"
            f"Iterations: [cyan]{final.iteration_number}[/cyan]\n"
            f"Residual norm: [cyan]{residual_norm:.3e}[/cyan]",
            title="Done",
        )
    )
    console.print(final.model_dump_json(indent=4))


if __name__ == "__main__":
    app()
