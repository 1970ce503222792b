"""edaqor baseline seed command."""

import typer
from rich.console import Console

from edaqor.cli.context import fail, get_context
from edaqor.errors import EdaError
from edaqor.verify import seed_baseline

console = Console()


def seed(ctx: typer.Context) -> None:
    """
    Save the last run as the baseline for verification.

    Overwrites any existing baseline.
    """
    eda_ctx = get_context(ctx)

    try:
        baseline = seed_baseline(eda_ctx)
    except EdaError as e:
        fail(e)

    console.print(f"[green]✓ Baseline saved[/green] {eda_ctx.baseline_path}")
    console.print(f"  [dim]cells:[/dim] {baseline.metrics.cells}")
    console.print(f"  [dim]levels:[/dim] {baseline.metrics.levels}")
