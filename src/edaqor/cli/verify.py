# Copyright (c) Syntropy Systems
"""edaqor verify command."""

import typer
from rich.console import Console
from rich.table import Table

from edaqor.cli.context import fail, get_context
from edaqor.errors import EdaError
from edaqor.verify import format_delta_pct, verify as verify_qor

console = Console()


def _delta_style(delta: int) -> str:
    if delta > 0:
        return "red"
    if delta < 0:
        return "green"
    return "dim"


def verify(
    ctx: typer.Context,
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the verification outcome as JSON",
    ),
) -> None:
    """Compare QoR metrics of the last run against the baseline.

    Accepted iff neither cells nor levels increased. Exits 1 on rejection.
    """
    eda_ctx = get_context(ctx)

    try:
        outcome = verify_qor(eda_ctx)
    except EdaError as e:
        fail(e)

    if as_json:
        typer.echo(outcome.model_dump_json(indent=2))
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="dim")
        table.add_column("Base", justify="right")
        table.add_column("Now", justify="right")
        table.add_column("Delta", justify="right")
        table.add_column("Delta %", justify="right")

        cells = outcome.cells
        levels = outcome.levels
        cells_style = _delta_style(cells.delta)
        levels_style = _delta_style(levels.delta)
        table.add_row(
            "cells",
            str(cells.base),
            str(cells.now),
            f"[{cells_style}]{cells.delta:+d}[/{cells_style}]",
            format_delta_pct(cells.delta_pct),
        )
        table.add_row(
            "levels",
            str(levels.base),
            str(levels.now),
            f"[{levels_style}]{levels.delta:+d}[/{levels_style}]",
            "-",
        )
        console.print(table)

        if outcome.accepted:
            console.print("[green]✓ Accepted[/green]")
        else:
            console.print("[red]✗ Rejected[/red]")

    if not outcome.accepted:
        raise typer.Exit(1)
