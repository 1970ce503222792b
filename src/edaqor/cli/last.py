# Copyright (c) Syntropy Systems
"""edaqor last command."""

import typer
from rich.console import Console

from edaqor.cli.context import fail, get_context
from edaqor.errors import EdaError
from edaqor.store import read_result

console = Console()


def last(
    ctx: typer.Context,
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the stored result as JSON",
    ),
) -> None:
    """Show the last run result and summary."""
    eda_ctx = get_context(ctx)

    try:
        result = read_result(eda_ctx.result_path)
    except EdaError as e:
        fail(e)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    run = result.run
    metrics = result.metrics
    area = f"{metrics.area_um2} um²" if metrics.area_um2 is not None else "N/A"
    seed = run.seed if run.seed is not None else "N/A"

    console.print("\n[bold]Last Run Summary[/bold]")
    console.print(f"  [dim]script:[/dim] {run.script_path}", highlight=False)
    console.print(f"  [dim]seed:[/dim] {seed}")
    console.print(f"  [dim]duration:[/dim] {run.duration_ms}ms")
    console.print(f"  [dim]exit code:[/dim] {run.exit_code}")

    console.print("\n[bold]Metrics[/bold]")
    console.print(f"  cells: {metrics.cells}")
    console.print(f"  levels: {metrics.levels}")
    console.print(f"  area: {area}")
    console.print(f"  warnings: {metrics.warnings or 0}")

    console.print(f"\n  [dim]timestamp:[/dim] {result.provenance.timestamp_utc}")
    console.print(
        f"  [dim]yosys version:[/dim] {result.provenance.tool_version}",
        highlight=False,
    )
    console.print()
