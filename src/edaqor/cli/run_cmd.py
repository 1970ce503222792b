# Copyright (c) Syntropy Systems
"""edaqor run command."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from edaqor.cli.context import fail, get_context, print_warnings
from edaqor.errors import EdaError
from edaqor.orchestrator import run_synthesis

console = Console()


def run(
    ctx: typer.Context,
    script: Optional[Path] = typer.Argument(
        None,
        help="Yosys script to run (default: recipes/synth_resyn2.ys)",
        show_default=False,
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed threaded into ABC for reproducible optimization",
    ),
    yosys: Optional[str] = typer.Option(
        None,
        "--yosys",
        envvar="EDAQOR_YOSYS",
        help="Yosys binary to use instead of the configured one",
    ),
) -> None:
    """Run Yosys on a recipe and record QoR metrics.

    Overwrites .eda/last_run/result.json and .eda/logs/tool.log.
    """
    eda_ctx = get_context(ctx)

    with console.status("Running Yosys..."):
        try:
            report = run_synthesis(eda_ctx, script=script, seed=seed, yosys=yosys)
        except EdaError as e:
            fail(e)

    print_warnings(report.warnings)

    metrics = report.result.metrics
    console.print(f"[green]✓ Wrote[/green] {report.result_path}")
    console.print(f"  [dim]cells:[/dim] {metrics.cells}")
    console.print(f"  [dim]levels:[/dim] {metrics.levels}")
    if metrics.area_um2 is not None:
        console.print(f"  [dim]area:[/dim] {metrics.area_um2} um²")
    console.print(f"  [dim]duration:[/dim] {report.result.run.duration_ms}ms")
    if eda_ctx.verbose:
        console.print(f"  [dim]command:[/dim] {report.result.run.cmd}", highlight=False)
        console.print(f"  [dim]log:[/dim] {report.result.artifacts.log_path}")
