# Copyright (c) Syntropy Systems
"""edaqor doctor command."""

import typer
from rich.console import Console
from rich.markup import escape

from edaqor.cli.context import get_context
from edaqor.config import CONFIG_FILE
from edaqor.errors import EdaError
from edaqor.project import validate_directory_structure
from edaqor.recipes import list_recipes
from edaqor.runner import find_tool, probe_version
from edaqor.store import read_baseline, read_result

console = Console()


def doctor(ctx: typer.Context) -> None:
    """Check project layout and Yosys installation.

    Verifies:
    - rtl/ and recipes/ directories
    - .eda/config.yaml
    - stored last run and baseline
    - Yosys availability and version
    """
    eda_ctx = get_context(ctx, allow_config_error=True)
    issues: list[str] = []
    warnings: list[str] = []

    console.print(f"[green]✓[/green] project: {eda_ctx.root}")

    # Directory layout
    structure = validate_directory_structure(eda_ctx)
    for error in structure.errors:
        console.print(f"[red]✗[/red] {error}")
        issues.append(error)
    for warning in structure.warnings:
        console.print(f"[yellow]⚠[/yellow] {warning}")
        warnings.append(warning)
    if eda_ctx.rtl_dir.is_dir():
        console.print("[green]✓[/green] rtl/ directory")
    if eda_ctx.recipes_dir.is_dir():
        try:
            count = len(list_recipes(eda_ctx))
        except EdaError as e:
            console.print(f"[red]✗[/red] {escape(e.message)}")
            issues.append("recipes/ not readable")
        else:
            console.print(f"[green]✓[/green] recipes/: {count} recipe(s)")

    # Config
    config_path = eda_ctx.eda_dir / CONFIG_FILE
    if eda_ctx.config_error is not None:
        console.print(f"[red]✗[/red] {escape(eda_ctx.config_error.message)}")
        console.print("  [dim]Using defaults for this check[/dim]")
        issues.append("Config file is invalid")
    elif config_path.exists():
        console.print(f"[green]✓[/green] config: {config_path}")
    else:
        console.print("[dim]•[/dim] No config file, using defaults")

    # Stored records
    try:
        result = read_result(eda_ctx.result_path)
        console.print(
            f"[green]✓[/green] last run: {result.provenance.timestamp_utc} "
            f"({result.metrics.cells} cells, {result.metrics.levels} levels)"
        )
    except EdaError as e:
        console.print(f"[dim]•[/dim] {e.message}")

    try:
        baseline = read_baseline(eda_ctx.baseline_path)
        console.print(
            f"[green]✓[/green] baseline: {baseline.timestamp_utc} "
            f"({baseline.metrics.cells} cells, {baseline.metrics.levels} levels)"
        )
    except EdaError as e:
        console.print(f"[dim]•[/dim] {e.message}")

    # Yosys
    tool = eda_ctx.config.yosys
    tool_path = find_tool(tool)
    if tool_path is None:
        console.print(f"[red]✗[/red] {tool} not found on PATH")
        issues.append("Yosys missing")
    else:
        version = probe_version(tool_path, eda_ctx.config.probe_timeout)
        if version is None:
            console.print(f"[red]✗[/red] {tool_path} did not answer -V")
            issues.append("Yosys version probe failed")
        else:
            console.print(f"[green]✓[/green] yosys: {version}", highlight=False)

    # Summary
    console.print()
    if issues:
        console.print(f"[red]Found {len(issues)} issue(s)[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
    elif warnings:
        console.print(f"[yellow]Found {len(warnings)} warning(s)[/yellow]")
        for warning in warnings:
            console.print(f"  - {warning}")
    else:
        console.print("[green]All checks passed[/green]")
