"""edaqor recipe list command."""

import typer
from rich.console import Console
from rich.table import Table

from edaqor.cli.context import fail, get_context
from edaqor.errors import EdaError
from edaqor.recipes import list_recipes

console = Console()


def list_(ctx: typer.Context) -> None:
    """List recipe files, newest first."""
    eda_ctx = get_context(ctx)
    try:
        recipes = list_recipes(eda_ctx)
    except EdaError as e:
        fail(e)

    if not recipes:
        console.print(
            "[dim]No recipe files found. Run 'edaqor recipe init' to create one.[/dim]"
        )
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Recipe", style="cyan")
    table.add_column("Modified")

    for index, recipe in enumerate(recipes, start=1):
        table.add_row(
            str(index),
            recipe.name,
            recipe.last_modified.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
