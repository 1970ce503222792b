"""edaqor recipe init command."""

import typer
from rich.console import Console

from edaqor.cli.context import fail, get_context
from edaqor.errors import EdaError
from edaqor.recipes import init_recipe

console = Console()


def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing default recipe",
    ),
) -> None:
    """
    Create the recipes/ directory and a sample Yosys script.

    Example:
        edaqor recipe init --force
    """
    eda_ctx = get_context(ctx)

    try:
        recipe_path = init_recipe(eda_ctx, force=force)
    except EdaError as e:
        fail(e)

    console.print(f"[green]Created[/green] {recipe_path}")
    console.print("\nNext steps:")
    console.print("  1. Add your sources:  [cyan]rtl/top.v[/cyan]")
    console.print("  2. Run synthesis:     [cyan]edaqor run --seed 1[/cyan]")
