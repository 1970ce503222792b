"""edaqor recipe subcommand group."""

import typer

from edaqor.cli.recipe.init_cmd import init
from edaqor.cli.recipe.list_cmd import list_

recipe_app = typer.Typer(
    name="recipe",
    help="Manage Yosys synthesis recipes.",
    no_args_is_help=True,
)

# Register subcommands
recipe_app.command(name="init")(init)
recipe_app.command(name="list")(list_)
