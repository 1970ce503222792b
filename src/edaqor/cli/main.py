# Copyright (c) Syntropy Systems
"""Main CLI entry point for edaqor."""

from pathlib import Path
from typing import Optional

import typer

from edaqor.cli.baseline import baseline_app
from edaqor.cli.context import setup_logging
from edaqor.cli.doctor import doctor
from edaqor.cli.help_cmd import help_
from edaqor.cli.last import last
from edaqor.cli.recipe import recipe_app
from edaqor.cli.run_cmd import run
from edaqor.cli.verify import verify
from edaqor.project import create_context

app = typer.Typer(
    name="edaqor",
    help=(
        "Reproducible Yosys synthesis runs with QoR regression checking. "
        "Run a recipe, seed a baseline, verify the next run."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    project: Optional[Path] = typer.Option(
        None,
        "--project",
        "-C",
        envvar="EDAQOR_PROJECT",
        help="Project directory (default: current directory)",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """Build the project context every command receives."""
    setup_logging(verbose)
    ctx.obj = create_context(project, verbose=verbose, strict=False)


# Register commands
_ = app.command(name="help")(help_)
_ = app.command()(run)
_ = app.command()(verify)
_ = app.command()(last)
_ = app.command()(doctor)

# Register sub-apps
app.add_typer(recipe_app, name="recipe")
app.add_typer(baseline_app, name="baseline")


if __name__ == "__main__":
    app()
