"""edaqor baseline subcommand group."""

import typer

from edaqor.cli.baseline.seed import seed

baseline_app = typer.Typer(
    name="baseline",
    help="Manage the QoR baseline.",
    no_args_is_help=True,
)

# Register subcommands
baseline_app.command()(seed)
