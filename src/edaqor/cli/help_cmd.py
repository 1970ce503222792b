# Copyright (c) Syntropy Systems
"""edaqor help command."""

from rich.console import Console

console = Console()

HELP_TEXT = """\
[bold]edaqor commands[/bold]
  help                       Show this help message
  recipe init [--force]      Create recipes/ directory and sample script
  recipe list                List available recipe files
  run [SCRIPT] [--seed N]    Run Yosys with script (default: recipes/synth_resyn2.ys)
  baseline seed              Save last run as baseline for verification
  verify                     Compare QoR metrics against baseline
  last                       Show last run result and summary
  doctor                     Check project layout and Yosys installation

[bold]Options[/bold]
  --force          Overwrite existing files
  --seed N         Set random seed for synthesis
  -C, --project    Project directory (default: current directory)
  -v, --verbose    Show detailed output

[bold]Example[/bold]
  edaqor recipe init
  edaqor run recipes/synth_resyn2.ys --seed 1
  edaqor baseline seed
  edaqor run recipes/synth_resyn2.ys --seed 2
  edaqor verify"""


def help_() -> None:
    """Show a summary of edaqor commands."""
    console.print(HELP_TEXT, highlight=False)
