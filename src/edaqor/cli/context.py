# Copyright (c) Syntropy Systems
"""Per-invocation state shared by edaqor commands."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from edaqor.project import EdaContext, create_context

if TYPE_CHECKING:
    from edaqor.errors import EdaError

console = Console()


def setup_logging(verbose: bool) -> None:  # noqa: FBT001
    """Route edaqor's loggers to stderr through Rich."""
    logger = logging.getLogger("edaqor")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def get_context(
    ctx: typer.Context,
    *,
    allow_config_error: bool = False,
) -> EdaContext:
    """Return the EdaContext built by the app callback.

    Commands invoked without the callback get one for the current directory.
    A config file that failed to load is reported here unless the command
    can run on defaults.
    """
    if isinstance(ctx.obj, EdaContext):
        eda_ctx = ctx.obj
    else:
        eda_ctx = create_context(strict=False)
        ctx.obj = eda_ctx
    if eda_ctx.config_error is not None and not allow_config_error:
        fail(eda_ctx.config_error)
    return eda_ctx


def fail(error: EdaError) -> NoReturn:
    """Print a reported failure and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)
    raise typer.Exit(1) from error


def print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        console.print(f"[yellow]⚠[/yellow] {escape(warning)}", highlight=False)
