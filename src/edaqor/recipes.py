# Copyright (c) Syntropy Systems
"""Yosys recipe scripts: the default template, listing and lint."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from edaqor.errors import FileSystemError, RecipeExistsError
from edaqor.project import ensure_directories
from edaqor.store import write_text_atomic

if TYPE_CHECKING:
    from pathlib import Path

    from edaqor.project import EdaContext

logger = logging.getLogger(__name__)

RECIPE_SUFFIX = ".ys"

DEFAULT_RECIPE_CONTENT = """\
# Sample Yosys synthesis script for resyn2 optimization
# This script reads Verilog files from rtl/ and performs synthesis with resyn2

# Read Verilog files from rtl directory
read_verilog rtl/top.v

# Set top module
hierarchy -top top

# Synthesize to generic gates
synth

# Optimize with resyn2 algorithm
#abc -script +resyn2

# Print statistics
stat

# Write synthesized netlist
write_verilog -noattr build/top.synth.v

# Optional: Write JSON netlist for further processing
# write_json build/top.synth.json
"""

_NETLIST_PATTERN = re.compile(r"write_verilog.*?(\S+\.v)")

# (text that must appear, warning shown when it does not)
_LINT_RULES: list[tuple[str, str]] = [
    (
        "rtl/",
        "Recipe does not reference rtl/ directory. "
        "Make sure it contains 'read_verilog rtl/...' commands",
    ),
    ("read_verilog", "Recipe does not contain 'read_verilog' command"),
    ("synth", "Recipe does not contain 'synth' command"),
    ("stat", "Recipe does not contain 'stat' command (needed for metrics)"),
]


@dataclass
class Recipe:
    """A recipe file found under recipes/."""

    name: str
    path: Path
    last_modified: datetime


def init_recipe(ctx: EdaContext, *, force: bool = False) -> Path:
    """Write the default recipe and return its path.

    Raises RecipeExistsError if it exists and force is not set.
    """
    ensure_directories(ctx)
    recipe_path = ctx.default_recipe_path

    if recipe_path.exists() and not force:
        msg = (
            f"{recipe_path.name} already exists. "
            "Use 'edaqor recipe init --force' to overwrite."
        )
        raise RecipeExistsError(msg)

    write_text_atomic(recipe_path, DEFAULT_RECIPE_CONTENT)
    return recipe_path


def list_recipes(ctx: EdaContext) -> list[Recipe]:
    """List recipe files, newest first. A missing directory yields []."""
    if not ctx.recipes_dir.is_dir():
        logger.debug("No recipes directory at %s", ctx.recipes_dir)
        return []

    try:
        entries = list(ctx.recipes_dir.iterdir())
    except OSError as e:
        msg = f"Failed to list recipes in {ctx.recipes_dir}: {e}"
        raise FileSystemError(msg) from e

    recipes: list[Recipe] = []
    for path in entries:
        if path.suffix != RECIPE_SUFFIX or not path.is_file():
            continue
        try:
            mtime = path.stat().st_mtime
        except OSError as e:
            logger.warning("Could not read recipe file %s: %s", path.name, e)
            continue
        recipes.append(
            Recipe(
                name=path.name,
                path=path,
                last_modified=datetime.fromtimestamp(mtime, tz=timezone.utc),
            )
        )

    recipes.sort(key=lambda r: r.last_modified, reverse=True)
    return recipes


def read_recipe(path: Path) -> str:
    """Recipe text; undecodable bytes become U+FFFD since only lint reads it."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        msg = f"Error reading recipe file {path}: {e}"
        raise FileSystemError(msg) from e


def lint_recipe(text: str) -> list[str]:
    """Return warnings for commands a metrics-producing recipe usually has."""
    return [warning for needle, warning in _LINT_RULES if needle not in text]


def extract_output_netlist(text: str) -> str | None:
    """Path written by the recipe's first write_verilog, if any."""
    match = _NETLIST_PATTERN.search(text)
    return match.group(1) if match else None
