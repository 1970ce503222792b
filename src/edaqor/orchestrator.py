# Copyright (c) Syntropy Systems
"""Run a Yosys recipe and persist the result."""
from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from edaqor.errors import (
    InvalidProjectStructureError,
    ParseFailureError,
    ScriptNotFoundError,
    ToolExecutionTimeoutError,
)
from edaqor.extract import extract_metrics
from edaqor.models import Artifacts, Result, RunInfo
from edaqor.project import ensure_directories, validate_directory_structure
from edaqor.provenance import collect_provenance
from edaqor.recipes import extract_output_netlist, lint_recipe, read_recipe
from edaqor.runner import ToolRunner, require_tool
from edaqor.store import write_log, write_record

if TYPE_CHECKING:
    from pathlib import Path

    from edaqor.project import EdaContext

logger = logging.getLogger(__name__)

# ABC invocation the seed is threaded into
SEEDED_ABC_COMMAND = "abc -script +resyn2 -seed {seed}"


@dataclass
class RunReport:
    """A persisted result plus the warnings collected on the way."""

    result: Result
    result_path: Path
    warnings: list[str] = field(default_factory=list)


def build_command(tool_path: str, script_path: Path, seed: int | None) -> list[str]:
    """Yosys argv for a recipe, with the seed passed to ABC via ``-p``."""
    argv = [tool_path, "-s", str(script_path)]
    if seed is not None:
        argv += ["-p", SEEDED_ABC_COMMAND.format(seed=seed)]
    return argv


def check_script(script_path: Path) -> None:
    if not script_path.exists():
        msg = f"Recipe file not found: {script_path}"
        raise ScriptNotFoundError(msg)
    if not script_path.is_file():
        msg = f"{script_path} exists but is not a file"
        raise ScriptNotFoundError(msg)


def run_synthesis(
    ctx: EdaContext,
    script: Path | None = None,
    seed: int | None = None,
    yosys: str | None = None,
) -> RunReport:
    """Execute one synthesis run and overwrite the last-run result.

    Preconditions are checked in order: recipe exists, project layout is
    valid, Yosys answers a version probe. The raw log is written before
    parsing so it is there to inspect when parsing fails. The result file
    is only written once every field is known.
    """
    script_path = ctx.resolve_script(script)
    check_script(script_path)

    structure = validate_directory_structure(ctx)
    if not structure.valid:
        raise InvalidProjectStructureError("\n".join(structure.errors))
    warnings = list(structure.warnings)

    tool = yosys or ctx.config.yosys
    tool_path, version = require_tool(tool, ctx.config.probe_timeout)
    logger.debug("Using %s (%s)", tool_path, version)

    ensure_directories(ctx)

    recipe_text = read_recipe(script_path)
    warnings.extend(lint_recipe(recipe_text))

    argv = build_command(tool_path, script_path, seed)
    output = ToolRunner(argv, ctx.root, ctx.config.run_timeout).run()

    write_log(ctx.log_path, output)

    if output.timed_out:
        msg = (
            f"Yosys did not finish within {ctx.config.run_timeout:g}s and was "
            f"killed. Partial output is in {ctx.log_path}"
        )
        raise ToolExecutionTimeoutError(msg)

    metrics = extract_metrics(output)
    if metrics is None:
        msg = (
            f"Failed to parse Yosys output (exit code {output.exit_code}): "
            "'Number of cells' or 'Longest path (levels)' not found. "
            f"Check the log file for details: {ctx.log_path}"
        )
        raise ParseFailureError(msg)

    if output.exit_code != 0:
        warnings.append(
            f"Yosys exited with code {output.exit_code}; "
            f"metrics were recorded anyway. See {ctx.log_path}"
        )

    result = Result(
        provenance=collect_provenance(
            tool_path,
            cwd=ctx.root,
            probe_timeout=ctx.config.probe_timeout,
        ),
        run=RunInfo(
            script_path=str(script_path),
            seed=seed,
            cwd=str(ctx.root),
            cmd=shlex.join(argv),
            duration_ms=output.duration_ms,
            exit_code=output.exit_code,
        ),
        metrics=metrics,
        artifacts=Artifacts(
            log_path=str(ctx.log_path),
            output_netlist=extract_output_netlist(recipe_text),
        ),
    )

    write_record(ctx.result_path, result)
    return RunReport(result=result, result_path=ctx.result_path, warnings=warnings)
