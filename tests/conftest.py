# Copyright (c) Syntropy Systems
"""Pytest fixtures for edaqor tests."""
from __future__ import annotations

import os
import stat
import sys
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from edaqor.project import EdaContext, create_context

# Store original cwd at module load time
_original_cwd = Path.cwd()

# Stands in for Yosys: answers -V, echoes `log` lines of the script to
# stdout and `log_err` lines to stderr, honors `sleep N` and `exit N`.
FAKE_YOSYS_SOURCE = '''\
import sys
import time

args = sys.argv[1:]
if args == ["-V"]:
    print("Yosys 0.40+fake (git sha1 0000000)")
    sys.exit(0)

script = args[args.index("-s") + 1]
exit_code = 0
with open(script, encoding="utf-8", errors="replace") as f:
    for raw in f:
        line = raw.strip()
        if line.startswith("log_err "):
            print(line[len("log_err "):], file=sys.stderr)
        elif line.startswith("log "):
            print(line[len("log "):])
        elif line.startswith("sleep "):
            sys.stdout.flush()
            time.sleep(float(line[len("sleep "):]))
        elif line.startswith("exit "):
            exit_code = int(line[len("exit "):])
if "-p" in args:
    print("Executing: " + args[args.index("-p") + 1])
sys.exit(exit_code)
'''


def write_recipe(
    project: Path,
    cells: int | None = 200,
    levels: int | None = 15,
    extra: str = "",
    name: str = "synth_resyn2.ys",
) -> Path:
    """Write a recipe whose fake-Yosys output reports the given metrics."""
    lines = [
        "read_verilog rtl/top.v",
        "hierarchy -top top",
        "synth",
        "stat",
    ]
    if cells is not None:
        lines.append(f"log    Number of cells:   {cells}")
    if levels is not None:
        lines.append(f"log    Longest path (levels):   {levels}")
    if extra:
        lines.append(extra)
    lines.append("write_verilog -noattr build/top.synth.v")

    recipes_dir = project / "recipes"
    recipes_dir.mkdir(exist_ok=True)
    recipe = recipes_dir / name
    recipe.write_text("\n".join(lines) + "\n")
    return recipe


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()
        # Leave the directory before it is removed
        os.chdir(_original_cwd)


@pytest.fixture
def fake_yosys(temp_dir: Path) -> Path:
    """Executable that behaves enough like Yosys for the orchestrator."""
    tool_dir = temp_dir / "tools"
    tool_dir.mkdir()
    source = tool_dir / "fake_yosys.py"
    source.write_text(FAKE_YOSYS_SOURCE)

    wrapper = tool_dir / "yosys"
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{source}" "$@"\n')
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture
def eda_project(temp_dir: Path, fake_yosys: Path) -> Generator[Path, None, None]:
    """Create a project with rtl/, recipes/ and a config pointing at fake Yosys."""
    project = temp_dir / "project"
    project.mkdir()
    (project / "rtl").mkdir()
    (project / "rtl" / "top.v").write_text("module top(input a, output y); assign y = a; endmodule\n")
    (project / "recipes").mkdir()

    eda_dir = project / ".eda"
    eda_dir.mkdir()
    (eda_dir / "config.yaml").write_text(f"yosys: {fake_yosys}\n")

    # Change to project directory
    os.chdir(project)

    yield project

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def eda_context(eda_project: Path) -> EdaContext:
    """Context for the test project."""
    return create_context(eda_project)
