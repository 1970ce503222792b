# Copyright (c) Syntropy Systems
"""Tests for ToolRunner and Yosys probing."""

import sys
import time
from pathlib import Path

import pytest

from edaqor.errors import ToolUnavailableError
from edaqor.runner import (
    TIMEOUT_EXIT_CODE,
    ToolRunner,
    find_tool,
    probe_version,
    require_tool,
)


class TestToolRunner:
    """Tests for running a tool to completion."""

    def test_captures_streams(self, temp_dir: Path) -> None:
        """Test that stdout and stderr are captured separately."""
        runner = ToolRunner(
            [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"],
            workdir=temp_dir,
            timeout=30,
        )

        output = runner.run()

        assert output.stdout == "out\n"
        assert output.stderr == "err\n"
        assert output.exit_code == 0
        assert output.timed_out is False
        assert output.duration_ms >= 0

    def test_exit_code(self, temp_dir: Path) -> None:
        output = ToolRunner(
            [sys.executable, "-c", "import sys; sys.exit(3)"],
            workdir=temp_dir,
            timeout=30,
        ).run()

        assert output.exit_code == 3

    def test_runs_in_workdir(self, temp_dir: Path) -> None:
        output = ToolRunner(
            [sys.executable, "-c", "import os; print(os.getcwd())"],
            workdir=temp_dir,
            timeout=30,
        ).run()

        assert Path(output.stdout.strip()).resolve() == temp_dir

    def test_timeout_kills(self, temp_dir: Path) -> None:
        """Test that a run past the limit is killed with the synthetic code."""
        start = time.monotonic()
        output = ToolRunner(
            [
                sys.executable,
                "-c",
                "import sys, time; print('started'); sys.stdout.flush(); time.sleep(60)",
            ],
            workdir=temp_dir,
            timeout=1,
            kill_grace_period=1,
        ).run()
        elapsed = time.monotonic() - start

        assert output.timed_out is True
        assert output.exit_code == TIMEOUT_EXIT_CODE
        assert "started" in output.stdout
        assert elapsed < 30

    def test_missing_binary(self, temp_dir: Path) -> None:
        runner = ToolRunner(
            [str(temp_dir / "no-such-yosys")],
            workdir=temp_dir,
            timeout=5,
        )

        with pytest.raises(ToolUnavailableError, match="Failed to start"):
            runner.run()


class TestProbe:
    """Tests for tool discovery and version probing."""

    def test_probe_fake_yosys(self, fake_yosys: Path) -> None:
        assert probe_version(str(fake_yosys), timeout=10) == "Yosys 0.40+fake (git sha1 0000000)"

    def test_probe_missing(self) -> None:
        assert find_tool("edaqor-no-such-tool") is None
        assert probe_version("edaqor-no-such-tool", timeout=1) is None

    def test_require_missing(self) -> None:
        with pytest.raises(ToolUnavailableError, match="not found"):
            require_tool("edaqor-no-such-tool", timeout=1)

    def test_require_unresponsive(self, temp_dir: Path) -> None:
        """Test that a binary failing the version probe is unavailable."""
        broken = temp_dir / "yosys"
        broken.write_text("#!/bin/sh\nexit 1\n")
        broken.chmod(0o755)

        with pytest.raises(ToolUnavailableError, match="did not answer"):
            require_tool(str(broken), timeout=5)

    def test_require_fake(self, fake_yosys: Path) -> None:
        path, version = require_tool(str(fake_yosys), timeout=10)

        assert path == str(fake_yosys)
        assert version.startswith("Yosys")
