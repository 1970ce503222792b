# Copyright (c) Syntropy Systems
"""Tool runner with timeout enforcement and orphan prevention."""
from __future__ import annotations

import contextlib
import ctypes
import logging
import os
import shutil
import signal
import subprocess
import sys
import time
from typing import TYPE_CHECKING

from edaqor.errors import ToolUnavailableError
from edaqor.models import ToolOutput

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Exit code recorded for a run killed by the wall-clock limit (as GNU timeout)
TIMEOUT_EXIT_CODE = 124


def setup_pdeathsig() -> None:
    """Set PDEATHSIG so the tool dies when edaqor dies.

    Only works on Linux.
    """
    if sys.platform != "linux":
        return
    try:
        libc = ctypes.CDLL("libc.so.6", use_errno=True)
        pr_set_pdeathsig = 1
        libc.prctl(pr_set_pdeathsig, signal.SIGKILL)
    except (AttributeError, OSError):
        return


class ToolRunner:
    """Runs one tool invocation to completion or timeout.

    Features:
    - Uses start_new_session=True so the whole process group can be killed
    - Sets PDEATHSIG on Linux to prevent orphans
    - Captures stdout and stderr separately
    - Sends SIGTERM, then SIGKILL after a grace period, on timeout
    """

    command_argv: list[str]
    workdir: Path
    timeout: float
    kill_grace_period: float
    env: dict[str, str]
    _process: subprocess.Popen[str] | None

    def __init__(
        self,
        command_argv: list[str],
        workdir: Path,
        timeout: float,
        kill_grace_period: float = 5.0,
        env: dict[str, str] | None = None,
    ) -> None:
        """Initialize a tool runner.

        Args:
            command_argv: Command as list of argv tokens (no shell)
            workdir: Working directory to run the command in
            timeout: Wall-clock limit in seconds
            kill_grace_period: Seconds between SIGTERM and SIGKILL
            env: Additional environment variables

        """
        self.command_argv = command_argv
        self.workdir = workdir
        self.timeout = timeout
        self.kill_grace_period = kill_grace_period

        self.env = os.environ.copy()
        if env:
            self.env.update(env)

        self._process = None

    def run(self) -> ToolOutput:
        """Start the process and block until it exits or times out."""
        logger.debug("Spawning %s in %s", self.command_argv, self.workdir)
        started = time.monotonic()
        try:
            self._process = subprocess.Popen(  # noqa: S603
                self.command_argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=self.env,
                cwd=str(self.workdir),
                start_new_session=True,
                preexec_fn=setup_pdeathsig if sys.platform == "linux" else None,  # noqa: PLW1509
            )
        except OSError as e:
            msg = f"Failed to start {self.command_argv[0]}: {e}"
            raise ToolUnavailableError(msg) from e

        timed_out = False
        try:
            stdout, stderr = self._process.communicate(timeout=self.timeout)
            exit_code = self._process.returncode
        except subprocess.TimeoutExpired:
            timed_out = True
            logger.warning(
                "%s exceeded %.0fs, terminating", self.command_argv[0], self.timeout
            )
            self._kill_group()
            stdout, stderr = self._process.communicate()
            exit_code = TIMEOUT_EXIT_CODE

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.debug("Exit code %s after %d ms", exit_code, duration_ms)

        return ToolOutput(
            stdout=stdout or "",
            stderr=stderr or "",
            exit_code=exit_code,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )

    def _kill_group(self) -> None:
        """SIGTERM the process group, SIGKILL it if still alive after grace."""
        if self._process is None:
            return

        try:
            pgid = os.getpgid(self._process.pid)
        except (OSError, ProcessLookupError):
            return

        with contextlib.suppress(OSError, ProcessLookupError):
            os.killpg(pgid, signal.SIGTERM)

        deadline = time.time() + self.kill_grace_period
        while time.time() < deadline:
            if self._process.poll() is not None:
                return
            time.sleep(0.1)

        with contextlib.suppress(OSError, ProcessLookupError):
            os.killpg(pgid, signal.SIGKILL)

    @property
    def pid(self) -> int | None:
        """Get the process ID."""
        if self._process is None:
            return None
        return self._process.pid


def find_tool(name: str) -> str | None:
    """Resolve a tool name or path to an executable, or None."""
    return shutil.which(name)


def probe_version(name: str, timeout: float) -> str | None:
    """Run ``<tool> -V`` and return its first output line, or None."""
    tool_path = find_tool(name)
    if tool_path is None:
        return None
    try:
        result = subprocess.run(  # noqa: S603
            [tool_path, "-V"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Version probe of %s failed: %s", tool_path, e)
        return None
    if result.returncode != 0:
        logger.debug("Version probe of %s exited %d", tool_path, result.returncode)
        return None
    output = result.stdout.strip() or result.stderr.strip()
    return output.splitlines()[0] if output else ""


def require_tool(name: str, timeout: float) -> tuple[str, str]:
    """Return (path, version) of a responsive tool or raise ToolUnavailableError."""
    tool_path = find_tool(name)
    if tool_path is None:
        msg = (
            f"{name} not found. Please install Yosys and ensure it is on your "
            "PATH, or set 'yosys' in .eda/config.yaml."
        )
        raise ToolUnavailableError(msg)

    version = probe_version(tool_path, timeout)
    if version is None:
        msg = (
            f"{tool_path} did not answer '-V' within {timeout:g}s. "
            "Check that the Yosys installation works."
        )
        raise ToolUnavailableError(msg)
    return tool_path, version
