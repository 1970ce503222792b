# Copyright (c) Syntropy Systems
"""Best-effort collection of where a result came from."""
from __future__ import annotations

import logging
import platform
import shutil
import socket
import subprocess
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from edaqor import __version__
from edaqor.models import Provenance
from edaqor.runner import probe_version

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def utcnow() -> str:
    """Get current UTC time as ISO format string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _run_command(
    argv: list[str],
    *,
    cwd: Path | None = None,
    timeout: float,
) -> subprocess.CompletedProcess[str] | None:
    cmd_path = shutil.which(argv[0])
    if cmd_path is None:
        return None
    try:
        return subprocess.run(  # noqa: S603
            [cmd_path, *argv[1:]],
            capture_output=True,
            text=True,
            cwd=str(cwd) if cwd is not None else None,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None


def capture_git_commit(cwd: Path | None = None) -> str | None:
    """Return HEAD's commit hash, or None outside a git checkout."""
    result = _run_command(["git", "rev-parse", "HEAD"], cwd=cwd, timeout=5)
    if result is None or result.returncode != 0:
        return None
    commit = result.stdout.strip()
    return commit or None


def platform_string() -> str:
    """Platform and architecture, e.g. ``linux-x86_64``."""
    return f"{platform.system().lower()}-{platform.machine().lower()}"


def collect_provenance(
    tool: str,
    *,
    cwd: Path | None = None,
    probe_timeout: float = 5,
) -> Provenance:
    """Collect provenance for a run. Unavailable fields degrade, never fail."""
    tool_version = probe_version(tool, probe_timeout)
    if tool_version is None:
        logger.debug("Could not read %s version", tool)

    return Provenance(
        tool="yosys",
        tool_version=tool_version or "unknown",
        git_commit=capture_git_commit(cwd),
        timestamp_utc=utcnow(),
        host=socket.gethostname(),
        os=platform_string(),
        edaqor_version=__version__,
    )
