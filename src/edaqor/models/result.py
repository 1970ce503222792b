# Copyright (c) Syntropy Systems
"""Pydantic models for run results, baselines and verification outcomes."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from .base import EdaBaseModel


class ToolOutput(EdaBaseModel):
    """Captured output of a single tool invocation."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int
    duration_ms: int = 0
    timed_out: bool = False

    @property
    def combined(self) -> str:
        """Stdout followed by stderr, the buffer metrics are scraped from."""
        return f"{self.stdout}\n{self.stderr}"


class Metrics(EdaBaseModel):
    """QoR metrics scraped from synthesis output."""

    cells: int = Field(ge=0)
    levels: int = Field(ge=0)
    area_um2: Optional[float] = Field(default=None, ge=0)
    warnings: Optional[int] = Field(default=None, ge=0)


class Provenance(EdaBaseModel):
    """Where and with what a result was produced."""

    tool: Literal["yosys"] = "yosys"
    tool_version: str
    git_commit: Optional[str] = None
    timestamp_utc: str
    host: str
    os: str
    edaqor_version: str


class RunInfo(EdaBaseModel):
    """How the tool was invoked."""

    script_path: str
    seed: Optional[int] = None
    cwd: str
    cmd: str
    duration_ms: int
    exit_code: int


class Artifacts(EdaBaseModel):
    """Files produced by a run."""

    log_path: str
    output_netlist: Optional[str] = None


class Result(EdaBaseModel):
    """Last-run record stored in .eda/last_run/result.json."""

    provenance: Provenance
    run: RunInfo
    metrics: Metrics
    artifacts: Artifacts


class BaselineRunInfo(EdaBaseModel):
    """Subset of RunInfo kept with a baseline."""

    script_path: str
    seed: Optional[int] = None


class Baseline(EdaBaseModel):
    """Reference metrics stored in .eda/baseline.json."""

    metrics: Metrics
    timestamp_utc: str
    run_info: BaselineRunInfo

    @classmethod
    def from_result(cls, result: Result) -> Baseline:
        """Reduce a result to the snapshot used as regression reference."""
        return cls(
            metrics=result.metrics.model_copy(),
            timestamp_utc=result.provenance.timestamp_utc,
            run_info=BaselineRunInfo(
                script_path=result.run.script_path,
                seed=result.run.seed,
            ),
        )


class CellsComparison(EdaBaseModel):
    """Cell count before and after."""

    base: int
    now: int
    delta: int
    delta_pct: Optional[float] = None


class LevelsComparison(EdaBaseModel):
    """Logic depth before and after."""

    base: int
    now: int
    delta: int


class VerificationOutcome(EdaBaseModel):
    """Verdict of comparing the last run against the baseline."""

    accepted: bool
    cells: CellsComparison
    levels: LevelsComparison
    message: str
