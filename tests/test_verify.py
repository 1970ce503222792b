# Copyright (c) Syntropy Systems
"""Tests for QoR verification and baseline seeding."""
from __future__ import annotations

from pathlib import Path

import pytest

from edaqor.errors import (
    FailureKind,
    MalformedRecordError,
    NoBaselineError,
    NoLastRunError,
)
from edaqor.models import (
    Artifacts,
    Baseline,
    Metrics,
    Provenance,
    Result,
    RunInfo,
)
from edaqor.project import EdaContext
from edaqor.store import read_baseline, write_record
from edaqor.verify import compare_metrics, seed_baseline, verify


def make_result(
    cells: int,
    levels: int,
    seed: int | None = 1,
    timestamp: str = "2026-01-01T00:00:00Z",
) -> Result:
    return Result(
        provenance=Provenance(
            tool_version="Yosys 0.40",
            git_commit=None,
            timestamp_utc=timestamp,
            host="builder",
            os="linux-x86_64",
            edaqor_version="0.7.0",
        ),
        run=RunInfo(
            script_path="/work/recipes/synth_resyn2.ys",
            seed=seed,
            cwd="/work",
            cmd="yosys -s /work/recipes/synth_resyn2.ys",
            duration_ms=1200,
            exit_code=0,
        ),
        metrics=Metrics(cells=cells, levels=levels, area_um2=None, warnings=0),
        artifacts=Artifacts(log_path="/work/.eda/logs/tool.log"),
    )


class TestCompareMetrics:
    """Tests for the acceptance rule."""

    def test_accept_fewer_cells(self) -> None:
        """Test that fewer cells at equal levels is accepted."""
        outcome = compare_metrics(
            Metrics(cells=100, levels=10), Metrics(cells=95, levels=10)
        )

        assert outcome.accepted is True
        assert outcome.cells.delta == -5
        assert outcome.cells.delta_pct == pytest.approx(-5.0)
        assert outcome.levels.delta == 0

    def test_reject_more_cells(self) -> None:
        """Test that a cell regression rejects even if levels held."""
        outcome = compare_metrics(
            Metrics(cells=100, levels=10), Metrics(cells=101, levels=10)
        )

        assert outcome.accepted is False
        assert outcome.cells.delta == 1

    def test_reject_more_levels(self) -> None:
        """Test that a levels regression rejects despite fewer cells."""
        outcome = compare_metrics(
            Metrics(cells=100, levels=10), Metrics(cells=90, levels=11)
        )

        assert outcome.accepted is False
        assert outcome.cells.delta == -10
        assert outcome.levels.delta == 1

    def test_accept_identical(self) -> None:
        """Test that no change is accepted."""
        outcome = compare_metrics(
            Metrics(cells=100, levels=10), Metrics(cells=100, levels=10)
        )

        assert outcome.accepted is True
        assert outcome.cells.delta_pct == 0.0

    def test_zero_cell_baseline(self) -> None:
        """Test that a zero-cell baseline gives no percentage."""
        outcome = compare_metrics(
            Metrics(cells=0, levels=0), Metrics(cells=3, levels=0)
        )

        assert outcome.cells.delta == 3
        assert outcome.cells.delta_pct is None
        assert outcome.accepted is False
        assert "n/a" in outcome.message

    def test_message(self) -> None:
        """Test the human-readable comparison."""
        outcome = compare_metrics(
            Metrics(cells=100, levels=10), Metrics(cells=95, levels=10)
        )

        assert "base: 100" in outcome.message
        assert "now: 95" in outcome.message
        assert "-5.00%" in outcome.message
        assert outcome.message.endswith("Accepted")

    def test_message_rejected(self) -> None:
        outcome = compare_metrics(
            Metrics(cells=100, levels=10), Metrics(cells=100, levels=12)
        )

        assert outcome.message.endswith("Rejected")


class TestSeedBaseline:
    """Tests for baseline seeding."""

    def test_requires_last_run(self, eda_context: EdaContext) -> None:
        """Test that seeding without a last run fails."""
        with pytest.raises(NoLastRunError) as exc_info:
            seed_baseline(eda_context)

        assert exc_info.value.kind is FailureKind.NO_LAST_RUN
        assert not eda_context.baseline_path.exists()

    def test_seed_copies_subset(self, eda_context: EdaContext) -> None:
        """Test that the baseline keeps metrics, timestamp and run info."""
        write_record(eda_context.result_path, make_result(200, 15, seed=7))

        baseline = seed_baseline(eda_context)

        assert baseline.metrics == Metrics(cells=200, levels=15, warnings=0)
        assert baseline.timestamp_utc == "2026-01-01T00:00:00Z"
        assert baseline.run_info.script_path == "/work/recipes/synth_resyn2.ys"
        assert baseline.run_info.seed == 7
        assert read_baseline(eda_context.baseline_path) == baseline

    def test_seed_is_idempotent(self, eda_context: EdaContext) -> None:
        """Test that seeding twice from one result yields the same baseline."""
        write_record(eda_context.result_path, make_result(200, 15))

        first = seed_baseline(eda_context)
        first_text = eda_context.baseline_path.read_text()
        second = seed_baseline(eda_context)

        assert first == second
        assert eda_context.baseline_path.read_text() == first_text

    def test_seed_overwrites(self, eda_context: EdaContext) -> None:
        """Test that seeding replaces an older baseline unconditionally."""
        write_record(eda_context.result_path, make_result(200, 15))
        seed_baseline(eda_context)

        write_record(eda_context.result_path, make_result(300, 20))
        seed_baseline(eda_context)

        assert read_baseline(eda_context.baseline_path).metrics.cells == 300


class TestVerify:
    """Tests for verify against stored records."""

    def test_no_baseline(self, eda_context: EdaContext) -> None:
        """Test verify before any baseline was seeded."""
        write_record(eda_context.result_path, make_result(200, 15))

        with pytest.raises(NoBaselineError):
            verify(eda_context)

    def test_no_last_run(self, eda_context: EdaContext) -> None:
        """Test verify with a baseline but no last run."""
        write_record(
            eda_context.baseline_path,
            Baseline.from_result(make_result(200, 15)),
        )

        with pytest.raises(NoLastRunError):
            verify(eda_context)

    def test_accepted(self, eda_context: EdaContext) -> None:
        """Test verify after an improving run."""
        write_record(eda_context.result_path, make_result(200, 15))
        seed_baseline(eda_context)
        write_record(eda_context.result_path, make_result(180, 15))

        outcome = verify(eda_context)

        assert outcome.accepted is True
        assert outcome.cells.delta == -20

    def test_malformed_baseline(self, eda_context: EdaContext) -> None:
        """Test that a baseline without numeric cells is reported."""
        write_record(eda_context.result_path, make_result(200, 15))
        path: Path = eda_context.baseline_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            '{"metrics": {"cells": "many", "levels": 3}, '
            '"timestamp_utc": "x", "run_info": {"script_path": "s"}}'
        )

        with pytest.raises(MalformedRecordError) as exc_info:
            verify(eda_context)

        assert "metrics.cells" in exc_info.value.message
