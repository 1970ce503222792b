# Copyright (c) Syntropy Systems
"""QoR verification against the baseline, and baseline seeding."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from edaqor.models import (
    Baseline,
    CellsComparison,
    LevelsComparison,
    VerificationOutcome,
)
from edaqor.store import read_baseline, read_result, write_record

if TYPE_CHECKING:
    from edaqor.models import Metrics
    from edaqor.project import EdaContext

logger = logging.getLogger(__name__)


def compare_metrics(base: Metrics, now: Metrics) -> VerificationOutcome:
    """Compare current metrics against the baseline.

    Accepted iff neither cells nor levels grew. There is no tolerance band
    and improving one metric does not offset a regression in the other.
    ``cells.delta_pct`` is None when the baseline has zero cells.
    """
    cells_delta = now.cells - base.cells
    cells_delta_pct = (
        cells_delta / base.cells * 100 if base.cells != 0 else None
    )
    levels_delta = now.levels - base.levels

    accepted = now.levels <= base.levels and now.cells <= base.cells

    cells = CellsComparison(
        base=base.cells,
        now=now.cells,
        delta=cells_delta,
        delta_pct=cells_delta_pct,
    )
    levels = LevelsComparison(base=base.levels, now=now.levels, delta=levels_delta)

    return VerificationOutcome(
        accepted=accepted,
        cells=cells,
        levels=levels,
        message=format_comparison(cells, levels, accepted),
    )


def format_delta_pct(delta_pct: float | None) -> str:
    if delta_pct is None:
        return "n/a"
    return f"{delta_pct:+.2f}%"


def format_comparison(
    cells: CellsComparison,
    levels: LevelsComparison,
    accepted: bool,  # noqa: FBT001
) -> str:
    lines = [
        f"cells  base: {cells.base}  now: {cells.now}  "
        f"delta: {cells.delta:+d} ({format_delta_pct(cells.delta_pct)})",
        f"levels base: {levels.base}  now: {levels.now}  "
        f"delta: {levels.delta:+d}",
        "Accepted" if accepted else "Rejected",
    ]
    return "\n".join(lines)


def verify(ctx: EdaContext) -> VerificationOutcome:
    """Load baseline and last run and compare them.

    Raises NoBaselineError, NoLastRunError or MalformedRecordError.
    """
    baseline = read_baseline(ctx.baseline_path)
    result = read_result(ctx.result_path)
    outcome = compare_metrics(baseline.metrics, result.metrics)
    logger.debug("Verification accepted=%s", outcome.accepted)
    return outcome


def seed_baseline(ctx: EdaContext) -> Baseline:
    """Overwrite the baseline with a snapshot of the last run."""
    result = read_result(ctx.result_path)
    baseline = Baseline.from_result(result)
    write_record(ctx.baseline_path, baseline)
    return baseline
