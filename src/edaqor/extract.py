# Copyright (c) Syntropy Systems
"""Scrape QoR metrics from Yosys output.

The rules are plain regular expressions over the human-readable ``stat``
report, so they are bundled in a :class:`StatPatterns` value. A different
Yosys release that words its report differently gets its own pattern set;
callers keep using :func:`extract_metrics`.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from edaqor.models import Metrics

if TYPE_CHECKING:
    from edaqor.models import ToolOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatPatterns:
    """One regex per metric; group 1 captures the number."""

    cells: re.Pattern[str]
    levels: re.Pattern[str]
    area: re.Pattern[str]
    warnings: re.Pattern[str]


YOSYS_STAT_PATTERNS = StatPatterns(
    cells=re.compile(r"Number of cells:\s*(\d+)", re.IGNORECASE | re.ASCII),
    levels=re.compile(r"Longest path \(levels\):\s*(\d+)", re.IGNORECASE | re.ASCII),
    area=re.compile(
        r"Chip area for module.*?:\s*(\d+(?:\.\d+)?)\s*um²", re.IGNORECASE | re.ASCII
    ),
    warnings=re.compile(r"Warning:\s*(\d+)", re.IGNORECASE | re.ASCII),
)


class MetricsExtractor(Protocol):
    def extract(self, text: str) -> Metrics | None:
        ...


class PatternExtractor:
    """Extract metrics with a fixed set of patterns."""

    patterns: StatPatterns

    def __init__(self, patterns: StatPatterns = YOSYS_STAT_PATTERNS) -> None:
        self.patterns = patterns

    def extract(self, text: str) -> Metrics | None:
        """Return metrics found in ``text``, or None if it is not understood.

        Cells and levels are required; either one missing means the output
        format was not recognized, which is different from a zero count.
        Area is optional and stays None when absent. Every ``Warning: N``
        adds N to the warning total, which is 0 when there are none.
        """
        cells = _first_int(self.patterns.cells, text)
        levels = _first_int(self.patterns.levels, text)
        if cells is None or levels is None:
            logger.debug("No match for cells=%s levels=%s", cells, levels)
            return None

        area_match = self.patterns.area.search(text)
        area_um2 = float(area_match.group(1)) if area_match else None

        warnings = sum(int(m.group(1)) for m in self.patterns.warnings.finditer(text))

        return Metrics(
            cells=cells,
            levels=levels,
            area_um2=area_um2,
            warnings=warnings,
        )


def _first_int(pattern: re.Pattern[str], text: str) -> int | None:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def extract_metrics(
    output: ToolOutput,
    extractor: MetricsExtractor | None = None,
) -> Metrics | None:
    """Extract metrics from stdout followed by stderr of a tool run."""
    if extractor is None:
        extractor = PatternExtractor()
    return extractor.extract(output.combined)
