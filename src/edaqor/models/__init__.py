# Copyright (c) Syntropy Systems
"""Pydantic models for edaqor records."""

from .base import EdaBaseModel
from .result import (
    Artifacts,
    Baseline,
    BaselineRunInfo,
    CellsComparison,
    LevelsComparison,
    Metrics,
    Provenance,
    Result,
    RunInfo,
    ToolOutput,
    VerificationOutcome,
)

__all__ = [
    "Artifacts",
    "Baseline",
    "BaselineRunInfo",
    "CellsComparison",
    "EdaBaseModel",
    "LevelsComparison",
    "Metrics",
    "Provenance",
    "Result",
    "RunInfo",
    "ToolOutput",
    "VerificationOutcome",
]
