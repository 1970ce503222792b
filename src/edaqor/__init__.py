"""
edaqor - Reproducible Yosys runs with QoR regression gating.

Run a recipe, seed a baseline, verify the next run against it.
"""

__version__ = "0.7.0"

from edaqor.extract import extract_metrics  # noqa: E402
from edaqor.verify import compare_metrics  # noqa: E402

__all__ = ["compare_metrics", "extract_metrics", "__version__"]
