# Copyright (c) Syntropy Systems
"""Configuration management for edaqor."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import yaml

from edaqor.errors import FileSystemError, MalformedRecordError

logger = logging.getLogger(__name__)

EDA_DIR_NAME = ".eda"
LOGS_DIR_NAME = "logs"
LAST_RUN_DIR_NAME = "last_run"
RECIPES_DIR_NAME = "recipes"
RTL_DIR_NAME = "rtl"
BUILD_DIR_NAME = "build"
BASELINE_FILE = "baseline.json"
RESULT_FILE = "result.json"
LOG_FILE = "tool.log"
CONFIG_FILE = "config.yaml"

DEFAULT_RECIPE_NAME = "synth_resyn2.ys"


@dataclass
class EdaConfig:
    """Configuration for edaqor."""

    # Yosys binary name or path
    yosys: str = "yosys"

    # Wall-clock limit for a synthesis run (seconds)
    run_timeout: float = 30 * 60

    # Limit for `yosys -V` (seconds)
    probe_timeout: float = 5

    # Recipe used when `run` gets no script argument
    default_recipe: str = DEFAULT_RECIPE_NAME


def load_config(eda_dir: Path) -> EdaConfig:
    """Load configuration from .eda/config.yaml or defaults.

    Unknown keys are ignored; keys with the wrong type keep their default.
    """
    config = EdaConfig()
    config_path = eda_dir / CONFIG_FILE

    if not config_path.exists():
        return config

    try:
        with config_path.open("rb") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {config_path}: {e}"
        raise MalformedRecordError(msg) from e
    except OSError as e:
        msg = f"Error reading {config_path}: {e}"
        raise FileSystemError(msg) from e

    if not isinstance(raw, dict):
        msg = f"{config_path} must contain a mapping, got {type(raw).__name__}"
        raise MalformedRecordError(msg)
    data = cast("dict[str, object]", raw)

    yosys = data.get("yosys")
    if isinstance(yosys, str) and yosys:
        config.yosys = yosys
    run_timeout = data.get("run_timeout")
    if isinstance(run_timeout, (int, float)) and run_timeout > 0:
        config.run_timeout = float(run_timeout)
    probe_timeout = data.get("probe_timeout")
    if isinstance(probe_timeout, (int, float)) and probe_timeout > 0:
        config.probe_timeout = float(probe_timeout)
    default_recipe = data.get("default_recipe")
    if isinstance(default_recipe, str) and default_recipe:
        config.default_recipe = default_recipe

    logger.debug("Loaded config from %s: %s", config_path, config)
    return config
