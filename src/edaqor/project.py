# Copyright (c) Syntropy Systems
"""Project layout, directory validation and creation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from edaqor.config import (
    BASELINE_FILE,
    BUILD_DIR_NAME,
    EDA_DIR_NAME,
    LAST_RUN_DIR_NAME,
    LOG_FILE,
    LOGS_DIR_NAME,
    RECIPES_DIR_NAME,
    RESULT_FILE,
    RTL_DIR_NAME,
    EdaConfig,
    load_config,
)
from edaqor.errors import EdaError, FileSystemError

logger = logging.getLogger(__name__)


@dataclass
class EdaContext:
    """Paths and settings for one command invocation.

    Built once by the CLI callback and handed to every command, so nothing
    about the session lives in module state.
    """

    root: Path
    config: EdaConfig = field(default_factory=EdaConfig)
    verbose: bool = False
    # Set when .eda/config.yaml could not be loaded; config holds defaults
    config_error: EdaError | None = None

    @property
    def eda_dir(self) -> Path:
        return self.root / EDA_DIR_NAME

    @property
    def logs_dir(self) -> Path:
        return self.eda_dir / LOGS_DIR_NAME

    @property
    def last_run_dir(self) -> Path:
        return self.eda_dir / LAST_RUN_DIR_NAME

    @property
    def recipes_dir(self) -> Path:
        return self.root / RECIPES_DIR_NAME

    @property
    def rtl_dir(self) -> Path:
        return self.root / RTL_DIR_NAME

    @property
    def build_dir(self) -> Path:
        return self.root / BUILD_DIR_NAME

    @property
    def result_path(self) -> Path:
        return self.last_run_dir / RESULT_FILE

    @property
    def baseline_path(self) -> Path:
        return self.eda_dir / BASELINE_FILE

    @property
    def log_path(self) -> Path:
        return self.logs_dir / LOG_FILE

    @property
    def default_recipe_path(self) -> Path:
        return self.recipes_dir / self.config.default_recipe

    def resolve_script(self, script: Path | None) -> Path:
        """Resolve a script argument against the project root.

        No argument means the configured default recipe.
        """
        if script is None:
            return self.default_recipe_path
        script = script.expanduser()
        if not script.is_absolute():
            script = self.root / script
        return script.resolve()


def create_context(
    root: Path | None = None,
    *,
    verbose: bool = False,
    strict: bool = True,
) -> EdaContext:
    """Create the context for a project directory (default: cwd).

    With ``strict=False`` a broken config file does not raise; the context
    falls back to defaults and carries the error in ``config_error``.
    """
    if root is None:
        root = Path.cwd()
    root = root.resolve()
    try:
        config = load_config(root / EDA_DIR_NAME)
    except EdaError as e:
        if strict:
            raise
        logger.debug("Config not loaded: %s", e.message)
        return EdaContext(root=root, verbose=verbose, config_error=e)
    return EdaContext(root=root, config=config, verbose=verbose)


@dataclass
class ValidationReport:
    """Errors block an operation, warnings are only shown."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_directory_structure(ctx: EdaContext) -> ValidationReport:
    """Check that the project has the directories a run needs.

    rtl/ is required. A missing recipes/ is only a warning and build/ is
    optional.
    """
    report = ValidationReport()

    if not ctx.rtl_dir.exists():
        report.errors.append(
            "rtl/ directory not found. Create rtl/ and add your sources "
            "(e.g., rtl/top.v)"
        )
    elif not ctx.rtl_dir.is_dir():
        report.errors.append(f"{ctx.rtl_dir} exists but is not a directory")

    if not ctx.recipes_dir.exists():
        report.warnings.append(
            "recipes/ directory not found. Run 'edaqor recipe init' to create it"
        )
    elif not ctx.recipes_dir.is_dir():
        report.errors.append(f"{ctx.recipes_dir} exists but is not a directory")

    if ctx.build_dir.exists() and not ctx.build_dir.is_dir():
        report.warnings.append(f"{ctx.build_dir} exists but is not a directory")

    return report


def ensure_directories(ctx: EdaContext) -> None:
    """Create .eda/, its subdirectories, recipes/ and build/ if missing."""
    for directory in (
        ctx.eda_dir,
        ctx.logs_dir,
        ctx.last_run_dir,
        ctx.recipes_dir,
        ctx.build_dir,
    ):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to create directory {directory}: {e}"
            raise FileSystemError(msg) from e
    logger.debug("Project directories ready under %s", ctx.root)
