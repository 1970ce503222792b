# Copyright (c) Syntropy Systems
"""Persistence of the last-run result, the baseline and the tool log."""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from pydantic import ValidationError

from edaqor.errors import (
    FileSystemError,
    MalformedRecordError,
    NoBaselineError,
    NoLastRunError,
)
from edaqor.models import Baseline, Result

if TYPE_CHECKING:
    from pydantic import BaseModel

    from edaqor.models import ToolOutput

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", Baseline, Result)

LOG_SEPARATOR = "\n\n--- STDERR ---\n"


def write_text_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` so readers never see a partial file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                _ = f.write(text)
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
    except OSError as e:
        msg = f"Failed to write {path}: {e}"
        raise FileSystemError(msg) from e
    logger.debug("Wrote %s", path)


def write_record(path: Path, record: BaseModel) -> None:
    """Write a record as indented JSON."""
    write_text_atomic(path, record.model_dump_json(indent=2) + "\n")


def _read_record(path: Path, model: type[_ModelT], label: str) -> _ModelT:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = (
            f"{label.capitalize()} file {path} is malformed: "
            f"not UTF-8 text ({e.reason})"
        )
        raise MalformedRecordError(msg) from e
    except OSError as e:
        msg = f"Error reading {label} file {path}: {e}"
        raise FileSystemError(msg) from e

    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        msg = f"{label.capitalize()} file {path} is malformed: {problems}"
        raise MalformedRecordError(msg) from e


def read_result(path: Path) -> Result:
    """Load the last-run result or raise NoLastRunError."""
    if not path.is_file():
        msg = "No last run found. Run 'edaqor run' first."
        raise NoLastRunError(msg)
    return _read_record(path, Result, "result")


def read_baseline(path: Path) -> Baseline:
    """Load the baseline or raise NoBaselineError."""
    if not path.is_file():
        msg = (
            "No baseline found. Run 'edaqor baseline seed' after a successful "
            "'edaqor run'."
        )
        raise NoBaselineError(msg)
    return _read_record(path, Baseline, "baseline")


def format_log(output: ToolOutput) -> str:
    """Combined log text: stdout, a separator, then stderr."""
    return f"{output.stdout}{LOG_SEPARATOR}{output.stderr}"


def write_log(path: Path, output: ToolOutput) -> None:
    """Write the raw combined tool log."""
    write_text_atomic(path, format_log(output))
