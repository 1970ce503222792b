# Copyright (c) Syntropy Systems
"""Failure kinds reported by edaqor commands."""
from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Every way a command can fail."""

    SCRIPT_NOT_FOUND = "ScriptNotFound"
    INVALID_PROJECT_STRUCTURE = "InvalidProjectStructure"
    TOOL_UNAVAILABLE = "ToolUnavailable"
    TOOL_EXECUTION_TIMEOUT = "ToolExecutionTimeout"
    PARSE_FAILURE = "ParseFailure"
    NO_LAST_RUN = "NoLastRun"
    NO_BASELINE = "NoBaseline"
    MALFORMED_PERSISTED_RECORD = "MalformedPersistedRecord"
    FILE_SYSTEM_ERROR = "FileSystemError"


class EdaError(Exception):
    """Base class for reported failures.

    Commands catch this, print the message and exit with status 1.
    """

    kind: FailureKind = FailureKind.FILE_SYSTEM_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ScriptNotFoundError(EdaError):
    kind = FailureKind.SCRIPT_NOT_FOUND


class InvalidProjectStructureError(EdaError):
    kind = FailureKind.INVALID_PROJECT_STRUCTURE


class ToolUnavailableError(EdaError):
    kind = FailureKind.TOOL_UNAVAILABLE


class ToolExecutionTimeoutError(EdaError):
    kind = FailureKind.TOOL_EXECUTION_TIMEOUT


class ParseFailureError(EdaError):
    kind = FailureKind.PARSE_FAILURE


class NoLastRunError(EdaError):
    kind = FailureKind.NO_LAST_RUN


class NoBaselineError(EdaError):
    kind = FailureKind.NO_BASELINE


class MalformedRecordError(EdaError):
    kind = FailureKind.MALFORMED_PERSISTED_RECORD


class FileSystemError(EdaError):
    kind = FailureKind.FILE_SYSTEM_ERROR


class RecipeExistsError(FileSystemError):
    """Raised by `recipe init` when the default recipe is already there."""
