"""
Exception hierarchy for Task Squad stores.
Stores raise these internally and resolve them at the operation boundary:
missing preconditions are dropped silently; rejected input and remote failures
become error toasts.
"""
from __future__ import annotations


class TaskSquadException(Exception):
    """Base exception for all Task Squad domain errors."""

    def __init__(self, detail: str, error_code: str | None = None) -> None:
        self.detail = detail
        self.error_code = error_code or "TASKSQUAD_ERROR"
        super().__init__(detail)


class ValidationError(TaskSquadException):
    """A required precondition is missing (identity, team id, required field)."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail=detail, error_code="VALIDATION_ERROR")


class RemoteError(TaskSquadException):
    """The remote store rejected an operation or returned an unusable payload."""

    def __init__(self, detail: str, *, table: str | None = None) -> None:
        self.table = table
        super().__init__(detail=detail, error_code="REMOTE_ERROR")


class InvalidInputError(TaskSquadException):
    """Caller input carries a value the target table cannot take."""

    def __init__(self, detail: str, *, table: str | None = None) -> None:
        self.table = table
        super().__init__(detail=detail, error_code="INVALID_INPUT")
