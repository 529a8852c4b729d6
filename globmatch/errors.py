"""Application errors and exit codes."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes (fixed contract).

    - 0: Matched / success
    - 1: Unmatched (well-formed input, no match)
    - 2: Execution failure (syntax or encoding error, invalid input)
    """

    SUCCESS = 0
    NO_MATCH = 1
    EXEC_FAILURE = 2


class GlobmatchError(Exception):
    """Base application error."""


class ExecFailureError(GlobmatchError):
    """Execution failed due to invalid input or runtime failure."""
