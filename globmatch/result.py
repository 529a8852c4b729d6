"""Match outcomes."""

from __future__ import annotations

from enum import Enum


class MatchResult(Enum):
    """Outcome of a single top-level match call.

    Errors are ordinary values: callers must inspect the result instead of
    relying on exceptions.
    """

    UNMATCHED = 0
    MATCHED = 1
    SYNTAX_ERROR = 2
    ENCODING_ERROR = 3

    @property
    def is_error(self) -> bool:
        return self in (MatchResult.SYNTAX_ERROR, MatchResult.ENCODING_ERROR)

    def describe(self) -> str:
        return _LABELS[self]


_LABELS: dict[MatchResult, str] = {
    MatchResult.UNMATCHED: "GLOB_UNMATCHED",
    MatchResult.MATCHED: "GLOB_MATCHED",
    MatchResult.SYNTAX_ERROR: "GLOB_SYNTAX_ERROR",
    MatchResult.ENCODING_ERROR: "GLOB_ENCODING_ERROR",
}


def describe_result(result: MatchResult) -> str:
    return result.describe()
