"""Bracket expressions (`[...]`).

Grammar, applied to the pattern right after the opening `[`:

- A leading `!` negates the class.
- The first item is always a member, so `[]]` and `[]-]` contain `]`.
- `-` between two items is a range; as the first item, or right before the
  closing `]`, it is a literal member.
- The class ends at the first `]` that is not the first item.

There is no escaping inside a class: `\\` is an ordinary member.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from .result import MatchResult


BANG = ord("!")
DASH = ord("-")
RBRACKET = ord("]")

# Never equal to a real code point; used to parse a class without a text.
NO_CODEPOINT = -1


def match_class(
    pattern: Sequence[int],
    pos: int,
    ch: int,
    *,
    separator: Optional[int] = None,
) -> tuple[MatchResult, int]:
    """Evaluate the class starting at `pattern[pos]` against `ch`.

    Returns the verdict and the pattern index just past the closing `]`.
    On SYNTAX_ERROR the returned index is where parsing stopped.
    """

    n = len(pattern)
    i = pos
    negate = False
    if i < n and pattern[i] == BANG:
        negate = True
        i += 1

    first = i
    matched = False
    while True:
        if i >= n:
            return MatchResult.SYNTAX_ERROR, i

        c = pattern[i]
        if c == RBRACKET and i != first:
            break

        if c == DASH:
            if i + 1 >= n:
                return MatchResult.SYNTAX_ERROR, i
            hi = pattern[i + 1]
            if i != first and hi != RBRACKET:
                lo = pattern[i - 1]
                if separator is not None and separator in (lo, hi):
                    return MatchResult.SYNTAX_ERROR, i
                # A reversed range adds nothing.
                if lo <= ch <= hi:
                    matched = True
                i += 2
                continue

        if c == ch:
            matched = True
        i += 1

    if negate:
        matched = not matched

    verdict = MatchResult.MATCHED if matched else MatchResult.UNMATCHED
    return verdict, i + 1


def skip_class(
    pattern: Sequence[int], pos: int, *, separator: Optional[int] = None
) -> tuple[MatchResult, int]:
    """Parse the class at `pattern[pos]` for structure only."""

    verdict, end = match_class(pattern, pos, NO_CODEPOINT, separator=separator)
    if verdict is MatchResult.SYNTAX_ERROR:
        return verdict, end
    return MatchResult.MATCHED, end
