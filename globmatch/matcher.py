"""Glob matching over code-point sequences.

`match_codepoints` is the generic engine; `match`, `match_encoded` and
`match_raw_bytes` adapt `str` and `bytes` inputs to it.

Metacharacters:

- `?` matches exactly one code point.
- `*` matches any run of code points, including the empty one.
- `[...]` matches one code point from a bracket expression (see `charclass`).
- `\\` makes the following code point literal.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union

from .charclass import match_class, skip_class
from .encoding import decode_codepoints, raw_codepoints
from .result import MatchResult


STAR = ord("*")
QUESTION = ord("?")
LBRACKET = ord("[")
BACKSLASH = ord("\\")

Separator = Union[str, bytes, int, None]


def _separator_codepoint(separator: Separator) -> Optional[int]:
    if separator is None:
        return None
    if isinstance(separator, int):
        return separator
    if len(separator) != 1:
        raise ValueError(f"separator must be a single character: {separator!r}")
    if isinstance(separator, bytes):
        return separator[0]
    return ord(separator)


def match_escape(
    pattern: Sequence[int], pos: int, ch: int
) -> tuple[MatchResult, int]:
    """Match the code point escaped by the backslash at `pattern[pos]`."""

    pos += 1
    if pos >= len(pattern):
        return MatchResult.SYNTAX_ERROR, pos
    if pattern[pos] != ch:
        return MatchResult.UNMATCHED, pos
    return MatchResult.MATCHED, pos + 1


def check_codepoints(
    pattern: Sequence[int], *, separator: Optional[int] = None
) -> Optional[MatchResult]:
    """Return SYNTAX_ERROR if the pattern is malformed, else None."""

    n = len(pattern)
    p = 0
    while p < n:
        c = pattern[p]
        if c == BACKSLASH:
            if p + 1 >= n:
                return MatchResult.SYNTAX_ERROR
            p += 2
        elif c == LBRACKET:
            verdict, p = skip_class(pattern, p + 1, separator=separator)
            if verdict is MatchResult.SYNTAX_ERROR:
                return verdict
        else:
            p += 1
    return None


def _advance(
    pattern: Sequence[int],
    text: Sequence[int],
    p: int,
    t: int,
    separator: Optional[int],
    pending: list[tuple[int, int]],
    failed_stars: set[tuple[int, int]],
) -> MatchResult:
    np_, nt = len(pattern), len(text)

    while p < np_ and t < nt:
        c = pattern[p]
        ch = text[t]

        if c == QUESTION:
            if ch == separator:
                return MatchResult.UNMATCHED
            p += 1
            t += 1

        elif c == STAR:
            # `**` behaves like `*`.
            while p + 1 < np_ and pattern[p + 1] == STAR:
                p += 1
            if (p, t) in failed_stars:
                return MatchResult.UNMATCHED
            failed_stars.add((p, t))
            # Retry later with the star swallowing one more code point.
            if ch != separator:
                pending.append((p, t + 1))
            p += 1

        elif c == LBRACKET:
            if ch == separator:
                return MatchResult.UNMATCHED
            verdict, p = match_class(pattern, p + 1, ch, separator=separator)
            if verdict is not MatchResult.MATCHED:
                return verdict
            t += 1

        elif c == BACKSLASH:
            verdict, p = match_escape(pattern, p, ch)
            if verdict is not MatchResult.MATCHED:
                return verdict
            t += 1

        else:
            if c != ch:
                return MatchResult.UNMATCHED
            p += 1
            t += 1

    while p < np_ and pattern[p] == STAR:
        p += 1

    if p == np_ and t == nt:
        return MatchResult.MATCHED
    return MatchResult.UNMATCHED


def match_codepoints(
    pattern: Sequence[int],
    text: Sequence[int],
    *,
    separator: Optional[int] = None,
) -> MatchResult:
    """Match `text` against `pattern`, both sequences of code points.

    `*` is expanded shortest-first. Alternatives are kept on an explicit
    worklist of (pattern, text) positions, popped most-recent-first, so the
    search order is the same as a recursive matcher without using the call
    stack. A star that already failed at a text position is not retried.
    """

    error = check_codepoints(pattern, separator=separator)
    if error is not None:
        return error

    pending: list[tuple[int, int]] = [(0, 0)]
    failed_stars: set[tuple[int, int]] = set()
    while pending:
        p, t = pending.pop()
        result = _advance(pattern, text, p, t, separator, pending, failed_stars)
        if result is not MatchResult.UNMATCHED:
            return result
    return MatchResult.UNMATCHED


def check_pattern(
    pattern: Union[str, bytes], *, separator: Separator = None
) -> Optional[MatchResult]:
    """Validate pattern structure without matching anything.

    Returns SYNTAX_ERROR for a malformed class or a trailing backslash, and
    None for a well-formed pattern. `bytes` patterns are checked byte-per-unit.
    """

    if isinstance(pattern, bytes):
        codepoints: Sequence[int] = raw_codepoints(pattern)
    else:
        codepoints = [ord(c) for c in pattern]
    return check_codepoints(codepoints, separator=_separator_codepoint(separator))


def match(pattern: str, text: str, *, separator: Separator = None) -> MatchResult:
    """Match two already-decoded strings."""

    return match_codepoints(
        [ord(c) for c in pattern],
        [ord(c) for c in text],
        separator=_separator_codepoint(separator),
    )


def match_encoded(
    pattern: bytes,
    text: bytes,
    *,
    encoding: Optional[str] = None,
    separator: Separator = None,
) -> MatchResult:
    """Decode both byte strings, then match them code point by code point.

    `encoding` defaults to the locale's preferred encoding. Undecodable input
    yields ENCODING_ERROR before any matching is attempted.
    """

    try:
        pattern_cps = decode_codepoints(pattern, encoding)
        text_cps = decode_codepoints(text, encoding)
    except (UnicodeDecodeError, MemoryError):
        return MatchResult.ENCODING_ERROR

    return match_codepoints(
        pattern_cps, text_cps, separator=_separator_codepoint(separator)
    )


def match_raw_bytes(
    pattern: bytes, text: bytes, *, separator: Separator = None
) -> MatchResult:
    """Match byte strings with every byte treated as one unit.

    No validation is performed: any byte value is accepted on both sides.
    """

    return match_codepoints(
        raw_codepoints(pattern),
        raw_codepoints(text),
        separator=_separator_codepoint(separator),
    )
