"""Built-in self-test table for `globmatch selftest`.

Cases are grouped; a blank line is printed between groups. Every case is run
through the decoding entry point with UTF-8, so the non-ASCII group exercises
multi-byte input.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from .matcher import match_encoded
from .result import MatchResult

M = MatchResult.MATCHED
U = MatchResult.UNMATCHED
E = MatchResult.SYNTAX_ERROR


@dataclass(frozen=True)
class Case:
    pattern: str
    text: str
    expected: MatchResult


def _group(*cases: tuple[str, str, MatchResult]) -> tuple[Case, ...]:
    return tuple(Case(p, t, e) for p, t, e in cases)


SELFTEST_GROUPS: tuple[tuple[Case, ...], ...] = (
    _group(("main.?", "main.c", M)),
    _group(
        ("*", "main.c", M),
        ("***", "main.c", M),
        ("*.c", "main.c", M),
        ("*.js", "main.c", U),
    ),
    _group(
        ("*.[abc]", "main.c", M),
        ("*.[abc]", "main.b", M),
        ("*.[abc]", "main.d", U),
    ),
    _group(("*.[abc", "main.d", E)),
    _group(
        ("[][!]", "]", M),
        ("[][!]", "[", M),
        ("[][!]", "!", M),
    ),
    _group(
        ("[a-c]", "a", M),
        ("[a-c]", "b", M),
        ("[a-c]", "c", M),
        ("[a-c]", "A", U),
        ("[a-c]", "B", U),
        ("[a-c]", "C", U),
    ),
    _group(
        ("[A-Ca-c]", "A", M),
        ("[A-Ca-c]", "a", M),
        ("[A-Ca-c]", "B", M),
        ("[A-Ca-c]", "b", M),
        ("[A-Ca-c]", "C", M),
        ("[A-Ca-c]", "c", M),
    ),
    _group(
        ("Letter[0-9]", "Letter0", M),
        ("Letter[0-9]", "Letter1", M),
        ("Letter[0-9]", "Letter2", M),
        ("Letter[0-9]", "Letter9", M),
        ("Letter[0-9]", "Letters", U),
        ("Letter[0-9]", "Letter", U),
        ("Letter[0-9]", "Letter10", U),
        ("Letter[0-9", "Letter10", E),
        ("Letter[0-", "Letter10", E),
    ),
    _group(
        ("[--0]", "-", M),
        ("[--0]", ".", M),
        ("[--0]", "/", M),
        ("[--0]", "0", M),
    ),
    _group(
        ("[$--]", "$", M),
        ("[$--]", "(", M),
        ("[$--]", ")", M),
        ("[$--]", "-", M),
        ("[$--", "-", E),
    ),
    _group(
        ("[a-]", "-", M),
        ("[a-]", "a", M),
        ("[-c]", "-", M),
        ("[-c]", "c", M),
    ),
    _group(
        ("[]-]", "]", M),
        ("[]-]", "-", M),
        ("[]-", "-", E),
    ),
    _group(
        ("[[-b]", "[", M),
        ("[[-b]", "a", M),
        ("[[-b]", "b", M),
    ),
    _group(
        ("[!ab]", "a", U),
        ("[!ab]", "b", U),
        ("[!ab]", "c", M),
    ),
    _group(
        ("[!]a-]", "]", U),
        ("[!]a-]", "a", U),
        ("[!]a-]", "-", U),
        ("[!0-9]", "0", U),
        ("[!0-9]", "1", U),
        ("[!0-9]", "9", U),
        ("[!0-9]", "a", M),
    ),
    _group(
        ("?", "a", M),
        ("\\?", "a", U),
        ("\\?", "?", M),
        ("[", "[", E),
        ("\\[", "[", M),
        ("\\", "\\", E),
        ("\\\\", "\\", M),
    ),
    _group(
        ("[Пп]ривет, [Мм]ир", "Привет, Мир", M),
        ("\u06ff", "\u07ff", U),
    ),
)


@dataclass(frozen=True)
class Failure:
    case: Case
    actual: MatchResult


def run_selftest(out: TextIO | None = None) -> Failure | None:
    """Run every case, printing one line each; stop at the first failure."""

    stream = out if out is not None else sys.stdout
    for i, group in enumerate(SELFTEST_GROUPS):
        if i:
            stream.write("\n")
        for case in group:
            actual = match_encoded(
                case.pattern.encode("utf-8"),
                case.text.encode("utf-8"),
                encoding="utf-8",
            )
            stream.write(
                f"{case.pattern:>12} <=> {case.text:<10} => {actual.describe()}\n"
            )
            if actual is not case.expected:
                return Failure(case=case, actual=actual)
    return None
