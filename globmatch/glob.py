"""Repo-relative path globs.

Use POSIX-style paths (forward slashes) regardless of host OS.
"""

from __future__ import annotations

from functools import lru_cache

from .errors import ExecFailureError
from .matcher import check_pattern, match
from .result import MatchResult


def normalize_repo_relative_path(path: str) -> str:
    """Normalize a repo-relative path.

    - Strips leading './' and '/'
    - Converts backslashes to slashes
    - Collapses repeated slashes
    """

    p = (path or "").strip()
    if not p:
        return ""

    p = _strip_slashes(p.replace("\\", "/"))

    segs = [s for s in p.split("/") if s != ""]
    # Disallow dot-segments to avoid allowlist bypass surprises.
    if any(s in (".", "..") for s in segs):
        return ""

    return "/".join(segs)


def _strip_slashes(p: str) -> str:
    while p.startswith("./"):
        p = p[2:]
    while p.startswith("/"):
        p = p[1:]
    while "//" in p:
        p = p.replace("//", "/")
    return p


def _normalize_pattern(pattern: str) -> str:
    # Backslash is the escape character in patterns, so it is kept as is.
    return _strip_slashes((pattern or "").strip())


def _path_glob_error(pattern: str) -> bool:
    # Segments are matched one by one, so a '/' inside a class or after a
    # backslash leaves a broken segment behind.
    if check_pattern(pattern, separator="/") is MatchResult.SYNTAX_ERROR:
        return True
    return any(
        check_pattern(seg) is MatchResult.SYNTAX_ERROR for seg in pattern.split("/")
    )


def validate_path_glob(pattern: str) -> str:
    """Return the normalized pattern, or raise ExecFailureError."""

    p = _normalize_pattern(pattern)
    if not p:
        raise ExecFailureError(f"Empty glob pattern: {pattern!r}")
    if _path_glob_error(p):
        raise ExecFailureError(f"Invalid glob pattern: {pattern!r}")
    return p


def filter_paths_by_globs(paths: list[str], patterns: list[str]) -> list[str]:
    """Return sorted, unique paths matching any of the glob patterns."""

    pats = [validate_path_glob(x) for x in patterns if (x or "").strip()]
    if not pats:
        return []

    matched: set[str] = set()
    for raw in paths:
        p = normalize_repo_relative_path(raw)
        if not p:
            continue

        for pat in pats:
            if match_path_glob(p, pat) is MatchResult.MATCHED:
                matched.add(p)
                break

    return sorted(matched)


@lru_cache(maxsize=4096)
def match_path_glob(path: str, pattern: str) -> MatchResult:
    """Match a repo-relative path against a glob pattern.

    Semantics:
    - Split on '/'
    - `*` / `?` / `[...]` do not cross directory boundaries
    - `**` (as a full segment) matches zero or more path segments
    """

    path_norm = normalize_repo_relative_path(path)
    pat_norm = _normalize_pattern(pattern)
    if not pat_norm:
        return MatchResult.UNMATCHED
    if _path_glob_error(pat_norm):
        return MatchResult.SYNTAX_ERROR
    if not path_norm:
        return MatchResult.UNMATCHED

    path_segs = tuple(path_norm.split("/"))
    pat_segs = tuple(pat_norm.split("/"))

    @lru_cache(maxsize=None)
    def dp(i: int, j: int) -> bool:
        if j >= len(pat_segs):
            return i >= len(path_segs)

        seg = pat_segs[j]
        if seg == "**":
            # Match zero segments.
            if dp(i, j + 1):
                return True
            # Match one segment (if any) and keep '**'.
            return i < len(path_segs) and dp(i + 1, j)

        if i >= len(path_segs):
            return False

        if match(seg, path_segs[i], separator="/") is not MatchResult.MATCHED:
            return False

        return dp(i + 1, j + 1)

    return MatchResult.MATCHED if dp(0, 0) else MatchResult.UNMATCHED
