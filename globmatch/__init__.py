from .encoding import decode_codepoints, raw_codepoints
from .errors import ExecFailureError, ExitCode, GlobmatchError
from .glob import filter_paths_by_globs, match_path_glob, normalize_repo_relative_path
from .matcher import (
    check_pattern,
    match,
    match_codepoints,
    match_encoded,
    match_raw_bytes,
)
from .result import MatchResult, describe_result
from .rules import Rule, RuleSet, load_rule_set, parse_rule_set

__all__ = [
    "ExecFailureError",
    "ExitCode",
    "GlobmatchError",
    "MatchResult",
    "Rule",
    "RuleSet",
    "check_pattern",
    "decode_codepoints",
    "describe_result",
    "filter_paths_by_globs",
    "load_rule_set",
    "match",
    "match_codepoints",
    "match_encoded",
    "match_path_glob",
    "match_raw_bytes",
    "normalize_repo_relative_path",
    "parse_rule_set",
    "raw_codepoints",
]
