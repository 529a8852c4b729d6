"""Allow/deny rule sets built on path globs.

A rule set is a JSON document:

    {
      "schema_version": 1,
      "default": "deny",
      "rules": [
        {"action": "deny", "pattern": "secrets/**"},
        {"action": "allow", "pattern": "**/*.md"}
      ]
    }

Rules are evaluated in order and the first matching rule decides. Paths that
match no rule get `default` ("deny" when omitted).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

from .errors import ExecFailureError
from .glob import match_path_glob, normalize_repo_relative_path, validate_path_glob
from .result import MatchResult


def _schema_path() -> Path:
    # globmatch/rules.py -> globmatch/schemas/rules.schema.json
    return Path(__file__).resolve().parent / "schemas" / "rules.schema.json"


def _load_schema(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExecFailureError(f"Failed to read JSON schema: {str(path)!r}") from exc

    try:
        data = json.loads(raw)
    except Exception as exc:  # noqa: BLE001
        raise ExecFailureError(f"Invalid JSON schema: {str(path)!r}: {exc}") from exc

    if not isinstance(data, dict):
        raise ExecFailureError(
            f"Invalid JSON schema: {str(path)!r}: root must be object"
        )
    return data


def _format_path(error: jsonschema.ValidationError) -> str:
    if not error.path:
        return "$"
    parts = []
    for p in error.path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append("." + str(p))
    return "$" + "".join(parts)


@dataclass(frozen=True)
class Rule:
    allow: bool
    pattern: str


@dataclass(frozen=True)
class RuleSet:
    rules: tuple[Rule, ...]
    default_allow: bool = False

    def decide(self, path: str) -> bool:
        p = normalize_repo_relative_path(path)
        if not p:
            return False
        for rule in self.rules:
            if match_path_glob(p, rule.pattern) is MatchResult.MATCHED:
                return rule.allow
        return self.default_allow

    def filter(self, paths: list[str]) -> list[str]:
        """Return sorted, unique normalized paths the rule set allows."""

        allowed: set[str] = set()
        for raw in paths:
            p = normalize_repo_relative_path(raw)
            if p and self.decide(p):
                allowed.add(p)
        return sorted(allowed)


def parse_rule_set(payload: object) -> RuleSet:
    if not isinstance(payload, dict):
        raise ExecFailureError("Rule set JSON must be an object")

    schema_path = _schema_path()
    schema = _load_schema(schema_path)

    try:
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)
        validator = validator_cls(schema)
    except Exception as exc:  # noqa: BLE001
        raise ExecFailureError(f"Invalid JSON schema: {schema_path}: {exc}") from exc

    schema_errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
    if schema_errors:
        rendered = "; ".join(
            f"{_format_path(e)}: {e.message}" for e in schema_errors[:8]
        )
        more = "" if len(schema_errors) <= 8 else f" (+{len(schema_errors) - 8} more)"
        raise ExecFailureError(f"Rule set validation failed: {rendered}{more}")

    rules: list[Rule] = []
    for i, entry in enumerate(payload["rules"]):
        try:
            pattern = validate_path_glob(entry["pattern"])
        except ExecFailureError as exc:
            raise ExecFailureError(f"rules[{i}].pattern: {exc}") from exc
        rules.append(Rule(allow=entry["action"] == "allow", pattern=pattern))

    return RuleSet(
        rules=tuple(rules),
        default_allow=payload.get("default", "deny") == "allow",
    )


def load_rule_set(path: str | Path) -> RuleSet:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExecFailureError(f"Failed to read rule set: {str(p)!r}") from exc

    try:
        payload = json.loads(raw)
    except Exception as exc:  # noqa: BLE001
        raise ExecFailureError(f"Invalid rule set JSON: {str(p)!r}: {exc}") from exc

    return parse_rule_set(payload)
