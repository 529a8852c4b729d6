from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "schema_version": 1,
        "default": "deny",
        "rules": [
            {"action": "deny", "pattern": "docs/private/**"},
            {"action": "allow", "pattern": "docs/**/*.md"},
            {"action": "allow", "pattern": "README.md"},
        ],
    }
    payload.update(overrides)
    return payload


class TestRuleSet(unittest.TestCase):
    def test_first_matching_rule_wins(self) -> None:
        from globmatch.rules import parse_rule_set

        rs = parse_rule_set(_payload())

        self.assertTrue(rs.decide("docs/a.md"))
        self.assertTrue(rs.decide("./docs/sub/b.md"))
        self.assertTrue(rs.decide("README.md"))
        self.assertFalse(rs.decide("docs/private/secret.md"))
        self.assertFalse(rs.decide("docs/a.txt"))
        self.assertFalse(rs.decide("docs/../README.md"))

    def test_default_allow(self) -> None:
        from globmatch.rules import parse_rule_set

        rs = parse_rule_set(
            _payload(default="allow", rules=[{"action": "deny", "pattern": "*.log"}])
        )

        self.assertTrue(rs.decide("main.c"))
        self.assertFalse(rs.decide("build.log"))
        self.assertTrue(rs.decide("logs/build.log"))

    def test_default_is_deny_when_omitted(self) -> None:
        from globmatch.rules import parse_rule_set

        payload = _payload(rules=[])
        del payload["default"]

        self.assertFalse(parse_rule_set(payload).decide("anything"))

    def test_filter_sorts_and_dedupes(self) -> None:
        from globmatch.rules import parse_rule_set

        rs = parse_rule_set(_payload())

        got = rs.filter(
            ["docs/z.md", "/docs/a.md", "docs/a.md", "docs/private/x.md", "x.c"]
        )
        self.assertEqual(got, ["docs/a.md", "docs/z.md"])

    def test_schema_violation_is_reported_with_path(self) -> None:
        from globmatch.errors import ExecFailureError
        from globmatch.rules import parse_rule_set

        with self.assertRaises(ExecFailureError) as ctx:
            parse_rule_set(_payload(rules=[{"action": "maybe", "pattern": "*"}]))
        self.assertIn("Rule set validation failed", str(ctx.exception))
        self.assertIn("$.rules[0].action", str(ctx.exception))

        with self.assertRaises(ExecFailureError):
            parse_rule_set(_payload(schema_version=2))

        with self.assertRaises(ExecFailureError):
            parse_rule_set(["not", "an", "object"])

    def test_malformed_pattern_is_rejected_at_load(self) -> None:
        from globmatch.errors import ExecFailureError
        from globmatch.rules import parse_rule_set

        with self.assertRaises(ExecFailureError) as ctx:
            parse_rule_set(
                _payload(
                    rules=[
                        {"action": "allow", "pattern": "*.md"},
                        {"action": "deny", "pattern": "[a-"},
                    ]
                )
            )
        self.assertIn("rules[1].pattern", str(ctx.exception))

    def test_slash_inside_class_is_rejected_at_load(self) -> None:
        from globmatch.errors import ExecFailureError
        from globmatch.rules import parse_rule_set

        for pattern in ("docs[/]a.md", "docs\\/a.md"):
            with self.assertRaises(ExecFailureError) as ctx:
                parse_rule_set(
                    _payload(rules=[{"action": "allow", "pattern": pattern}])
                )
            self.assertIn("rules[0].pattern", str(ctx.exception))


class TestLoadRuleSet(unittest.TestCase):
    def test_loads_from_file(self) -> None:
        from globmatch.rules import load_rule_set

        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "rules.json"
            p.write_text(json.dumps(_payload(), ensure_ascii=False), encoding="utf-8")

            rs = load_rule_set(p)

        self.assertEqual(len(rs.rules), 3)
        self.assertFalse(rs.rules[0].allow)
        self.assertEqual(rs.rules[1].pattern, "docs/**/*.md")

    def test_missing_or_invalid_file(self) -> None:
        from globmatch.errors import ExecFailureError
        from globmatch.rules import load_rule_set

        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ExecFailureError):
                load_rule_set(Path(td) / "missing.json")

            p = Path(td) / "broken.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ExecFailureError):
                load_rule_set(str(p))


if __name__ == "__main__":
    raise SystemExit(unittest.main())
