"""CLI entrypoint for globmatch."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, NoReturn

from .errors import ExecFailureError, ExitCode
from .glob import filter_paths_by_globs
from .harness import run_selftest
from .matcher import match, match_encoded, match_raw_bytes
from .result import MatchResult
from .rules import load_rule_set


@dataclass(frozen=True)
class ParserExit(Exception):
    code: int
    message: str = ""


class ThrowingArgumentParser(argparse.ArgumentParser):
    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:  # type: ignore[override]
        if message:
            self._print_message(message, sys.stderr if status else sys.stdout)
        raise ParserExit(status, message or "")

    def error(self, message: str) -> NoReturn:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self._print_message(f"{self.prog}: error: {message}\n", sys.stderr)
        raise ParserExit(2, f"{self.prog}: error: {message}\n")


def parse_separator(value: str) -> str:
    if len(value) != 1:
        raise argparse.ArgumentTypeError("--separator must be a single character")
    return value


def build_parser() -> ThrowingArgumentParser:
    parser = ThrowingArgumentParser(prog="globmatch")
    sub = parser.add_subparsers(dest="command", required=True)

    m = sub.add_parser("match", help="Match one text against one pattern")
    m.add_argument("pattern")
    m.add_argument("text")
    m.add_argument(
        "--mode",
        choices=("text", "encoded", "raw"),
        default="text",
        help="text: match decoded arguments; encoded: decode bytes first; "
        "raw: one byte per unit",
    )
    m.add_argument("--encoding", default=None, help="Decoding for --mode encoded")
    m.add_argument("--separator", type=parse_separator, default=None)
    m.add_argument("--json", action="store_true", help="Print a JSON result")
    m.set_defaults(_handler=handle_match)

    f = sub.add_parser("filter", help="Print the paths a glob list or rule set allows")
    src = f.add_mutually_exclusive_group(required=True)
    src.add_argument("--rules", help="Path to a JSON allow/deny rule set")
    src.add_argument("--glob", action="append", dest="globs", help="Glob pattern")
    f.add_argument("paths", nargs="*", help="Paths to filter (default: stdin)")
    f.set_defaults(_handler=handle_filter)

    s = sub.add_parser("selftest", help="Run the built-in matcher checks")
    s.set_defaults(_handler=handle_selftest)

    return parser


def _exit_code_for(result: MatchResult) -> int:
    if result is MatchResult.MATCHED:
        return int(ExitCode.SUCCESS)
    if result is MatchResult.UNMATCHED:
        return int(ExitCode.NO_MATCH)
    return int(ExitCode.EXEC_FAILURE)


def handle_match(args: argparse.Namespace) -> int:
    if args.encoding is not None and args.mode != "encoded":
        raise ExecFailureError("--encoding requires --mode encoded")

    if args.mode == "text":
        result = match(args.pattern, args.text, separator=args.separator)
    else:
        # Recover the original argv bytes.
        pattern_b = os.fsencode(args.pattern)
        text_b = os.fsencode(args.text)
        if args.mode == "encoded":
            try:
                result = match_encoded(
                    pattern_b, text_b, encoding=args.encoding, separator=args.separator
                )
            except LookupError as exc:
                raise ExecFailureError(f"Unknown encoding: {args.encoding!r}") from exc
        else:
            sep_b = os.fsencode(args.separator) if args.separator is not None else None
            if sep_b is not None and len(sep_b) != 1:
                raise ExecFailureError("--separator must be a single byte in raw mode")
            result = match_raw_bytes(pattern_b, text_b, separator=sep_b)

    if args.json:
        payload: dict[str, Any] = {
            "pattern": args.pattern,
            "text": args.text,
            "mode": args.mode,
            "separator": args.separator,
            "result": result.describe(),
        }
        sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
        sys.stdout.write("\n")
    else:
        print(f"{args.pattern:>12} <=> {args.text:<10} => {result.describe()}")

    return _exit_code_for(result)


def _read_paths(args: argparse.Namespace) -> list[str]:
    if args.paths:
        return list(args.paths)
    return [line.rstrip("\r\n") for line in sys.stdin if line.strip()]


def handle_filter(args: argparse.Namespace) -> int:
    paths = _read_paths(args)
    if args.rules:
        allowed = load_rule_set(args.rules).filter(paths)
    else:
        allowed = filter_paths_by_globs(paths, list(args.globs))

    for p in allowed:
        print(p)
    return int(ExitCode.SUCCESS if allowed else ExitCode.NO_MATCH)


def handle_selftest(args: argparse.Namespace) -> int:
    failure = run_selftest(sys.stdout)
    if failure is not None:
        print(
            f"{failure.case.pattern!r} <=> {failure.case.text!r}: FAILURE! "
            f"Expected {failure.case.expected.describe()}."
        )
        return int(ExitCode.EXEC_FAILURE)
    return int(ExitCode.SUCCESS)


def main(argv: Iterable[str] | None = None) -> int:
    argv_list = list(argv) if argv is not None else sys.argv[1:]

    try:
        parser = build_parser()
        args = parser.parse_args(argv_list)
        handler = getattr(args, "_handler", None)
        if handler is None:
            raise ExecFailureError("No handler configured for this command")
        return handler(args)
    except ParserExit as exc:
        # argparse already printed usage/help.
        return int(ExitCode.SUCCESS if exc.code == 0 else ExitCode.EXEC_FAILURE)
    except ExecFailureError as exc:
        print(f"[globmatch] ERROR: {exc}", file=sys.stderr)
        return int(ExitCode.EXEC_FAILURE)
    except Exception as exc:  # noqa: BLE001
        print(f"[globmatch] ERROR: {type(exc).__name__}: {exc}", file=sys.stderr)
        return int(ExitCode.EXEC_FAILURE)


if __name__ == "__main__":
    raise SystemExit(main())
