from __future__ import annotations

import argparse
import sys
from typing import Any, TextIO

from .config import expand_path, load_config, validate_config
from .errors import ReportError
from .pipeline import build_logger, run
from .style import STYLES, get_emphasizer


def apply_overrides(cfg: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    cfg = {
        **cfg,
        "report": {**cfg["report"]},
        "input": {**cfg["input"]},
        "run": {**cfg["run"]},
        "logging": {**cfg["logging"]},
    }

    if getattr(args, "style", None):
        cfg["report"]["style"] = args.style
    if getattr(args, "top_expenses", None) is not None:
        cfg["report"]["top_expenses"] = args.top_expenses
    if getattr(args, "encoding", None):
        cfg["input"]["encoding"] = args.encoding
    if getattr(args, "keep_going", False):
        cfg["run"]["fail_fast"] = False
    if getattr(args, "redact_logs", False):
        cfg["logging"]["redact"] = True

    verbose = getattr(args, "verbose", 0)
    if verbose == 1:
        cfg["logging"]["level"] = "INFO"
    elif verbose > 1:
        cfg["logging"]["level"] = "DEBUG"

    return validate_config(cfg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nordea-expenses",
        description="Income, expense and recurrent payment report for Nordea account exports",
    )
    parser.add_argument("files", nargs="*", metavar="file-path", help="Tab separated account export")
    parser.add_argument("--config", default="./config.yaml", help="Path to config yaml")
    parser.add_argument("--style", choices=sorted(STYLES), help="Emphasis style for headings")
    parser.add_argument("--top-expenses", type=int, help="Expenses listed per month")
    parser.add_argument("--encoding", help="Encoding of the export files")
    parser.add_argument("--keep-going", action="store_true", help="Continue with remaining files on errors")
    parser.add_argument("--redact-logs", action="store_true", help="Mask account and card numbers in logs")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        parser.print_usage(out)
        return 0

    try:
        cfg = apply_overrides(load_config(expand_path(args.config)), args)
    except ReportError as exc:
        print(f"invalid configuration: {exc}", file=out)
        return 2

    logger = build_logger(cfg["logging"]["level"], redact_logs=cfg["logging"]["redact"])

    try:
        result = run(
            args.files,
            out,
            get_emphasizer(cfg["report"]["style"]),
            top_expenses=cfg["report"]["top_expenses"],
            encoding=cfg["input"]["encoding"],
            fail_fast=cfg["run"]["fail_fast"],
            logger=logger,
        )
    except (OSError, UnicodeDecodeError, ReportError) as exc:
        print(f"run failed: {exc}", file=out)
        return 1

    if not result.ok:
        failed = ", ".join(path for path, _ in result.failures)
        print(f"run finished with errors: {failed}", file=out)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
