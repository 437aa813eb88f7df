"""Command-line entry point: classify the functions of a ``.ll`` file."""

from __future__ import annotations

import argparse
import logging
import sys

from .api import dump_module_report, dump_report
from .parser import read_source
from .report_types import ReportConfig, ReportStyle

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="instruction-classification",
        description="Classify LLVM IR instructions into Halstead operator categories",
    )
    parser.add_argument("file", help="Textual LLVM IR file (.ll), or - for stdin")
    parser.add_argument(
        "--function", "-f", default="", help="Only classify this function"
    )
    parser.add_argument(
        "--style",
        "-s",
        default=ReportStyle.PLAIN.value,
        choices=[style.value for style in ReportStyle],
        help="Report line layout (default: plain)",
    )
    parser.add_argument(
        "--aggregate",
        "-a",
        action="store_true",
        help="Print one report summed over the selected functions",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Omit the per-function header line",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log pipeline progress"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    config = ReportConfig(
        style=ReportStyle(args.style), show_function_header=not args.no_header
    )

    try:
        source = read_source(args.file)
        if args.aggregate:
            output = dump_module_report(source, args.function, config=config)
        else:
            output = dump_report(source, args.function, config=config)
    except (OSError, ValueError) as exc:
        logger.debug("Classification failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
