from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from pathlayer.cli.paths import (
    handle_analyze_command,
    handle_discover_command,
    register_analyze_parser,
    register_discover_parser,
)
from pathlayer.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathlayer", description="PathLayer CLI")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log discovery progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    register_discover_parser(subparsers)
    register_analyze_parser(subparsers)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.INFO if args.verbose else logging.WARNING, json_output=False)

    if args.command == "discover":
        sys.exit(handle_discover_command(args))

    if args.command == "analyze":
        sys.exit(handle_analyze_command(args))

    parser.print_help()
    sys.exit(2)


if __name__ == "__main__":
    main()
